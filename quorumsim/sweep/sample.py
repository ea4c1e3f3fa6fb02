"""quorumsim.sweep.sample

Sweep specifications.

Grammar:
- `v`                 single value
- `v1,v2,...,vn`      explicit list, order kept
- `start-stop`        range, default step for the kind
- `start-stop:step`   range with explicit step

A range always yields `start`, then keeps adding the step while the result
does not exceed `stop`. If `start > stop` only `start` is produced.

Iteration is lazy and restartable: every `iter()` starts from the top.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from quorumsim.core.exceptions import SpecFormatError
from quorumsim.sweep.quantity import QuantityKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Number(Generic[T]):
    kind: QuantityKind[T]
    value: T

    def iterate(self) -> Iterator[T]:
        yield self.value

    def __iter__(self) -> Iterator[T]:
        return self.iterate()


@dataclass(frozen=True, slots=True)
class List(Generic[T]):
    kind: QuantityKind[T]
    values: tuple[T, ...]

    def iterate(self) -> Iterator[T]:
        yield from self.values

    def __iter__(self) -> Iterator[T]:
        return self.iterate()


@dataclass(frozen=True, slots=True)
class Range(Generic[T]):
    kind: QuantityKind[T]
    start: T
    stop: T
    step: T | None = None

    def effective_step(self) -> T:
        return self.step if self.step is not None else self.kind.default_step(self.start)

    def iterate(self) -> Iterator[T]:
        kind = self.kind
        step = self.effective_step()
        x = kind.copy(self.start)
        yield x
        while True:
            x = kind.add(x, step)
            if kind.exceeds(x, self.stop):
                return
            yield x

    def __iter__(self) -> Iterator[T]:
        return self.iterate()


SampleSpec = Union[Number[T], List[T], Range[T]]


def _token(kind: QuantityKind[T], token: str, text: str) -> T:
    if not token.strip():
        raise SpecFormatError(f"expected 'v', 'v1,v2,..' or 'start-stop[:step]', found {text!r}")
    try:
        return kind.parse(token)
    except SpecFormatError as e:
        raise SpecFormatError(f"bad value in {text!r}: {e}") from e


def parse(text: str, kind: QuantityKind[T]) -> SampleSpec[T]:
    """Parse one sweep string into a `Number`, `List` or `Range` over `kind`."""

    s = text.strip()
    if "-" in s:
        if ":" in s:
            parts = s.split(":")
            if len(parts) != 2:
                raise SpecFormatError(f"expected 'start-stop:step', found {text!r}")
            bounds, step_text = parts
            step: T | None = _token(kind, step_text, text)
        else:
            bounds, step = s, None

        ends = bounds.split("-")
        if len(ends) != 2:
            raise SpecFormatError(f"expected 'start-stop:step', found {text!r}")
        start = _token(kind, ends[0], text)
        stop = _token(kind, ends[1], text)

        # Mixed representations (e.g. "10%-50") fail here rather than mid-sweep.
        kind.exceeds(start, stop)
        if step is not None and not kind.exceeds(kind.add(start, step), start):
            raise SpecFormatError(f"range step must be positive, found {text!r}")
        return Range(kind=kind, start=start, stop=stop, step=step)

    if "," in s:
        return List(kind=kind, values=tuple(_token(kind, p, text) for p in s.split(",")))

    return Number(kind=kind, value=_token(kind, s, text))
