"""quorumsim.sweep.rel_or_abs

A quantity that is either a proportion of some base not known yet (`Rel`)
or a literal count (`Abs`).

`"20%"` parses to `Rel(0.2)`, `"50"` to `Abs(50)`. Arithmetic and ordering
only work within one representation; mixing raises `RepresentationError`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from quorumsim.core.exceptions import RepresentationError, SpecFormatError
from quorumsim.sweep.quantity import COUNT, REAL_DIGITS, QuantityKind


class RelOrAbs(ABC):
    """Base of the `Rel | Abs` tagged union."""

    __slots__ = ()

    @abstractmethod
    def from_base(self, base: int) -> int:
        raise NotImplementedError

    def _mismatch(self, other: object, op: str) -> RepresentationError:
        return RepresentationError(f"cannot {op} {self!r} and {other!r}: relative and absolute quantities do not mix")

    def _key(self, other: object, op: str) -> tuple[float, float]:
        if type(self) is not type(other):
            raise self._mismatch(other, op)
        return (self.value, other.value)  # type: ignore[attr-defined]

    def __lt__(self, other: RelOrAbs) -> bool:
        a, b = self._key(other, "compare")
        return a < b

    def __le__(self, other: RelOrAbs) -> bool:
        a, b = self._key(other, "compare")
        return a <= b

    def __gt__(self, other: RelOrAbs) -> bool:
        a, b = self._key(other, "compare")
        return a > b

    def __ge__(self, other: RelOrAbs) -> bool:
        a, b = self._key(other, "compare")
        return a >= b

    @staticmethod
    def parse(token: str) -> RelOrAbs:
        t = token.strip()
        if t.endswith("%"):
            number = t[:-1].strip()
            try:
                perc = float(number)
            except ValueError:
                raise SpecFormatError(f"expected a percentage like '10%', found {token!r}") from None
            if not math.isfinite(perc) or perc < 0:
                raise SpecFormatError(f"expected a non-negative percentage, found {token!r}")
            return Rel(perc / 100)
        return Abs(COUNT.parse(t))


@dataclass(frozen=True, slots=True)
class Rel(RelOrAbs):
    proportion: float

    @property
    def value(self) -> float:
        return self.proportion

    def __add__(self, other: RelOrAbs) -> Rel:
        if not isinstance(other, Rel):
            raise self._mismatch(other, "add")
        return Rel(round(self.proportion + other.proportion, REAL_DIGITS))

    def from_base(self, base: int) -> int:
        return math.floor(base * self.proportion)

    def __str__(self) -> str:
        return f"{self.proportion * 100:g}%"


@dataclass(frozen=True, slots=True)
class Abs(RelOrAbs):
    count: int

    @property
    def value(self) -> int:
        return self.count

    def __add__(self, other: RelOrAbs) -> Abs:
        if not isinstance(other, Abs):
            raise self._mismatch(other, "add")
        return Abs(self.count + other.count)

    def from_base(self, base: int) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)


class RelOrAbsKind(QuantityKind[RelOrAbs]):
    """Sweep capability for `RelOrAbs`; the default step follows the sample's form."""

    name = "rel_or_abs"

    def parse(self, token: str) -> RelOrAbs:
        return RelOrAbs.parse(token)

    def copy(self, value: RelOrAbs) -> RelOrAbs:
        # frozen
        return value

    def default_step(self, sample: RelOrAbs) -> RelOrAbs:
        if isinstance(sample, Rel):
            return Rel(0.1)
        return Abs(1)


REL_OR_ABS = RelOrAbsKind()
