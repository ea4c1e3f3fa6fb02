"""quorumsim.sweep.quantity

Quantity capability.

A sweep needs four things from a value type:
- copy (so stepping never aliases the stored start)
- ordering (`exceeds` decides when a range stops)
- in-place addition (stepping)
- a default step, chosen by looking at a sample value

Each concrete kind implements these once. Values themselves stay plain:
`int` for counts, `float` for proportions, `RelOrAbs` for the dual quantity.
"""

from __future__ import annotations

import copy as _copy
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from quorumsim.core.exceptions import SpecFormatError

T = TypeVar("T")

# Stepping a float by 0.1 drifts (0.5 + 0.1 + 0.1 > 0.7); rounding keeps
# decimal-looking sweeps on their decimal grid.
REAL_DIGITS = 12


class QuantityKind(ABC, Generic[T]):
    name: str = "quantity"

    @abstractmethod
    def parse(self, token: str) -> T:
        raise NotImplementedError

    @abstractmethod
    def default_step(self, sample: T) -> T:
        raise NotImplementedError

    def copy(self, value: T) -> T:
        return _copy.copy(value)

    def add(self, value: T, step: T) -> T:
        out = self.copy(value)
        out += step  # type: ignore[operator]
        return out

    def exceeds(self, value: T, stop: T) -> bool:
        return value > stop  # type: ignore[operator]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CountKind(QuantityKind[int]):
    """Non-negative integer counts (nodes, group sizes, steps)."""

    name = "count"

    def parse(self, token: str) -> int:
        t = token.strip()
        if not (t.isascii() and t.isdigit()):
            raise SpecFormatError(f"expected a non-negative integer, found {token!r}")
        return int(t)

    def default_step(self, sample: int) -> int:
        return 1


class RealKind(QuantityKind[float]):
    """Real-valued quantities such as quorum proportions."""

    name = "real"

    def parse(self, token: str) -> float:
        t = token.strip()
        try:
            v = float(t)
        except ValueError:
            raise SpecFormatError(f"expected a real number, found {token!r}") from None
        if v != v or v in (float("inf"), float("-inf")):
            raise SpecFormatError(f"expected a finite real number, found {token!r}")
        return v

    def default_step(self, sample: float) -> float:
        return 1.0

    def add(self, value: float, step: float) -> float:
        return round(value + step, REAL_DIGITS)


COUNT = CountKind()
REAL = RealKind()
