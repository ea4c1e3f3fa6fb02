"""quorumsim.tools.quorum

Quorum rules.

A rule maps a group to (malicious weight, total weight). The group is
compromised when the malicious weight reaches the quorum proportion, and
disrupted when the honest weight cannot.

- SimpleQuorum: every member weighs one.
- AgeQuorum: members weigh their age, so fresh joiners count for little.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from quorumsim.tools.network import Network

# q * total is computed in floating point; 0.7 * 10 must still mean 7.
_EPS = 1e-9


def assess(malicious: float, total: float, quorum_prop: float) -> tuple[bool, bool]:
    """Return `(compromised, disrupted)` for one group."""

    if total <= 0:
        return (False, False)
    need = quorum_prop * total - _EPS * total
    return (malicious >= need, (total - malicious) < need)


class Quorum(ABC):
    name: str = "quorum"

    @abstractmethod
    def weights(self, net: Network, g: int) -> tuple[float, float]:
        raise NotImplementedError

    def check(self, net: Network, g: int, quorum_prop: float) -> tuple[bool, bool]:
        mal, total = self.weights(net, g)
        return assess(mal, total, quorum_prop)


@dataclass(frozen=True, slots=True)
class SimpleQuorum(Quorum):
    name: str = "simple"

    def weights(self, net: Network, g: int) -> tuple[float, float]:
        return (float(net.mal_count[g]), float(len(net.groups[g])))


@dataclass(frozen=True, slots=True)
class AgeQuorum(Quorum):
    name: str = "age"

    def weights(self, net: Network, g: int) -> tuple[float, float]:
        mal = 0
        total = 0
        for m in net.groups[g]:
            a = net.age[m]
            total += a
            if net.malicious[m]:
                mal += a
        return (float(mal), float(total))
