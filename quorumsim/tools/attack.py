"""quorumsim.tools.attack

Attack strategies for the full simulation.

Each step one node leaves and rejoins. The strategy decides which one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from quorumsim.tools.network import Network


class AttackStrategy(ABC):
    name: str = "attack"

    @abstractmethod
    def pick_node(self, net: Network, rng: np.random.Generator) -> int:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class UntargettedAttack(AttackStrategy):
    """Churn is ordinary: any node may leave."""

    name: str = "untargetted"

    def pick_node(self, net: Network, rng: np.random.Generator) -> int:
        return int(rng.integers(net.num_nodes))


@dataclass(frozen=True, slots=True)
class SimpleTargettedAttack(AttackStrategy):
    """Concentrate on the group the attacker already holds best.

    Malicious nodes outside that group keep resetting (leave + rejoin) hoping to
    land in it. With no malicious node to move, churn falls back to random.
    """

    name: str = "simple_targetted"
    tries: int = 8

    @staticmethod
    def target_group(net: Network) -> int:
        best, best_share = 0, -1.0
        for g, members in enumerate(net.groups):
            if not members:
                continue
            share = net.mal_count[g] / len(members)
            if share > best_share:
                best, best_share = g, share
        return best

    def pick_node(self, net: Network, rng: np.random.Generator) -> int:
        ids = net.malicious_ids
        if ids:
            target = self.target_group(net)
            for _ in range(int(self.tries)):
                node = ids[int(rng.integers(len(ids)))]
                if net.group_of[node] != target:
                    return node
        return int(rng.integers(net.num_nodes))
