"""quorumsim.tools.network

Group structure used by the stochastic tools.

Nodes join a uniformly random group. A group that reaches twice the minimum
size splits into two random halves. A group that drops below the minimum
size (and is not the only group) is dissolved into another random group.

Membership uses swap-remove lists so join/leave are O(1) outside splits.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


class Network:
    def __init__(self, *, min_group_size: int, malicious: Sequence[bool], rng: np.random.Generator) -> None:
        self.k = max(1, int(min_group_size))
        self.rng = rng
        self.malicious: list[bool] = [bool(m) for m in malicious]
        self.malicious_ids: list[int] = [i for i, m in enumerate(self.malicious) if m]
        n = len(self.malicious)
        self.age: list[int] = [1] * n
        self.group_of: list[int] = [-1] * n
        self.pos: list[int] = [-1] * n
        self.groups: list[list[int]] = [[]]
        self.mal_count: list[int] = [0]

    @classmethod
    def build(
        cls,
        *,
        num_nodes: int,
        num_malicious: int,
        min_group_size: int,
        rng: np.random.Generator,
    ) -> Network:
        flags = np.zeros(num_nodes, dtype=bool)
        flags[:num_malicious] = True
        rng.shuffle(flags)
        net = cls(min_group_size=min_group_size, malicious=flags.tolist(), rng=rng)
        for node in range(num_nodes):
            net.join(node)
        return net

    @property
    def num_nodes(self) -> int:
        return len(self.malicious)

    def _add(self, node: int, g: int) -> None:
        members = self.groups[g]
        self.group_of[node] = g
        self.pos[node] = len(members)
        members.append(node)
        if self.malicious[node]:
            self.mal_count[g] += 1

    def _remove(self, node: int) -> int:
        g = self.group_of[node]
        members = self.groups[g]
        i = self.pos[node]
        last = members.pop()
        if last != node:
            members[i] = last
            self.pos[last] = i
        self.group_of[node] = -1
        self.pos[node] = -1
        if self.malicious[node]:
            self.mal_count[g] -= 1
        return g

    def _drop_group(self, g: int) -> None:
        last = len(self.groups) - 1
        if g != last:
            self.groups[g] = self.groups[last]
            self.mal_count[g] = self.mal_count[last]
            for m in self.groups[g]:
                self.group_of[m] = g
        self.groups.pop()
        self.mal_count.pop()

    def _split(self, g: int) -> list[int]:
        members = self.groups[g]
        order = self.rng.permutation(len(members))
        moving = [members[i] for i in order[: len(members) // 2]]
        self.groups.append([])
        self.mal_count.append(0)
        new = len(self.groups) - 1
        for node in moving:
            self._remove(node)
            self._add(node, new)
        return [g, new]

    def join(self, node: int) -> list[int]:
        """Add `node` to a random group; return the indices of groups that changed."""

        g = int(self.rng.integers(len(self.groups)))
        self.age[node] = 1
        self._add(node, g)
        if len(self.groups[g]) >= 2 * self.k:
            return self._split(g)
        return [g]

    def leave(self, node: int) -> list[int]:
        """Remove `node`; the group it left ages by one. Return changed group indices."""

        g = self._remove(node)
        members = self.groups[g]
        for m in members:
            self.age[m] += 1

        if len(members) >= self.k or len(self.groups) == 1:
            return [g]

        orphans = list(members)
        for m in orphans:
            self._remove(m)
        self._drop_group(g)
        target = int(self.rng.integers(len(self.groups)))
        for m in orphans:
            self._add(m, target)
        if len(self.groups[target]) >= 2 * self.k:
            return self._split(target)
        return [target]
