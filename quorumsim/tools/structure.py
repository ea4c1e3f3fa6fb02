"""quorumsim.tools.structure

Simulated group structure, no ageing, no targeting.

Nodes join one by one and groups split as they grow, so group sizes vary
between `k` and `2k - 1`. Each repetition builds a fresh network and checks
every group once. Probabilities are observed frequencies.
"""

from __future__ import annotations

from quorumsim.tools.base import SimResult, Tool
from quorumsim.tools.network import Network
from quorumsim.tools.quorum import Quorum, SimpleQuorum


def scan(net: Network, quorum: Quorum, quorum_prop: float, groups: list[int] | range) -> tuple[bool, bool]:
    """Return `(any_disrupted, any_compromised)` over `groups`."""

    disrupted = compromised = False
    for g in groups:
        c, d = quorum.check(net, g, quorum_prop)
        compromised = compromised or c
        disrupted = disrupted or d
    return (disrupted, compromised)


class SimStructureTool(Tool):
    name = "structure"

    def calc_p_compromise(self) -> SimResult:
        a = self.args
        if a.num_nodes == 0:
            return SimResult(p_disrupt=0.0, p_compromise=0.0)

        quorum = SimpleQuorum()
        n_disrupt = n_compromise = 0
        for _ in range(a.repetitions):
            net = Network.build(
                num_nodes=a.num_nodes,
                num_malicious=a.num_malicious,
                min_group_size=a.min_group_size,
                rng=self.rng,
            )
            disrupted, compromised = scan(net, quorum, a.quorum_prop, range(len(net.groups)))
            n_disrupt += disrupted
            n_compromise += compromised

        reps = float(a.repetitions)
        return SimResult(p_disrupt=n_disrupt / reps, p_compromise=n_compromise / reps)
