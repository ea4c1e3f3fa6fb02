"""quorumsim.tools.full_sim

Full simulation: group structure plus churn over `max_steps` steps.

Each step the attack strategy picks a node that leaves and rejoins (age reset
to one). Only groups touched by the step are re-checked. A repetition ends at
the first compromise or after `max_steps`.
"""

from __future__ import annotations

import numpy as np

from quorumsim.params import ToolArgs
from quorumsim.tools.attack import AttackStrategy
from quorumsim.tools.base import SimResult, Tool
from quorumsim.tools.network import Network
from quorumsim.tools.quorum import Quorum
from quorumsim.tools.structure import scan


class FullSimTool(Tool):
    name = "full_sim"

    def __init__(
        self,
        args: ToolArgs,
        quorum: Quorum,
        attack: AttackStrategy,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(args, rng=rng)
        self.quorum = quorum
        self.attack = attack

    def run_once(self) -> tuple[bool, bool]:
        a = self.args
        net = Network.build(
            num_nodes=a.num_nodes,
            num_malicious=a.num_malicious,
            min_group_size=a.min_group_size,
            rng=self.rng,
        )
        disrupted, compromised = scan(net, self.quorum, a.quorum_prop, range(len(net.groups)))
        step = 0
        while not compromised and step < a.max_steps:
            node = self.attack.pick_node(net, self.rng)
            touched = net.leave(node)
            touched += net.join(node)
            d, compromised = scan(net, self.quorum, a.quorum_prop, sorted(set(touched)))
            disrupted = disrupted or d
            step += 1
        return (disrupted, compromised)

    def calc_p_compromise(self) -> SimResult:
        a = self.args
        if a.num_nodes == 0:
            return SimResult(p_disrupt=0.0, p_compromise=0.0)

        n_disrupt = n_compromise = 0
        for _ in range(a.repetitions):
            disrupted, compromised = self.run_once()
            n_disrupt += disrupted
            n_compromise += compromised

        reps = float(a.repetitions)
        return SimResult(p_disrupt=n_disrupt / reps, p_compromise=n_compromise / reps)
