"""quorumsim.dispatch

Configuration -> backend variant -> result.

`select_tool` is the whole mapping and is pure: it builds a tool and never
runs it. The full simulation is the only mode split further, by
(age quorum, targeting):

    (False, UNTARGETTED)      FullSimTool(SimpleQuorum, UntargettedAttack)
    (True,  UNTARGETTED)      FullSimTool(AgeQuorum,    UntargettedAttack)
    (False, SIMPLE_TARGETTED) FullSimTool(SimpleQuorum, SimpleTargettedAttack)
    (True,  SIMPLE_TARGETTED) FullSimTool(AgeQuorum,    SimpleTargettedAttack)

`run_all` checks every configuration before computing any, so an invalid
row aborts the batch with nothing computed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from quorumsim.params import AttackType, SimParams, SimType, ToolArgs
from quorumsim.tools.attack import AttackStrategy, SimpleTargettedAttack, UntargettedAttack
from quorumsim.tools.base import SimResult, Tool
from quorumsim.tools.direct_calc import DirectCalcTool
from quorumsim.tools.full_sim import FullSimTool
from quorumsim.tools.quorum import AgeQuorum, Quorum, SimpleQuorum
from quorumsim.tools.structure import SimStructureTool

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Outcome:
    params: SimParams
    result: SimResult


def _quorum(age_quorum: bool) -> Quorum:
    return AgeQuorum() if age_quorum else SimpleQuorum()


def _attack(targetting: AttackType) -> AttackStrategy:
    if targetting is AttackType.UNTARGETTED:
        return UntargettedAttack()
    if targetting is AttackType.SIMPLE_TARGETTED:
        return SimpleTargettedAttack()
    raise ValueError(f"unknown attack type: {targetting!r}")


def select_tool(params: SimParams, args: ToolArgs, *, rng: np.random.Generator | None = None) -> Tool:
    if params.sim_type is SimType.DIRECT_CALC:
        return DirectCalcTool(args, rng=rng)
    if params.sim_type is SimType.STRUCTURE:
        return SimStructureTool(args, rng=rng)
    if params.sim_type is SimType.FULL_SIM:
        # quorum and attack are fixed at construction; build the whole variant at once
        return FullSimTool(args, _quorum(params.age_quorum), _attack(params.targetting), rng=rng)
    raise ValueError(f"unknown simulation type: {params.sim_type!r}")


def _rng(seed: int | None) -> np.random.Generator:
    # Same seed for every configuration: rows differ by parameters, not by noise.
    return np.random.default_rng(seed)


def run_one(params: SimParams, *, seed: int | None = None) -> Outcome:
    args = params.checked_args()
    tool = select_tool(params, args, rng=_rng(seed))
    logger.debug(
        "config_dispatched",
        extra={
            "tool": tool.name,
            "nodes": args.num_nodes,
            "malicious": args.num_malicious,
            "min_group": args.min_group_size,
            "quorum_prop": args.quorum_prop,
        },
    )
    return Outcome(params=params, result=tool.calc_p_compromise())


def run_all(configs: Iterable[SimParams], *, seed: int | None = None) -> list[Outcome]:
    batch = list(configs)
    for params in batch:
        params.checked_args()
    return [run_one(params, seed=seed) for params in batch]
