"""quorumsim.params

Concrete simulation parameters.

`SimParams` is one row of the sweep: every field fixed, malicious quantity
still relative or absolute. `ToolArgs` is what a backend sees: malicious
count resolved against the node count and invariants checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quorumsim.core.exceptions import InvariantError
from quorumsim.sweep.rel_or_abs import RelOrAbs


class SimType(str, Enum):
    DIRECT_CALC = "calc"
    STRUCTURE = "structure"
    FULL_SIM = "full"

    @property
    def label(self) -> str:
        return _SIM_LABELS[self]


_SIM_LABELS = {
    SimType.DIRECT_CALC: "dir_calc",
    SimType.STRUCTURE: "structure",
    SimType.FULL_SIM: "full_sim",
}


class AttackType(str, Enum):
    UNTARGETTED = "untargetted"
    SIMPLE_TARGETTED = "simple_targetted"

    @property
    def label(self) -> str:
        return "untarg." if self is AttackType.UNTARGETTED else "simp_targ"


@dataclass(frozen=True, slots=True)
class ToolArgs:
    num_nodes: int
    num_malicious: int
    min_group_size: int
    quorum_prop: float
    max_steps: int
    repetitions: int
    any_group: bool = True

    def check_invariant(self, *, probabilistic: bool = True) -> None:
        if self.min_group_size < 1:
            raise InvariantError(f"min group size must be >= 1, got {self.min_group_size}")
        if not 0.0 < self.quorum_prop <= 1.0:
            raise InvariantError(f"quorum proportion must be in (0, 1], got {self.quorum_prop}")
        if self.num_malicious > self.num_nodes:
            raise InvariantError(
                f"malicious count {self.num_malicious} exceeds node count {self.num_nodes}"
            )
        if self.num_malicious < 0:
            raise InvariantError(f"malicious count must be >= 0, got {self.num_malicious}")
        if self.max_steps < 1:
            raise InvariantError(f"max steps must be >= 1, got {self.max_steps}")
        if probabilistic and self.repetitions < 1:
            raise InvariantError(f"repetitions must be >= 1, got {self.repetitions}")


@dataclass(frozen=True, slots=True)
class SimParams:
    sim_type: SimType
    age_quorum: bool
    targetting: AttackType
    num_nodes: int
    num_malicious: RelOrAbs
    min_group_size: int
    quorum_prop: float
    max_steps: int
    repetitions: int

    def tool_args(self) -> ToolArgs:
        """Resolve the malicious quantity against the node count."""

        return ToolArgs(
            num_nodes=self.num_nodes,
            num_malicious=self.num_malicious.from_base(self.num_nodes),
            min_group_size=self.min_group_size,
            quorum_prop=self.quorum_prop,
            max_steps=self.max_steps,
            repetitions=self.repetitions,
        )

    def checked_args(self) -> ToolArgs:
        args = self.tool_args()
        # Direct calculation is exact; it never repeats anything.
        args.check_invariant(probabilistic=self.sim_type is not SimType.DIRECT_CALC)
        return args
