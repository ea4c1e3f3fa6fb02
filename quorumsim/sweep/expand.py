"""quorumsim.sweep.expand

Cross-product expansion of swept dimensions into concrete `SimParams`.

Replication order (observable, tested):
1. One base configuration from the first value of every dimension.
2. For each dimension in `EXPANSION_ORDER`, every remaining value copies the
   whole list built so far with only that field changed, appended at the end.

So configurations produced while expanding dimension *d* still carry the
first value of every dimension after *d*. The total is the product of the
dimension sizes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from quorumsim.core.exceptions import ConfigError, UnknownFlagValueError
from quorumsim.params import AttackType, SimParams, SimType
from quorumsim.sweep.quantity import COUNT, REAL
from quorumsim.sweep.rel_or_abs import REL_OR_ABS, RelOrAbs
from quorumsim.sweep.sample import SampleSpec, parse

logger = logging.getLogger(__name__)

EXPANSION_ORDER = (
    "num_nodes",
    "num_malicious",
    "min_group_size",
    "quorum_prop",
    "age_quorum",
    "targetting",
)

QUORUM_CHOICES: dict[str, tuple[bool, ...]] = {
    "simple": (False,),
    "age": (True,),
    "all": (False, True),
}

TARGETTING_CHOICES: dict[str, tuple[AttackType, ...]] = {
    "none": (AttackType.UNTARGETTED,),
    "simple": (AttackType.SIMPLE_TARGETTED,),
    "all": (AttackType.UNTARGETTED, AttackType.SIMPLE_TARGETTED),
}


def resolve_quorum(value: str) -> tuple[bool, ...]:
    """`simple` | `age` | `all` -> age-aware flags."""

    try:
        return QUORUM_CHOICES[value]
    except KeyError:
        raise UnknownFlagValueError(f"unexpected: -Q {value} (expected simple, age or all)") from None


def resolve_targetting(value: str) -> tuple[AttackType, ...]:
    """`none` | `simple` | `all` -> attack types."""

    try:
        return TARGETTING_CHOICES[value]
    except KeyError:
        raise UnknownFlagValueError(f"unexpected: -T {value} (expected none, simple or all)") from None


@dataclass(frozen=True, slots=True)
class SweepInputs:
    sim_type: SimType
    nodes: SampleSpec[int]
    malicious: SampleSpec[RelOrAbs]
    min_group_size: SampleSpec[int]
    quorum_prop: SampleSpec[float]
    age_quorum: tuple[bool, ...] = (False,)
    targetting: tuple[AttackType, ...] = (AttackType.UNTARGETTED,)
    max_steps: int = 1000
    repetitions: int = 100

    @classmethod
    def from_strings(
        cls,
        sim_type: SimType,
        *,
        nodes: str,
        malicious: str,
        min_group_size: str,
        quorum_prop: str,
        quorum: str = "simple",
        targetting: str = "none",
        max_steps: int = 1000,
        repetitions: int = 100,
    ) -> SweepInputs:
        return cls(
            sim_type=sim_type,
            nodes=parse(nodes, COUNT),
            malicious=parse(malicious, REL_OR_ABS),
            min_group_size=parse(min_group_size, COUNT),
            quorum_prop=parse(quorum_prop, REAL),
            age_quorum=resolve_quorum(quorum),
            targetting=resolve_targetting(targetting),
            max_steps=max_steps,
            repetitions=repetitions,
        )

    def dimensions(self) -> dict[str, Iterable[Any]]:
        return {
            "num_nodes": self.nodes,
            "num_malicious": self.malicious,
            "min_group_size": self.min_group_size,
            "quorum_prop": self.quorum_prop,
            "age_quorum": self.age_quorum,
            "targetting": self.targetting,
        }


def count_configurations(inputs: SweepInputs) -> int:
    return math.prod(sum(1 for _ in values) for values in inputs.dimensions().values())


def expand(
    inputs: SweepInputs,
    *,
    max_configurations: int | None = None,
    warn_configurations: int | None = None,
) -> list[SimParams]:
    total = count_configurations(inputs)
    if max_configurations is not None and total > max_configurations:
        raise ConfigError(f"sweep expands to {total} configurations, limit is {max_configurations}")
    if warn_configurations is not None and total > warn_configurations:
        logger.warning("sweep_large", extra={"configurations": total})

    iters = {name: iter(values) for name, values in inputs.dimensions().items()}
    first = {name: next(it) for name, it in iters.items()}
    configs: list[SimParams] = [
        SimParams(
            sim_type=inputs.sim_type,
            max_steps=inputs.max_steps,
            repetitions=inputs.repetitions,
            **first,
        )
    ]

    for name in EXPANSION_ORDER:
        base: Sequence[SimParams] = tuple(configs)
        for value in iters[name]:
            configs.extend(replace(c, **{name: value}) for c in base)

    logger.info("sweep_expanded", extra={"sim_type": inputs.sim_type.value, "configurations": len(configs)})
    return configs
