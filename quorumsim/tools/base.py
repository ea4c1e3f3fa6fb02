"""quorumsim.tools.base

Backend contract.

A tool is built from resolved `ToolArgs` (plus, for the full simulation, a
quorum rule and an attack strategy) and answers one question: how likely is
a group to be disrupted, and how likely is it to be compromised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from quorumsim.params import ToolArgs


@dataclass(frozen=True, slots=True)
class SimResult:
    p_disrupt: float  # honest members can no longer reach quorum in some group
    p_compromise: float  # malicious members reach quorum in some group


class Tool(ABC):
    name: str = "tool"

    def __init__(self, args: ToolArgs, *, rng: np.random.Generator | None = None) -> None:
        self.args = args
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def calc_p_compromise(self) -> SimResult:
        raise NotImplementedError
