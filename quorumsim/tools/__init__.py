"""quorumsim.tools

Backend variants.

Three tools; the full simulation is further parametrised by a quorum rule
and an attack strategy, giving six variants in total.
"""

from quorumsim.tools.attack import AttackStrategy, SimpleTargettedAttack, UntargettedAttack
from quorumsim.tools.base import SimResult, Tool
from quorumsim.tools.direct_calc import DirectCalcTool
from quorumsim.tools.full_sim import FullSimTool
from quorumsim.tools.quorum import AgeQuorum, Quorum, SimpleQuorum
from quorumsim.tools.structure import SimStructureTool

__all__ = [
    "AgeQuorum",
    "AttackStrategy",
    "DirectCalcTool",
    "FullSimTool",
    "Quorum",
    "SimResult",
    "SimStructureTool",
    "SimpleQuorum",
    "SimpleTargettedAttack",
    "Tool",
    "UntargettedAttack",
]
