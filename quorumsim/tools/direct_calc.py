"""quorumsim.tools.direct_calc

Direct calculation: every group has exactly the minimum size, no ageing,
no targeting.

Per group the malicious count is hypergeometric (draw `k` of `n` nodes, `r`
of them malicious). Groups are treated as independent, so over `G` groups
P(any) = 1 - (1 - p)^G.
"""

from __future__ import annotations

import math

from quorumsim.tools.base import SimResult, Tool


def hypergeom_pmf(x: int, *, n: int, r: int, k: int) -> float:
    if x < 0 or x > r or k - x > n - r or x > k:
        return 0.0
    return math.comb(r, x) * math.comb(n - r, k - x) / math.comb(n, k)


def quorum_size(quorum_prop: float, group_size: int) -> int:
    """Smallest member count that reaches the quorum."""

    return math.ceil(round(quorum_prop * group_size, 9))


class DirectCalcTool(Tool):
    name = "dir_calc"

    def group_probabilities(self) -> tuple[float, float]:
        """Return `(p_disrupt, p_compromise)` for a single group."""

        a = self.args
        n, r = a.num_nodes, a.num_malicious
        k = min(a.min_group_size, n)
        if k == 0:
            return (0.0, 0.0)
        need = quorum_size(a.quorum_prop, k)
        pmf = [hypergeom_pmf(x, n=n, r=r, k=k) for x in range(k + 1)]
        p_compromise = sum(pmf[need:])
        # disrupted once honest members (k - x) fall short of `need`
        p_disrupt = sum(pmf[k - need + 1 :])
        return (min(p_disrupt, 1.0), min(p_compromise, 1.0))

    def num_groups(self) -> int:
        a = self.args
        if a.num_nodes == 0:
            return 0
        return max(1, a.num_nodes // a.min_group_size)

    def calc_p_compromise(self) -> SimResult:
        groups = self.num_groups()
        p_disrupt, p_compromise = self.group_probabilities()
        return SimResult(
            p_disrupt=1.0 - (1.0 - p_disrupt) ** groups,
            p_compromise=1.0 - (1.0 - p_compromise) ** groups,
        )
