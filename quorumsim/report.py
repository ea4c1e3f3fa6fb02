"""quorumsim.report

Result rows. One row per configuration, in sweep order.
"""

from __future__ import annotations

from collections.abc import Sequence

from quorumsim.dispatch import Outcome

PARAM_TITLES: tuple[str, ...] = (
    "Type",
    "AgeQuorum",
    "Targetting",
    "Nodes",
    "Malicious",
    "MinGroup",
    "QuorumProp",
    "P(disruption)",
    "P(compromise)",
)


def row(outcome: Outcome) -> list[str]:
    p = outcome.params
    r = outcome.result
    return [
        p.sim_type.label,
        "true" if p.age_quorum else "false",
        p.targetting.label,
        str(p.num_nodes),
        str(p.num_malicious.from_base(p.num_nodes)),
        str(p.min_group_size),
        f"{p.quorum_prop:g}",
        f"{r.p_disrupt:.4f}",
        f"{r.p_compromise:.4f}",
    ]


def render_table(outcomes: Sequence[Outcome]) -> str:
    rows = [list(PARAM_TITLES)] + [row(o) for o in outcomes]
    widths = [max(len(r[i]) for r in rows) for i in range(len(PARAM_TITLES))]
    return "\n".join("  ".join(cell.ljust(w) for cell, w in zip(r, widths)).rstrip() for r in rows)
