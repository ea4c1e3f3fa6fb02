from __future__ import annotations

import pytest

from quorumsim.core.exceptions import ConfigError, SpecFormatError, UnknownFlagValueError
from quorumsim.params import AttackType, SimType
from quorumsim.sweep.expand import (
    SweepInputs,
    count_configurations,
    expand,
    resolve_quorum,
    resolve_targetting,
)
from quorumsim.sweep.rel_or_abs import Abs, Rel


def _inputs(sim_type: SimType = SimType.DIRECT_CALC, **overrides: str) -> SweepInputs:
    kw = {
        "nodes": "1000",
        "malicious": "10%",
        "min_group_size": "10",
        "quorum_prop": "0.5",
    }
    kw.update(overrides)
    return SweepInputs.from_strings(sim_type, **kw)


def test_single_configuration_from_pinned_values() -> None:
    configs = expand(_inputs())
    assert len(configs) == 1
    c = configs[0]
    assert c.sim_type is SimType.DIRECT_CALC
    assert c.num_nodes == 1000
    assert c.num_malicious == Rel(0.1)
    assert c.min_group_size == 10
    assert c.quorum_prop == 0.5
    assert c.age_quorum is False
    assert c.targetting is AttackType.UNTARGETTED
    assert c.max_steps == 1000
    assert c.repetitions == 100


def test_two_dimensions_give_full_product() -> None:
    configs = expand(_inputs(nodes="100,200,300", min_group_size="5,10"))
    assert len(configs) == 6
    pairs = [(c.num_nodes, c.min_group_size) for c in configs]
    assert len(set(pairs)) == 6
    assert set(pairs) == {(n, k) for n in (100, 200, 300) for k in (5, 10)}


def test_replication_order_is_append_only() -> None:
    configs = expand(_inputs(nodes="100,200,300", min_group_size="5,10"))
    assert [(c.num_nodes, c.min_group_size) for c in configs] == [
        (100, 5),
        (200, 5),
        (300, 5),
        (100, 10),
        (200, 10),
        (300, 10),
    ]


def test_earlier_dimensions_vary_fastest() -> None:
    configs = expand(_inputs(nodes="10,20", malicious="1,2", quorum_prop="0.5,0.6"))
    assert [(c.num_nodes, c.num_malicious.count, c.quorum_prop) for c in configs] == [
        (10, 1, 0.5),
        (20, 1, 0.5),
        (10, 2, 0.5),
        (20, 2, 0.5),
        (10, 1, 0.6),
        (20, 1, 0.6),
        (10, 2, 0.6),
        (20, 2, 0.6),
    ]


def test_blocks_keep_first_value_of_later_dimensions() -> None:
    configs = expand(_inputs(nodes="100-300:100", malicious="5%,10%", min_group_size="8,16"))
    # the node pass only produced the first three rows
    assert all(c.num_malicious == Rel(0.05) and c.min_group_size == 8 for c in configs[:3])
    # malicious pass appended one contiguous block
    assert all(c.num_malicious == Rel(0.1) and c.min_group_size == 8 for c in configs[3:6])
    assert all(c.min_group_size == 16 for c in configs[6:])


def test_full_mode_all_flags_gives_four_variants() -> None:
    inputs = _inputs(SimType.FULL_SIM, quorum="all", targetting="all")
    configs = expand(inputs)
    assert [(c.age_quorum, c.targetting) for c in configs] == [
        (False, AttackType.UNTARGETTED),
        (True, AttackType.UNTARGETTED),
        (False, AttackType.SIMPLE_TARGETTED),
        (True, AttackType.SIMPLE_TARGETTED),
    ]


def test_product_has_no_duplicates() -> None:
    inputs = _inputs(
        SimType.FULL_SIM,
        nodes="100,200",
        malicious="10,20,30",
        min_group_size="5-6",
        quorum_prop="0.5-0.6:0.1",
        quorum="all",
        targetting="simple",
    )
    configs = expand(inputs)
    assert len(configs) == 2 * 3 * 2 * 2 * 2 * 1
    assert len(set(configs)) == len(configs)
    assert count_configurations(inputs) == len(configs)


def test_expansion_is_reproducible() -> None:
    inputs = _inputs(nodes="100-500:100", malicious="1-3")
    assert expand(inputs) == expand(inputs)


def test_malicious_keeps_representation_until_dispatch() -> None:
    configs = expand(_inputs(malicious="50"))
    assert configs[0].num_malicious == Abs(50)


def test_configuration_limit() -> None:
    inputs = _inputs(nodes="1-100")
    with pytest.raises(ConfigError):
        expand(inputs, max_configurations=50)
    assert len(expand(inputs, max_configurations=100)) == 100


def test_large_sweep_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="quorumsim"):
        expand(_inputs(nodes="1-20"), warn_configurations=10)
    assert any(r.getMessage() == "sweep_large" for r in caplog.records)


def test_resolve_choices() -> None:
    assert resolve_quorum("simple") == (False,)
    assert resolve_quorum("age") == (True,)
    assert resolve_quorum("all") == (False, True)
    assert resolve_targetting("none") == (AttackType.UNTARGETTED,)
    assert resolve_targetting("simple") == (AttackType.SIMPLE_TARGETTED,)
    assert resolve_targetting("all") == (AttackType.UNTARGETTED, AttackType.SIMPLE_TARGETTED)


@pytest.mark.parametrize("value", ["", "ALL", "targeted", "both"])
def test_unknown_choices(value: str) -> None:
    with pytest.raises(UnknownFlagValueError):
        resolve_quorum(value)
    with pytest.raises(UnknownFlagValueError):
        resolve_targetting(value)


def test_malformed_sweep_string_fails_before_expansion() -> None:
    with pytest.raises(SpecFormatError):
        _inputs(nodes="1000-")
