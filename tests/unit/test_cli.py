from __future__ import annotations

from pathlib import Path

import pytest

from quorumsim.cli import build_parser, main


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # No config/default.yaml in cwd: the CLI runs on built-in defaults.
    monkeypatch.chdir(tmp_path)


def _rows(out: str) -> list[list[str]]:
    return [line.split() for line in out.strip().splitlines()[1:]]


def test_cli_help_includes_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([])
    assert rc == 2
    out = capsys.readouterr().out
    assert "calc" in out
    assert "structure" in out
    assert "full" in out


def test_cli_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--version"])
    assert rc == 0
    assert capsys.readouterr().out.startswith("quorumsim v")


def test_cli_unknown_command_errors() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["nope"])


def test_quorum_selectors_only_on_full() -> None:
    parser = build_parser()
    assert parser.parse_args(["full", "-Q", "all", "-T", "all"]).quorum == "all"
    with pytest.raises(SystemExit):
        parser.parse_args(["calc", "-Q", "all"])


def test_calc_defaults(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["calc"])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].split() == [
        "Type",
        "AgeQuorum",
        "Targetting",
        "Nodes",
        "Malicious",
        "MinGroup",
        "QuorumProp",
        "P(disruption)",
        "P(compromise)",
    ]
    assert _rows(out) and _rows(out)[0][:7] == ["dir_calc", "false", "untarg.", "1000", "100", "10", "0.5"]


def test_calc_sweep_rows_in_order(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["calc", "-n", "100,200", "-k", "5-10:5", "-r", "10%", "-q", "0.5"])
    assert rc == 0
    rows = _rows(capsys.readouterr().out)
    assert [(r[3], r[4], r[5]) for r in rows] == [
        ("100", "10", "5"),
        ("200", "20", "5"),
        ("100", "10", "10"),
        ("200", "20", "10"),
    ]


def test_full_all_variants(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["full", "-n", "30", "-k", "5", "-r", "6", "-s", "5", "-p", "2", "-Q", "all", "-T", "all", "--seed", "1"])
    assert rc == 0
    rows = _rows(capsys.readouterr().out)
    assert [(r[0], r[1], r[2]) for r in rows] == [
        ("full_sim", "false", "untarg."),
        ("full_sim", "true", "untarg."),
        ("full_sim", "false", "simp_targ"),
        ("full_sim", "true", "simp_targ"),
    ]


def test_structure_runs(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["structure", "-n", "50", "-k", "5", "-p", "3", "--seed", "2"])
    assert rc == 0
    assert _rows(capsys.readouterr().out)[0][0] == "structure"


@pytest.mark.parametrize(
    "argv",
    [
        ["calc", "-n", "1-2-3"],
        ["calc", "-n", ""],
        ["calc", "-n", "²"],
        ["calc", "-q", ""],
        ["full", "-Q", ""],
        ["calc", "-r", "ten%"],
        ["calc", "-q", "0.5-0.7:0.1:2"],
        ["calc", "-r", "10%-50"],
        ["full", "-Q", "fancy"],
        ["full", "-T", "everything"],
    ],
)
def test_bad_input_exits_2(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(argv)
    assert rc == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err


@pytest.mark.parametrize(
    "argv",
    [
        ["calc", "-k", "0"],
        ["calc", "-q", "1.5"],
        ["calc", "-n", "100", "-r", "500"],
        ["structure", "-p", "0"],
        ["calc", "-k", "10,0"],
    ],
)
def test_invariant_violation_exits_1_without_table(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(argv)
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err


def test_config_file_supplies_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "custom.yaml"
    cfg.write_text('sweep:\n  nodes: "100,200,300"\n  min_group_size: "5"\n')
    rc = main(["calc", "--config", str(cfg)])
    assert rc == 0
    assert [r[3] for r in _rows(capsys.readouterr().out)] == ["100", "200", "300"]


def test_flags_override_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "custom.yaml"
    cfg.write_text('sweep:\n  nodes: "100,200,300"\n')
    rc = main(["calc", "--config", str(cfg), "-n", "400"])
    assert rc == 0
    assert [r[3] for r in _rows(capsys.readouterr().out)] == ["400"]


def test_missing_config_file_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["calc", "--config", str(tmp_path / "missing.yaml")])
    assert rc == 2
    assert "Config file not found" in capsys.readouterr().err


def test_configuration_limit_from_env(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("QUORUMSIM_SIMULATION__MAX_CONFIGURATIONS", "3")
    rc = main(["calc", "-n", "100-500:100"])
    assert rc == 2
    assert "limit is 3" in capsys.readouterr().err


def test_empty_flag_is_not_replaced_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "custom.yaml"
    cfg.write_text('sweep:\n  malicious: "5"\n')
    rc = main(["calc", "--config", str(cfg), "-r", ""])
    assert rc == 2
    assert capsys.readouterr().out == ""
