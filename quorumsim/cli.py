"""quorumsim.cli

Command line interface entry point.

Design constraints:
- argparse-based.
- Exit codes: 0 ok, 1 invariant violation during dispatch, 2 bad input or config.
- The table is printed only after every configuration has a result.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from quorumsim.core.config import Config
from quorumsim.core.exceptions import InvariantError, QuorumSimError

EPILOG = "Ranges: 1000-5000:1000, lists: 10,20,50, proportions: 10% (for -r)."

MODES = {
    "calc": "Direct calculation: all groups have min size, no ageing or targetting",
    "structure": "Simulate group structure, but no ageing or targetting",
    "full": "Full simulation (see -Q and -T)",
}


def _add_sweep_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("-n", dest="nodes", metavar="RANGE", help="Number of nodes, total, e.g. 1000-5000:1000.")
    p.add_argument(
        "-r",
        dest="malicious",
        metavar="RANGE",
        help="Either number of compromised nodes (e.g. 50) or percentage (default is 10%%).",
    )
    p.add_argument("-k", dest="min_group_size", metavar="RANGE", help="Minimum group size, e.g. 10-20.")
    p.add_argument("-q", dest="quorum_prop", metavar="RANGE", help="Quorum size as a proportion, e.g. 0.5-0.7:0.1.")
    p.add_argument("-s", dest="max_steps", metavar="VAL", type=int, help="Maximum number of steps.")
    p.add_argument(
        "-p",
        dest="repetitions",
        metavar="VAL",
        type=int,
        help="Repetitions of a true/false simulation used to estimate a probability.",
    )
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/default.yaml).")
    p.add_argument("--seed", type=int, default=None, help="Seed for the stochastic tools.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quorumsim",
        description="Probability computation tool.",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )

    sub = parser.add_subparsers(dest="command")
    for name, help_text in MODES.items():
        p = sub.add_parser(name, help=help_text, description=help_text, epilog=EPILOG)
        _add_sweep_flags(p)
        if name == "full":
            p.add_argument("-Q", dest="quorum", metavar="QTYPE", help="Quorum algorithm: simple, age or all")
            p.add_argument("-T", dest="targetting", metavar="TTYPE", help="Attack targetting strategy: none, simple or all")

    return parser


def _print_version() -> None:
    from quorumsim import __version__

    print(f"quorumsim v{__version__}")


def _load_config(args: argparse.Namespace) -> Config:
    overlay = {"simulation": {"seed": args.seed}} if args.seed is not None else None
    if args.config is not None:
        return Config.from_yaml(args.config, overlay=overlay)
    cfg = Config.from_repo_defaults(Path.cwd())
    if overlay:
        cfg = cfg.model_copy(update={"simulation": cfg.simulation.model_copy(update=overlay["simulation"])})
    return cfg


def _selector(args: argparse.Namespace, name: str, configured: str, fixed: str) -> str:
    # -Q and -T only exist on `full`; other modes always run the plain variant.
    if args.command != "full":
        return fixed
    value = getattr(args, name)
    return configured if value is None else value


def _cmd_run(args: argparse.Namespace, cfg: Config) -> int:
    # Lazy imports: numpy is only needed once we actually compute.
    from quorumsim.dispatch import run_all
    from quorumsim.params import SimType
    from quorumsim.report import render_table
    from quorumsim.sweep.expand import SweepInputs, expand

    d = cfg.sweep
    inputs = SweepInputs.from_strings(
        SimType(args.command),
        nodes=d.nodes if args.nodes is None else args.nodes,
        malicious=d.malicious if args.malicious is None else args.malicious,
        min_group_size=d.min_group_size if args.min_group_size is None else args.min_group_size,
        quorum_prop=d.quorum_prop if args.quorum_prop is None else args.quorum_prop,
        quorum=_selector(args, "quorum", d.quorum, "simple"),
        targetting=_selector(args, "targetting", d.targetting, "none"),
        max_steps=args.max_steps if args.max_steps is not None else d.max_steps,
        repetitions=args.repetitions if args.repetitions is not None else d.repetitions,
    )
    configs = expand(
        inputs,
        max_configurations=cfg.simulation.max_configurations,
        warn_configurations=cfg.simulation.warn_configurations,
    )
    outcomes = run_all(configs, seed=cfg.simulation.seed)
    print(render_table(outcomes))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    from quorumsim.core.logging import configure_logging

    try:
        cfg = _load_config(args)
    except QuorumSimError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    configure_logging(cfg.logging)

    try:
        return _cmd_run(args, cfg)
    except InvariantError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except QuorumSimError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
