"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os

from .errors import ScenarioError
from .scenario import run_scenario
from .selfcheck import run_selfcheck

LOG_ENV_VAR = "WARMPT_LOG"


def configure_logging() -> None:
    """Configure root logging from the WARMPT_LOG environment variable."""
    level_name = os.environ.get(LOG_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(prog="warmpt", description="Tile heat diffusion simulator")
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a YAML scenario and render it as a GIF")
    run_p.add_argument("scenario", type=str, help="Path to scenario YAML")
    run_p.add_argument(
        "--out",
        type=str,
        default=None,
        help="Write the GIF and exports into this directory instead",
    )
    run_p.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the per-frame progress bar.",
    )

    selfcheck_p = sub.add_parser("selfcheck", help="Run dependency and smoke self-check")
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke simulation).",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        try:
            result = run_scenario(args.scenario, out_override=args.out, progress=not args.no_progress)
        except ScenarioError as exc:
            parser.exit(2, f"Error: {exc}\n")

        world = result.world
        print(f"Done. World=({world.width}, {world.height}), frames={len(result.frames)}")
        for path in result.exports:
            print(f"Output: {path}")
        return 0

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
