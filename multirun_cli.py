#!/usr/bin/env python3
"""
CLI front door for the multi-suite run planner.

Plans the run units for the selected suites (one per chunk x browser) and
prints them. Worker commands can be printed or written to a manifest; nothing
is executed here.

Usage:
  python multirun_cli.py --config multirun.yaml smoke
  python multirun_cli.py --config multirun.yaml login:chrome regression --print-commands
  python multirun_cli.py --all --json
  python multirun_cli.py smoke --manifest runs/plan.json --output-dir output
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

from cli.args.base import add_base_args
from cli.args.child_options import add_child_option_args
from cli.args.plan import add_plan_args
from cli.dispatch import dispatch

from multirun.wiring import build_planner, configure_logging

CONFIG_ENV = "MULTIRUN_CONFIG"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Split configured test suites into parallel run units (chunks x browsers)."
    )

    add_base_args(parser, default_config=os.environ.get(CONFIG_ENV))
    add_plan_args(parser)
    add_child_option_args(parser)

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    # Build first so .env is loaded before defaults are read from the environment.
    planner = build_planner()
    args = parse_args(argv)

    level = logging.getLevelName(args.log_level) if args.log_level else None
    configure_logging(quiet=bool(args.quiet), level=level)

    return dispatch(args, planner)


if __name__ == "__main__":
    raise SystemExit(main())
