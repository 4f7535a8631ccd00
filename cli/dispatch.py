from __future__ import annotations

import argparse
import sys
from typing import Any, List, Mapping

from cli.commands.plan import run_plan
from cli.common import flatten_selection
from cli.ui import choose_suites

from multirun.errors import MultiRunError
from multirun.models import ALL_SUITES
from multirun.planner import MultiRunPlanner
from multirun.suites.config_loader import resolve_config_path


def resolve_selection(args: argparse.Namespace, config: Mapping[str, Any]) -> List[str]:
    """Selectors from --all / positionals, with an interactive fallback on a TTY."""
    if getattr(args, "all_suites", False):
        return [ALL_SUITES]

    selection = flatten_selection(args.suites or [])
    if selection:
        return selection

    multiple = config.get("multiple")
    if isinstance(multiple, Mapping) and multiple and sys.stdin.isatty():
        return choose_suites(multiple)

    raise SystemExit("No suites selected. Pass suite names (e.g. smoke login:chrome) or --all.")


def dispatch(args: argparse.Namespace, planner: MultiRunPlanner) -> int:
    try:
        config_path = resolve_config_path(args.config)
        config = planner.load(config_path)
        selection = resolve_selection(args, config)
        return int(run_plan(args, planner, selection=selection, config=config, config_path=config_path))
    except MultiRunError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 2
