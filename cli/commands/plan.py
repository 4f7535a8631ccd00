from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from multirun.planner import MultiRunPlanner, PlanRequest, PlanResult


def child_options_from_args(args: argparse.Namespace, *, config_path: str) -> Dict[str, Any]:
    """Options forwarded to every worker (see multirun.core.CHILD_OPTION_KEYS)."""
    return {
        "config": config_path,
        "steps": bool(getattr(args, "steps", False)),
        "verbose": bool(getattr(args, "verbose", False)),
        "reporter": getattr(args, "reporter", None),
        "reporter-options": getattr(args, "reporter_options", None),
        "grep": getattr(args, "grep", None),
        "fgrep": getattr(args, "fgrep", None),
    }


def _format_table(result: PlanResult) -> List[str]:
    lines: List[str] = []
    width = max((len(r) for r in result.run_ids), default=0)
    for run_id, run_config in result.runs.items():
        browser = run_config.get("browser") or {}
        browser_name = browser.get("browser") if isinstance(browser, Mapping) else browser
        tests = run_config.get("tests") or "(config default)"
        lines.append(f"  {run_id.ljust(width)}  {browser_name or '-':<10}  {tests}")
    return lines


def run_plan(
    args: argparse.Namespace,
    planner: MultiRunPlanner,
    *,
    selection: List[str],
    config: Mapping[str, Any],
    config_path: Path,
) -> int:
    """Plan run units for ``selection`` and print/write them. Never executes workers."""

    req = PlanRequest(
        selection=list(selection),
        config=config,
        config_path=str(config_path),
        options=child_options_from_args(args, config_path=str(config_path)),
        output_root=args.output_dir or config.get("output"),
    )
    result = planner.plan(req)

    if args.manifest:
        path = planner.write_manifest(result, Path(args.manifest), include_commands=True)
        if not args.quiet:
            print(f"📝 Wrote plan manifest: {path}")

    if args.as_json:
        payload = result.manifest(include_commands=bool(args.print_commands))
        print(json.dumps(payload["runs"], indent=2, default=str))
        return 0

    if not args.quiet:
        print(f"\n🧩 {len(result.runs)} run(s) for: {', '.join(selection)}")
        for line in _format_table(result):
            print(line)

    if args.print_commands:
        for run_id, cmd in result.commands().items():
            print(f"\n▶ {run_id}")
            print("  Command :", " ".join(cmd))

    return 0
