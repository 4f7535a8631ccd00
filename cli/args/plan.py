from __future__ import annotations

import argparse


def add_plan_args(parser: argparse.ArgumentParser) -> None:
    """Register flags that control what the planner prints or writes."""

    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the run map (run id -> run config) as JSON instead of a table.",
    )
    parser.add_argument(
        "--print-commands",
        dest="print_commands",
        action="store_true",
        help="Print the worker command for every run unit. Nothing is executed.",
    )
    parser.add_argument(
        "--manifest",
        dest="manifest",
        default=None,
        help="Write the plan (runs + worker commands) as a JSON manifest to this path.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=None,
        help=(
            "Root folder for worker output. Each run writes under <output-dir>/<run id>. "
            "Defaults to the config's 'output' value."
        ),
    )
