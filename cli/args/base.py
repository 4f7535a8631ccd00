from __future__ import annotations

import argparse
from typing import Optional


def add_base_args(parser: argparse.ArgumentParser, *, default_config: Optional[str]) -> None:
    """Register selection, config and logging flags.

    This includes:
    - suite selectors (positional)
    - config file location
    - log verbosity
    """

    parser.add_argument(
        "suites",
        nargs="*",
        help=(
            "Suites to run: 'name' or 'name:browser' (comma-separated lists are accepted). "
            "'all' selects every suite in the config's multiple section."
        ),
    )
    parser.add_argument(
        "--all",
        dest="all_suites",
        action="store_true",
        help="Select every configured suite (same as passing 'all').",
    )
    parser.add_argument(
        "--config",
        "-c",
        dest="config",
        default=default_config,
        help=(
            "Path to the multi-suite config (.yaml, .yml, .json or .py exporting CONFIG). "
            f"Default: $MULTIRUN_CONFIG ({default_config or 'unset'})."
        ),
    )

    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Planner log level (default: $MULTIRUN_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print errors and the requested output.",
    )
