from __future__ import annotations

import argparse


def add_child_option_args(parser: argparse.ArgumentParser) -> None:
    """Register options forwarded unchanged to every worker command."""

    parser.add_argument("--steps", action="store_true", help="(worker) Show step-by-step execution.")
    parser.add_argument("--verbose", action="store_true", help="(worker) Verbose worker output.")
    parser.add_argument("--reporter", default=None, help="(worker) Reporter name.")
    parser.add_argument(
        "--reporter-options",
        dest="reporter_options",
        default=None,
        help="(worker) Reporter options, passed through as-is.",
    )
    parser.add_argument(
        "--grep",
        default=None,
        help="(worker) Only run tests matching this pattern. Does not affect chunking.",
    )
    parser.add_argument(
        "--fgrep",
        default=None,
        help="(worker) Only run tests containing this string.",
    )
