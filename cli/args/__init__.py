"""CLI argument builder modules.

The top-level :mod:`multirun_cli` is intentionally kept thin. Groups of flags
are registered via small "arg builder" functions housed here.

Each module exposes a single public function:

- :func:`cli.args.base.add_base_args`
- :func:`cli.args.plan.add_plan_args`
- :func:`cli.args.child_options.add_child_option_args`

This keeps :func:`multirun_cli.parse_args` from turning into a god function.
"""

from __future__ import annotations

__all__ = [
    "base",
    "plan",
    "child_options",
]
