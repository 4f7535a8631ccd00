"""multirun.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load environment variables (``.env`` at the repo root)
- configure logging
- build the high-level planner facade object

Keeping this wiring in one place prevents configuration and logging setup
from being duplicated across entrypoints (CLI, scripts, CI).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from multirun.core import ROOT_DIR
from multirun.planner import MultiRunPlanner


ENV_PATH: Path = ROOT_DIR / ".env"
LOG_LEVEL_ENV = "MULTIRUN_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_env(dotenv_path: Path = ENV_PATH) -> bool:
    """Load ``.env`` into ``os.environ`` without overriding exported variables."""
    if not dotenv_path.exists():
        return False
    return bool(load_dotenv(dotenv_path, override=False))


def resolve_log_level(*, quiet: bool = False) -> int:
    """--quiet wins; otherwise ``$MULTIRUN_LOG_LEVEL``; otherwise WARNING."""
    if quiet:
        return logging.ERROR

    raw = (os.environ.get(LOG_LEVEL_ENV) or "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, quiet: bool = False, level: Optional[int] = None) -> None:
    """Configure root logging once for an entrypoint. Library modules never call this."""
    logging.basicConfig(
        level=level if level is not None else resolve_log_level(quiet=quiet),
        format=LOG_FORMAT,
    )


def build_planner(*, load_dotenv_file: bool = True) -> MultiRunPlanner:
    """Build the high-level planner facade.

    This is intentionally simple today. It is the place to swap the planning
    function in tests.
    """

    if load_dotenv_file:
        load_env(ENV_PATH)

    return MultiRunPlanner()
