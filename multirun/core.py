# multirun/core.py
from __future__ import annotations

import json
import os
import shlex
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from multirun.identifiers import safe_run_dir_name

ROOT_DIR = Path(__file__).resolve().parents[1]

DEFAULT_RUNNER = ("npx", "codeceptjs", "run")
RUNNER_ENV = "MULTIRUN_RUNNER"

# Operator options forwarded unchanged to every worker.
CHILD_OPTION_KEYS = ("steps", "reporter", "verbose", "config", "reporter-options", "grep", "fgrep")

# Planner bookkeeping that workers do not need.
_PLANNER_KEYS = {"parent_suite_name"}


def resolve_runner(config: Optional[Mapping[str, Any]] = None) -> List[str]:
    """Runner argv prefix: config ``runner``, then ``$MULTIRUN_RUNNER``, then the default."""

    raw: Any = (config or {}).get("runner") or os.environ.get(RUNNER_ENV)
    if not raw:
        return list(DEFAULT_RUNNER)
    if isinstance(raw, str):
        return shlex.split(raw)
    return [str(part) for part in raw]


def child_options(options: Mapping[str, Any], *, config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Keep only the options that are forwarded to workers (unset ones dropped).

    The root ``grep`` of ``config`` is used when no ``grep`` option is set.
    """

    forwarded = dict(options)
    if not forwarded.get("grep") and config and config.get("grep"):
        forwarded["grep"] = config["grep"]
    return {k: v for k, v in forwarded.items() if k in CHILD_OPTION_KEYS and v not in (None, False, "")}


def worker_override(run_id: str, run_config: Mapping[str, Any], *, output_root: Optional[str] = None) -> Dict[str, Any]:
    """Config override passed to one worker.

    When an output root is known, each run writes under its own folder
    (``<output>/<safe run id>``) so parallel workers never share artifacts.
    """

    override = {k: v for k, v in run_config.items() if k not in _PLANNER_KEYS}
    root = output_root or run_config.get("output")
    if root:
        override["output"] = str(Path(str(root)) / safe_run_dir_name(run_id))
    return override


def build_worker_command(
    run_id: str,
    run_config: Mapping[str, Any],
    *,
    runner: Sequence[str] = DEFAULT_RUNNER,
    options: Optional[Mapping[str, Any]] = None,
    output_root: Optional[str] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> List[str]:
    """
    Build the argv for the worker that executes one run unit.

    Pure: nothing is spawned here.
    - ``--child`` carries the run id, ``--override`` the run config as JSON
    - forwarded options become ``--key value`` (``--key`` alone for True);
      ``config`` is the root config, whose ``grep`` is the forwarded default
    - a suite-level ``grep`` is appended last
    """

    override = worker_override(run_id, run_config, output_root=output_root)

    cmd: List[str] = list(runner)
    cmd += ["--child", run_id, "--override", json.dumps(override, sort_keys=True, default=str)]

    for key, value in child_options(options or {}, config=config).items():
        cmd.append(f"--{key}")
        if value is not True:
            cmd.append(str(value))

    if run_config.get("grep"):
        cmd += ["--grep", str(run_config["grep"])]

    return cmd
