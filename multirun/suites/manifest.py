"""multirun.suites.manifest

Write the planned run units as a JSON manifest.

The manifest is a record of *what would be dispatched*: one entry per run id
with its resolved run config and, optionally, the worker argv. An external
orchestrator can consume it instead of re-planning.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from multirun.core import build_worker_command
from multirun.models import RunConfig

from tools.io import write_json

SCHEMA_VERSION = 1


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    # Callables (chunk splitters from .py configs) and other objects.
    return repr(value)


def build_plan_manifest(
    *,
    runs: Mapping[str, RunConfig],
    selection: Sequence[str],
    config_path: Optional[str] = None,
    runner: Optional[Sequence[str]] = None,
    options: Optional[Mapping[str, Any]] = None,
    output_root: Optional[str] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the manifest dict. Worker commands are included when ``runner`` is given."""

    entries: Dict[str, Any] = {}
    for run_id, run_config in runs.items():
        entry: Dict[str, Any] = {
            "parent_suite_name": run_config.get("parent_suite_name"),
            "browser": _jsonable(run_config.get("browser")),
            "tests": run_config.get("tests"),
            "config": _jsonable(run_config),
        }
        if runner is not None:
            entry["command"] = build_worker_command(
                run_id,
                run_config,
                runner=runner,
                options=options,
                output_root=output_root,
                config=config,
            )
        entries[run_id] = entry

    return {
        "schema_version": SCHEMA_VERSION,
        "created_at": _now_iso(),
        "selection": list(selection),
        "config_path": config_path,
        "run_count": len(entries),
        "runs": entries,
    }


def write_plan_manifest(path: str | Path, manifest: Mapping[str, Any]) -> Path:
    """Write the manifest to ``path`` (parent dirs created, atomic replace)."""

    p = Path(path).expanduser().resolve()
    write_json(p, dict(manifest))
    return p
