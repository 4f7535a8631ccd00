"""multirun.planner

A single, high-level object for this repo's primary capability: turning a
suite selection plus a multi-suite config into run units.

Callers (CLI, scripts, CI glue) should go through
:class:`~multirun.planner.MultiRunPlanner` rather than wiring
:mod:`multirun.suites.collection`, :mod:`multirun.core` and
:mod:`multirun.suites.manifest` together themselves.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from multirun.core import build_worker_command, resolve_runner
from multirun.models import RunMap
from multirun.suites.collection import prepare_suites
from multirun.suites.config_loader import load_config
from multirun.suites.manifest import build_plan_manifest, write_plan_manifest


@dataclass(frozen=True)
class PlanRequest:
    """Inputs for one planning invocation."""

    selection: Sequence[str]
    config: Mapping[str, Any]
    config_path: Optional[str] = None

    # Worker command knobs (only used when commands are requested).
    options: Mapping[str, Any] = field(default_factory=dict)
    output_root: Optional[str] = None


@dataclass(frozen=True)
class PlanResult:
    request: PlanRequest
    runs: RunMap
    runner: List[str]

    @property
    def run_ids(self) -> List[str]:
        return list(self.runs.keys())

    def commands(self) -> Dict[str, List[str]]:
        """Worker argv per run id (nothing is executed)."""
        return {
            run_id: build_worker_command(
                run_id,
                run_config,
                runner=self.runner,
                options=self.request.options,
                output_root=self.request.output_root,
                config=self.request.config,
            )
            for run_id, run_config in self.runs.items()
        }

    def manifest(self, *, include_commands: bool = False) -> Dict[str, Any]:
        return build_plan_manifest(
            runs=self.runs,
            selection=self.request.selection,
            config_path=self.request.config_path,
            runner=self.runner if include_commands else None,
            options=self.request.options,
            output_root=self.request.output_root,
            config=self.request.config,
        )


class MultiRunPlanner:
    """High-level facade over the planner.

    Build it via :func:`multirun.wiring.build_planner`.
    """

    def __init__(
        self,
        *,
        prepare_fn: Callable[[Sequence[str], Mapping[str, Any]], RunMap] = prepare_suites,
        load_fn: Callable[[Path], Dict[str, Any]] = load_config,
    ) -> None:
        self._prepare_fn = prepare_fn
        self._load_fn = load_fn

    def load(self, path: Path) -> Dict[str, Any]:
        return self._load_fn(path)

    def plan(self, req: PlanRequest) -> PlanResult:
        runs = self._prepare_fn(req.selection, req.config)
        return PlanResult(request=req, runs=runs, runner=resolve_runner(req.config))

    def write_manifest(self, result: PlanResult, path: Path, *, include_commands: bool = False) -> Path:
        return write_plan_manifest(path, result.manifest(include_commands=include_commands))
