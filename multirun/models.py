"""multirun.models

Lightweight data structures used across the planner.

Suite definitions and run configs stay plain dicts: they carry arbitrary
executor options that the planner copies but never interprets. Only the
operator's input (selectors) gets an explicit type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# One resolved run unit, and the planner output keyed by run id.
RunConfig = Dict[str, Any]
RunMap = Dict[str, RunConfig]

ALL_SUITES = "all"


@dataclass(frozen=True)
class SuiteSelector:
    """One operator token: ``name`` or ``name:browser``.

    ``raw`` keeps the original token for messages and manifests.
    """

    name: str
    browser: Optional[str] = None
    raw: str = ""

    @property
    def selects_all(self) -> bool:
        return self.name == ALL_SUITES

    def describe(self) -> str:
        if self.browser:
            return f"{self.name} ({self.browser} only)"
        return self.name
