"""multirun.identifiers

Pure naming helpers: selector parsing and the run-id grammar.

Run ids are consumed downstream (worker ``--child`` values, output folders,
reports), so the grammar must stay exactly:

* ``<suite>``                          seed entry, no expansion
* ``<suite>:chunk<N>``                 chunk-only intermediate key (N from 1)
* ``<entry>:<browser><occurrence>``    final key (occurrence from 1)

e.g. ``checkout:chunk2:chrome1``.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List

from multirun.models import SuiteSelector

__all__ = [
    "parse_selector",
    "parse_selectors",
    "chunk_run_id",
    "browser_run_id",
    "safe_run_dir_name",
]


_UNSAFE_DIR_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def parse_selector(token: str) -> SuiteSelector:
    """Split ``"name"`` / ``"name:browser"`` into a :class:`SuiteSelector`.

    Anything after a second ``:`` (older configs used ``name:browser:size``)
    is ignored.
    """

    raw = str(token)
    parts = raw.split(":")
    name = parts[0]
    browser = parts[1] if len(parts) > 1 and parts[1] else None
    return SuiteSelector(name=name, browser=browser, raw=raw)


def parse_selectors(tokens: Iterable[Any]) -> List[SuiteSelector]:
    """Parse every token; :class:`SuiteSelector` objects pass through as is."""
    return [t if isinstance(t, SuiteSelector) else parse_selector(str(t)) for t in tokens]


def chunk_run_id(suite_name: str, index: int) -> str:
    """Key for the ``index``-th (1-based) chunk of a suite."""
    return f"{suite_name}:chunk{index}"


def browser_run_id(entry_key: str, browser_name: str, occurrence: int) -> str:
    """Key for the ``occurrence``-th (1-based) use of a browser in an entry."""
    return f"{entry_key}:{browser_name}{occurrence}"


def safe_run_dir_name(run_id: str) -> str:
    """Filesystem-friendly folder name for a run id.

    Examples
    --------
    "checkout:chunk2:chrome1" -> "checkout_chunk2_chrome1"
    "smoke tests:firefox1"    -> "smoke_tests_firefox1"
    """

    v = _UNSAFE_DIR_CHARS.sub("_", (run_id or "").strip())
    v = re.sub(r"_+", "_", v).strip("_")
    if not v:
        raise ValueError("Empty run directory name after sanitization.")
    return v
