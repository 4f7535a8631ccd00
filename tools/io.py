#!/usr/bin/env python3
"""tools/io.py

Single source of truth for tiny filesystem helpers.

Why this file exists
--------------------
The planner writes JSON manifests and tests read them back. Keeping one
write_json / read_json pair avoids two helpers drifting apart (different
indentation, different encoding, partial files on crash).

Design
------
- This module is intentionally small.
- It contains ONLY filesystem IO (no planning policy).
- It must not import from ``multirun`` or ``cli``.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def write_json(path: Path, data: Any) -> None:
    """Write pretty JSON to disk (UTF-8).

    The payload goes to a temp file in the same directory first and is then
    moved into place, so readers never see a half-written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def read_json(path: Path) -> Any:
    """Read JSON from disk (UTF-8)."""
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
