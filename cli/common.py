from __future__ import annotations

"""cli.common

Small shared helpers for CLI command modules.
"""

from typing import Iterable, List, Optional


def parse_csv(raw: Optional[str]) -> list[str]:
    """Parse a comma-separated list value into a list of non-empty strings."""
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def flatten_selection(tokens: Iterable[str]) -> List[str]:
    """Split ``smoke,login:chrome regression`` style tokens into selectors."""
    out: List[str] = []
    for token in tokens:
        out.extend(parse_csv(token))
    return out
