"""multirun.suites.chunks

Split a suite's matching test files into balanced, contiguous chunks.

A chunk is the unit of parallelism: every chunk becomes its own run config
whose ``tests`` value is a single glob pattern naming exactly the chunk's files.
For a given suite the chunks partition the (grep-filtered) file list: no file
is in two chunks and none is dropped.

Each path is glob-escaped first, so a file named ``[x]_test.js`` still resolves
to itself. Paths containing braces or commas cannot be expressed this way and
are logged as a warning.

Sizing rule
-----------
``size = ceil(len(files) / chunks)`` and files are taken from the front, so
5 files over 3 chunks gives ``[2, 2, 1]`` and 2 files over 5 chunks gives two
chunks of one file. Fewer chunks than requested is expected, not an error.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from multirun.errors import ConfigurationError
from multirun.suites.discovery import compile_grep, find_files, grep_file, literal_pattern

logger = logging.getLogger(__name__)

FEATURE_SUFFIX = ".feature"

Patterns = Union[str, Sequence[Optional[str]], None]


def split_files(files: Sequence[str], size: int) -> List[List[str]]:
    """Partition ``files`` into contiguous groups of at most ``size``.

    The input sequence is not modified.
    """

    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}")
    return [list(files[i : i + size]) for i in range(0, len(files), size)]


def flatten_files(files: Sequence[str]) -> str:
    """Join files into one glob pattern: ``a`` or ``{a,b,c}``."""
    if len(files) > 1:
        return "{" + ",".join(files) + "}"
    return "".join(files)


def chunk_count(value: Any) -> Optional[float]:
    """Return ``value`` as a usable chunk count, or None.

    Accepts finite positive numbers and numeric strings. Booleans are rejected
    even though they are ints.
    """

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _normalize_patterns(patterns: Patterns) -> List[str]:
    if patterns is None:
        return []
    if isinstance(patterns, str):
        patterns = [patterns]
    return [str(p) for p in patterns if p]


def collect_files(config: Mapping[str, Any], patterns: Patterns) -> List[str]:
    """Resolve every pattern and apply the config's grep filter."""

    files: List[str] = []
    for pattern in _normalize_patterns(patterns):
        files.extend(find_files(pattern))

    grep = config.get("grep")
    if not grep:
        return files

    # Compile before reading anything so a bad fragment fails even with no files.
    pattern = compile_grep(str(grep))
    matched = [f for f in files if grep_file(f, pattern)]
    logger.debug("grep %r kept %d of %d file(s)", grep, len(matched), len(files))
    return matched


def _group_files(files: List[str], chunks: Any) -> List[List[str]]:
    if callable(chunks):
        groups = chunks(list(files)) or []
        return [list(g) for g in groups]

    count = chunk_count(chunks)
    if count is None:
        raise ConfigurationError(f"chunks is neither a finite positive number nor a function: {chunks!r}")
    if not files:
        return []
    return split_files(files, math.ceil(len(files) / count))


def _chunk_entry(chunk_config: Mapping[str, Any], files: Sequence[str]) -> Dict[str, Any]:
    tests = [f for f in files if not f.endswith(FEATURE_SUFFIX)]
    features = [f for f in files if f.endswith(FEATURE_SUFFIX)]

    entry = dict(chunk_config)
    entry["tests"] = flatten_files([literal_pattern(f) for f in tests])
    if features:
        gherkin = chunk_config.get("gherkin")
        base = gherkin if isinstance(gherkin, Mapping) else {}
        entry["gherkin"] = {**base, "features": flatten_files([literal_pattern(f) for f in features])}
    return entry


def create_chunks(config: Mapping[str, Any], patterns: Patterns) -> List[Dict[str, Any]]:
    """Build one run config per chunk of the files matched by ``patterns``.

    ``config["chunks"]`` is either a chunk count or a function that receives
    the file list and returns the groups itself. Each returned config is a
    fresh copy of ``config`` without ``chunks`` and with ``tests`` set to the
    chunk's files. Gherkin ``.feature`` files go to ``gherkin.features``
    instead of ``tests``.

    An empty file list yields no chunks.
    """

    files = collect_files(config, patterns)
    groups = _group_files(files, config.get("chunks"))

    chunk_config = {k: v for k, v in config.items() if k != "chunks"}
    return [_chunk_entry(chunk_config, group) for group in groups]
