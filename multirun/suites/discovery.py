"""multirun.suites.discovery

Test file discovery and content filtering.

Two filesystem reads happen in the whole planner, and both live here:

* glob resolution (:func:`find_files`)
* reading a file's text for the grep filter (:func:`grep_file`)

Glob patterns accept ``**`` and ``{a,b}`` brace alternation. Brace support is
what lets a chunk's ``tests`` value (see :func:`multirun.suites.chunks.flatten_files`)
be fed back into any glob-aware runner, including this module.
"""

from __future__ import annotations

import glob
import logging
import os
import re
from pathlib import Path
from typing import List, Pattern, Union

from multirun.errors import GrepPatternError

logger = logging.getLogger(__name__)

GrepLike = Union[str, Pattern[str]]


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternations into plain glob patterns.

    Alternatives keep their declared order; nested braces are supported.
    A brace group without a top-level comma is left untouched.

    Examples
    --------
    "tests/{a,b}_test.js" -> ["tests/a_test.js", "tests/b_test.js"]
    "{x,y{1,2}}"          -> ["x", "y1", "y2"]
    """

    depth = 0
    start = -1
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                options = _split_top_level(pattern[start + 1 : i])
                if len(options) < 2:
                    continue
                prefix, suffix = pattern[:start], pattern[i + 1 :]
                out: List[str] = []
                for opt in options:
                    out.extend(expand_braces(prefix + opt + suffix))
                return out
    return [pattern]


def _split_top_level(body: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in body:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def find_files(pattern: str) -> List[str]:
    """Resolve a glob pattern to an ordered list of absolute file paths.

    Each brace alternative is globbed in turn and its matches are returned in
    sorted order (the order of the reference glob engine). A path matched by
    more than one alternative is reported once, at its first position.
    """

    files: List[str] = []
    seen: set[str] = set()
    for alternative in expand_braces(pattern):
        for match in sorted(glob.glob(alternative, recursive=True)):
            path = os.path.abspath(match)
            if path in seen or not os.path.isfile(path):
                continue
            seen.add(path)
            files.append(path)

    logger.debug("glob %r matched %d file(s)", pattern, len(files))
    return files


def literal_pattern(path: str) -> str:
    """Glob pattern that matches exactly ``path``.

    ``*``, ``?`` and ``[`` are escaped with :func:`glob.escape`. Braces and
    commas have no escape inside a ``{a,b}`` group, so a path containing them
    is logged as a warning and will not resolve back to itself.
    """

    if any(ch in path for ch in "{},"):
        logger.warning("path %r contains brace or comma characters; its chunk pattern will not match it", path)
    return glob.escape(path)


def compile_grep(grep: str) -> Pattern[str]:
    """Build the Scenario/Feature declaration filter for a grep fragment.

    The fragment is interpolated raw, so regex syntax inside it is honoured.
    """

    source = rf"((Scenario|Feature)\(.*{grep}.*\))"
    try:
        return re.compile(source)
    except re.error as exc:
        raise GrepPatternError(str(grep), str(exc)) from exc


def grep_file(file: Union[str, Path], grep: GrepLike) -> bool:
    """Return True if ``file`` declares a Scenario/Feature matching ``grep``."""

    pattern = grep if isinstance(grep, re.Pattern) else compile_grep(grep)
    contents = Path(file).read_text(encoding="utf-8", errors="replace")
    return pattern.search(contents) is not None
