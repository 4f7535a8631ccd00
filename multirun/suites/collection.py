"""multirun.suites.collection

Compose the run-unit map for ``run-multiple`` style execution.

Given the operator's selectors and a config with a ``multiple`` section, the
planner produces a flat mapping ``run id -> run config`` where every run config
targets exactly one browser and (when the suite is chunked) exactly one chunk
of its test files. Each entry can be handed to its own worker.

Passes
------
The work is four sequential passes. Each one is a fold: it reads the previous
map and builds a brand-new one, so no pass mutates the map it iterates or the
config it was given.

1. :func:`seed_runs`                 selectors -> ``{suite: definition}``
2. :func:`expand_chunks`             ``suite`` -> ``suite:chunk1..N``
3. :func:`expand_browsers`           ``entry`` -> ``entry:<browser><n>``
4. :func:`filter_selected_browsers`  drop browsers excluded by ``suite:browser`` selectors

Entries that expand to nothing (no matching files, empty ``browsers``) simply
disappear from the result. Two entries that land on the same run id (a suite
literally named ``s:chunk1`` next to a chunked suite ``s``) are a
:class:`~multirun.errors.ConfigurationError`, never a silent overwrite.
"""

from __future__ import annotations

import logging
from collections import Counter, abc
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from multirun.errors import ConfigurationError
from multirun.identifiers import browser_run_id, chunk_run_id, parse_selectors
from multirun.models import RunConfig, RunMap, SuiteSelector
from multirun.suites.chunks import chunk_count, create_chunks

logger = logging.getLogger(__name__)

PARENT_KEY = "parent_suite_name"


def _multiple_section(config: Mapping[str, Any]) -> Mapping[str, Any]:
    multiple = config.get("multiple")
    if not isinstance(multiple, Mapping):
        raise ConfigurationError('Multiple suites not configured, add a "multiple" section to the config')
    return multiple


def _add_run(out: RunMap, key: str, entry: RunConfig) -> None:
    if key in out:
        raise ConfigurationError(
            f"Run id {key!r} is produced twice; rename the suite that collides with a chunk or browser id"
        )
    out[key] = entry


# ---------------------------------------------------------------------------
# Pass 0: seed
# ---------------------------------------------------------------------------


def seed_runs(selectors: Sequence[SuiteSelector], config: Mapping[str, Any]) -> RunMap:
    """Build ``{suite name: definition copy}`` for the selected suites.

    ``all`` selects every configured suite. Unknown names abort the whole plan.
    A suite selected more than once (``login:chrome login:firefox``) is seeded
    once.
    """

    multiple = _multiple_section(config)

    names: List[str] = []
    for sel in selectors:
        names.extend(multiple.keys() if sel.selects_all else [sel.name])

    runs: RunMap = {}
    for name in names:
        if name in runs:
            continue
        definition = multiple.get(name)
        if not isinstance(definition, Mapping):
            raise ConfigurationError(f'Suite "{name}" was not configured in "multiple" section of config')
        runs[name] = {**definition, PARENT_KEY: name}
    return runs


# ---------------------------------------------------------------------------
# Pass 1: chunks
# ---------------------------------------------------------------------------


def _wants_chunks(entry: Mapping[str, Any]) -> bool:
    chunks = entry.get("chunks")
    return callable(chunks) or chunk_count(chunks) is not None


def chunk_patterns(entry: Mapping[str, Any], config: Mapping[str, Any]) -> List[str]:
    """Test patterns a chunked entry splits: its own ``tests`` (or the root
    ``tests``) plus the root gherkin ``features`` pattern when configured."""

    patterns: List[str] = []
    tests = entry.get("tests") or config.get("tests")
    if tests:
        patterns.append(str(tests))

    gherkin = config.get("gherkin")
    if isinstance(gherkin, Mapping) and gherkin.get("features"):
        patterns.append(str(gherkin["features"]))
    return patterns


def expand_chunks(runs: Mapping[str, RunConfig], config: Mapping[str, Any]) -> RunMap:
    """Replace every chunked entry by ``<name>:chunk<i>`` entries."""

    out: RunMap = {}
    for name, entry in runs.items():
        patterns = chunk_patterns(entry, config)
        if not _wants_chunks(entry) or not patterns:
            _add_run(out, name, dict(entry))
            continue

        chunk_configs = create_chunks(entry, patterns)
        if not chunk_configs:
            logger.debug("suite %r matched no test files; dropping it", name)
        for index, chunk_config in enumerate(chunk_configs, start=1):
            _add_run(out, chunk_run_id(name, index), chunk_config)
    return out


# ---------------------------------------------------------------------------
# Pass 2: browsers
# ---------------------------------------------------------------------------


def guess_browsers(config: Mapping[str, Any]) -> List[Any]:
    """Fallback browser list: the ``browser`` of the first configured helper."""

    helpers = config.get("helpers")
    if not isinstance(helpers, Mapping) or not helpers:
        return []
    first = next(iter(helpers.values()))
    if isinstance(first, Mapping) and first.get("browser"):
        return [first["browser"]]
    return []


def normalize_browser(browser: Any, *, entry_key: str) -> Dict[str, Any]:
    """Return a fresh ``{"browser": name, ...}`` dict for a browsers element."""

    if isinstance(browser, Mapping):
        if not browser.get("browser"):
            raise ConfigurationError(f"Browser entry in {entry_key!r} has no 'browser' name: {dict(browser)!r}")
        return dict(browser)
    if isinstance(browser, str) and browser:
        return {"browser": browser}
    raise ConfigurationError(f"Unsupported browser entry in {entry_key!r}: {browser!r}")


def expand_browsers(runs: Mapping[str, RunConfig], config: Mapping[str, Any]) -> RunMap:
    """Replace every entry by one entry per declared browser.

    Repeated browser names are numbered in first-seen order
    (``chrome1``, ``chrome2``, ``firefox1``).
    """

    out: RunMap = {}
    for key, entry in runs.items():
        browsers = entry.get("browsers")
        if isinstance(browsers, str) or not isinstance(browsers, abc.Sequence):
            browsers = guess_browsers(config)
        if not browsers:
            logger.debug("run %r declares no browsers; dropping it", key)

        base = {k: v for k, v in entry.items() if k != "browsers"}
        seen: Counter[str] = Counter()
        for raw in browsers:
            spec = normalize_browser(raw, entry_key=key)
            name = str(spec["browser"])
            seen[name] += 1
            _add_run(out, browser_run_id(key, name, seen[name]), {**base, "browser": spec})
    return out


# ---------------------------------------------------------------------------
# Pass 3: selector filter
# ---------------------------------------------------------------------------


def _browser_name(entry: Mapping[str, Any]) -> Optional[str]:
    browser = entry.get("browser")
    if isinstance(browser, Mapping):
        return browser.get("browser")
    return None


def filter_selected_browsers(runs: Mapping[str, RunConfig], selectors: Sequence[SuiteSelector]) -> RunMap:
    """Drop runs excluded by ``suite:browser`` selectors.

    For every qualified selector, runs of that suite on any other browser are
    removed. Selectors are applied independently, so ``login:chrome`` together
    with ``login:firefox`` removes every ``login`` run.
    """

    qualified = [s for s in selectors if s.browser]
    out: RunMap = {}
    for key, entry in runs.items():
        parent = entry.get(PARENT_KEY)
        browser = _browser_name(entry)
        excluded = any(s.name == parent and s.browser != browser for s in qualified)
        if not excluded:
            out[key] = entry
    return out


# ---------------------------------------------------------------------------
# Public entrypoint
# ---------------------------------------------------------------------------


def prepare_suites(selection: Iterable[Any], config: Mapping[str, Any]) -> RunMap:
    """Plan the run units for ``selection`` against ``config``.

    ``selection`` holds selector strings (``"smoke"``, ``"login:chrome"``,
    ``"all"``) or :class:`~multirun.models.SuiteSelector` objects.

    Raises
    ------
    ConfigurationError
        The config has no ``multiple`` section, a selected suite is not
        configured, or a browser / chunks value is malformed.
    GrepPatternError
        A suite's grep fragment is not a valid regular expression.
    """

    selectors = parse_selectors(selection)

    runs = seed_runs(selectors, config)
    runs = expand_chunks(runs, config)
    runs = expand_browsers(runs, config)
    runs = filter_selected_browsers(runs, selectors)

    logger.info("planned %d run(s) for %s", len(runs), ", ".join(s.describe() for s in selectors))
    return runs
