"""multirun.suites.config_loader

Load a multi-suite config from disk.

Supported formats
-----------------
- ``.yaml`` / ``.yml``: parsed with ``yaml.safe_load``
- ``.json``
- ``.py``: a Python module exporting ``CONFIG`` (or ``config``) as a mapping.
  Python configs are the only way to pass a callable ``chunks`` splitter.

All formats must produce a mapping at the top level. The loader only parses;
it does not validate suites (that happens when runs are planned).
"""

from __future__ import annotations

import importlib.util
import json
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Mapping, Optional

import yaml

from multirun.errors import ConfigurationError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
CONFIG_EXPORTS = ("CONFIG", "config")


def _load_module_from_path(path: Path) -> ModuleType:
    mod_name = f"multirun_config_{path.stem}_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(mod_name, str(path))
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Unable to import config file: {path}")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)  # type: ignore[union-attr]
    return mod


def _load_py(path: Path) -> Any:
    mod = _load_module_from_path(path)
    for name in CONFIG_EXPORTS:
        if hasattr(mod, name):
            return getattr(mod, name)
    raise ConfigurationError(f"Config .py must export CONFIG (a mapping): {path}")


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {exc}") from exc


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load a config file and return it as a plain dict."""

    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise ConfigurationError(f"Config file not found: {p}")

    suffix = p.suffix.lower()
    if suffix in YAML_SUFFIXES:
        raw = _load_yaml(p)
    elif suffix == ".json":
        raw = _load_json(p)
    elif suffix == ".py":
        raw = _load_py(p)
    else:
        raise ConfigurationError(f"Unsupported config format {p.suffix!r} (expected .yaml, .yml, .json or .py): {p}")

    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Config must be a mapping/object at top level: {p}")

    logger.debug("loaded config %s (%d suite(s))", p, len(raw.get("multiple") or {}))
    return dict(raw)


def resolve_config_path(explicit: Optional[str], *, default: Optional[str] = None) -> Path:
    """Pick the config path: explicit flag, then ``default`` (usually from env)."""

    candidate = explicit or default
    if not candidate:
        raise ConfigurationError("No config file given. Pass --config or set MULTIRUN_CONFIG.")
    return Path(candidate).expanduser().resolve()
