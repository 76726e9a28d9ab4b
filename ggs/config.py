"""Scan configuration — defaults, optional YAML file, CLI overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".ggs.yaml"
DEFAULT_SKIP: frozenset[str] = frozenset()


@dataclass
class ScanConfig:
    git: str = "git"
    timeout: float = 10.0
    jobs: int = 1
    skip: frozenset[str] = field(default_factory=lambda: DEFAULT_SKIP)
    include_hidden: bool = True
    marker: str = ".git"

    def with_overrides(self, **overrides: Any) -> "ScanConfig":
        """Return a copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ScanConfig(**values)


def _coerce(data: dict[str, Any], source: Path) -> ScanConfig:
    """Validate raw YAML values into a ScanConfig."""
    known = {f.name for f in fields(ScanConfig)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.debug("ignoring unknown config key %r in %s", key, source)
            continue
        values[key] = value

    def bad(key: str, expected: str) -> ConfigError:
        return ConfigError(f"{source}: '{key}' must be {expected}, got {values[key]!r}")

    if "git" in values and (not isinstance(values["git"], str) or not values["git"]):
        raise bad("git", "a non-empty string")
    if "marker" in values and (not isinstance(values["marker"], str) or not values["marker"]):
        raise bad("marker", "a non-empty string")
    if "timeout" in values:
        if isinstance(values["timeout"], bool) or not isinstance(values["timeout"], (int, float)) or values["timeout"] <= 0:
            raise bad("timeout", "a positive number")
        values["timeout"] = float(values["timeout"])
    if "jobs" in values:
        if isinstance(values["jobs"], bool) or not isinstance(values["jobs"], int) or values["jobs"] < 1:
            raise bad("jobs", "an integer >= 1")
    if "include_hidden" in values and not isinstance(values["include_hidden"], bool):
        raise bad("include_hidden", "true or false")
    if "skip" in values:
        skip = values["skip"]
        if skip is None:
            skip = []
        if not isinstance(skip, list) or not all(isinstance(s, str) for s in skip):
            raise bad("skip", "a list of directory names")
        values["skip"] = frozenset(skip)
    return ScanConfig(**values)


def _read(path: Path) -> ScanConfig:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return _coerce(data, path)


def load_config(path: Path | None = None, root: Path | None = None) -> ScanConfig:
    """
    Load config from an explicit file, or from .ggs.yaml in the scan root.
    An explicit file must exist and be valid. A broken root file only warns.
    """
    if path is not None:
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        config = _read(path)
        logger.debug("loaded config from %s", path)
        return config
    if root is not None:
        candidate = Path(root) / CONFIG_FILENAME
        if candidate.is_file():
            try:
                config = _read(candidate)
            except ConfigError as e:
                logger.warning("ignoring %s: %s", candidate, e)
                return ScanConfig()
            logger.debug("loaded config from %s", candidate)
            return config
    return ScanConfig()
