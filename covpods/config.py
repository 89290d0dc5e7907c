"""Configuration loading for covpods (.covpods.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .naming import COUNTER_FILE_PREFIX, META_FILE_PREFIX

CONFIG_FILENAME = ".covpods.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class NamingConfig:
    """Filename prefixes expected from the coverage writer."""

    meta_prefix: str = META_FILE_PREFIX
    counter_prefix: str = COUNTER_FILE_PREFIX


@dataclass
class CollectConfig:
    """Defaults for a collection run."""

    track_origins: bool = False
    warn_orphans: bool = False


@dataclass
class CovPodsConfig:
    """Represents the settings defined in .covpods.yml."""

    naming: NamingConfig = field(default_factory=NamingConfig)
    collect: CollectConfig = field(default_factory=CollectConfig)


def load_config(config_path: Path) -> CovPodsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return CovPodsConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    naming = NamingConfig()
    naming_data = _as_dict(data.get("naming"))
    if naming_data:
        naming.meta_prefix = _as_prefix(naming_data.get("meta_prefix"), "meta_prefix") or naming.meta_prefix
        naming.counter_prefix = (
            _as_prefix(naming_data.get("counter_prefix"), "counter_prefix") or naming.counter_prefix
        )
    if naming.meta_prefix == naming.counter_prefix:
        raise ConfigError("naming.meta_prefix and naming.counter_prefix must differ")

    collect = CollectConfig()
    collect_data = _as_dict(data.get("collect"))
    if collect_data:
        track = _as_bool(collect_data.get("track_origins"))
        if track is not None:
            collect.track_origins = track
        warn = _as_bool(collect_data.get("warn_orphans"))
        if warn is not None:
            collect.warn_orphans = warn

    return CovPodsConfig(naming=naming, collect=collect)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_prefix(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"naming.{key} must be a non-empty string")
    if "." in value or "/" in value:
        raise ConfigError(f"naming.{key} must not contain '.' or '/'")
    return value.strip()


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "CollectConfig", "ConfigError", "CovPodsConfig", "NamingConfig", "load_config"]
