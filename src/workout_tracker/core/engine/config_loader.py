"""
YAML -> typed settings loader.

Reads optional user overrides from ``~/.workout-tracker/settings.yaml``
(or ``$WORKOUT_TRACKER_HOME/settings.yaml``) and merges them over the
defaults in config.py.

Usage:
    from workout_tracker.core.engine.config_loader import load_settings
    settings = load_settings()
    settings.retention_days  # 90 unless overridden

Recognised keys: data_dir, retention_days, progression_increment_kg,
catalog_path. If the file has parse errors or bad values, a warning is
issued and the defaults are used for the affected keys.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    HOME_ENV_VAR,
    PROGRESSION_INCREMENT_KG,
    RETENTION_DAYS,
    SETTINGS_FILE_NAME,
    default_base_dir,
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} (with a warning) on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"workout-tracker: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _positive(raw: dict[str, Any], key: str, default: float, cast: type) -> Any:
    if key not in raw:
        return default
    try:
        value = cast(raw[key])
    except (TypeError, ValueError):
        value = None
    if value is None or value <= 0:
        warnings.warn(
            f"workout-tracker: invalid {key}={raw[key]!r} in settings; using {default}",
            stacklevel=3,
        )
        return default
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass
class Settings:
    """Resolved runtime settings."""

    data_dir: Path
    retention_days: int = RETENTION_DAYS
    progression_increment_kg: float = PROGRESSION_INCREMENT_KG
    catalog_path: Path | None = None  # None = bundled catalog.yaml


def get_base_dir() -> Path:
    """Base directory: $WORKOUT_TRACKER_HOME if set, else ~/.workout-tracker."""
    override = os.environ.get(HOME_ENV_VAR)
    return Path(override).expanduser() if override else default_base_dir()


def get_user_settings_path() -> Path | None:
    """Return the user settings.yaml if it exists, else None."""
    p = get_base_dir() / SETTINGS_FILE_NAME
    return p if p.exists() else None


def settings_from_dict(raw: dict[str, Any], base_dir: Path) -> Settings:
    """
    Build Settings from a parsed YAML mapping.

    Relative paths are resolved against *base_dir*.
    """
    data_dir = Path(str(raw.get("data_dir", base_dir))).expanduser()
    if not data_dir.is_absolute():
        data_dir = base_dir / data_dir

    catalog_path = None
    if raw.get("catalog_path"):
        catalog_path = Path(str(raw["catalog_path"])).expanduser()
        if not catalog_path.is_absolute():
            catalog_path = base_dir / catalog_path

    return Settings(
        data_dir=data_dir,
        retention_days=_positive(raw, "retention_days", RETENTION_DAYS, int),
        progression_increment_kg=_positive(
            raw, "progression_increment_kg", PROGRESSION_INCREMENT_KG, float
        ),
        catalog_path=catalog_path,
    )


def load_settings() -> Settings:
    """
    Load settings, applying the user override file when present.

    Returns:
        Settings with defaults for anything not overridden
    """
    base_dir = get_base_dir()
    path = get_user_settings_path()
    raw = _load_yaml_file(path) if path is not None else {}
    return settings_from_dict(raw, base_dir)
