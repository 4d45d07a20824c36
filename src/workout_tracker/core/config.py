"""
Configuration constants for the workout tracker.

All adjustable parameters are centralized here. User overrides for the
tunable ones are loaded by core.engine.config_loader.
"""

from pathlib import Path
from typing import Final

# =============================================================================
# UNITS
# =============================================================================

KG_TO_LBS_FACTOR: Final[float] = 2.205  # Fixed factor, not the exact SI one
WEIGHT_DECIMALS: Final[int] = 1  # Converted weights are rounded to tenths
DEFAULT_UNIT: Final[str] = "kg"
VALID_UNITS: Final[tuple[str, ...]] = ("kg", "lbs")

# =============================================================================
# RETENTION
# =============================================================================

RETENTION_DAYS: Final[int] = 90  # Entries older than this are purged on write

# =============================================================================
# PROGRESSIVE OVERLOAD
# =============================================================================

PROGRESSION_INCREMENT_KG: Final[float] = 2.5  # Added once the rep target is hit
FIRST_TIME_MESSAGE: Final[str] = "First time - start light!"

# =============================================================================
# WORKOUT TYPES
# =============================================================================

VALID_WORKOUT_TYPES: Final[tuple[str, ...]] = ("gym", "run")

# =============================================================================
# STORAGE KEYS
# =============================================================================

KEY_PREFERENCES: Final[str] = "workout_preferences"
KEY_EXERCISE_HISTORY: Final[str] = "exercise_history"
KEY_WORKOUT_HISTORY: Final[str] = "workout_history"
KEY_WEEK_COUNTER: Final[str] = "week_counter"

ALL_STORAGE_KEYS: Final[tuple[str, ...]] = (
    KEY_WORKOUT_HISTORY,
    KEY_EXERCISE_HISTORY,
    KEY_PREFERENCES,
    KEY_WEEK_COUNTER,
)

# =============================================================================
# FILES
# =============================================================================

DATA_DIR_NAME: Final[str] = ".workout-tracker"
SETTINGS_FILE_NAME: Final[str] = "settings.yaml"
HOME_ENV_VAR: Final[str] = "WORKOUT_TRACKER_HOME"


def default_base_dir() -> Path:
    """Return ~/.workout-tracker (no environment override applied)."""
    return Path.home() / DATA_DIR_NAME
