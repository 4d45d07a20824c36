"""
JSON serialization for tracker data models.

Handles conversion between dataclasses and JSON-compatible dicts. The
``dict_to_*`` converters raise ValidationError; the ``decode_*`` functions
are the single seam where stored documents are turned into typed records,
falling back to defaults (and logging) when the stored data is malformed.
"""

import logging
import math
import re
from typing import Any

from ..core.calendar import parse_date
from ..core.config import DEFAULT_UNIT, VALID_UNITS, VALID_WORKOUT_TYPES
from ..core.models import (
    ExerciseResult,
    PerformanceEntry,
    Preferences,
    WeekCounter,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: Any) -> str:
    """
    Validate an ISO calendar day string.

    Args:
        date_str: Value to validate

    Returns:
        The same YYYY-MM-DD string

    Raises:
        ValidationError: If the value is not a valid date string
    """
    try:
        parse_date(date_str)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return date_str


def _number(data: dict[str, Any], name: str, default: float = 0.0) -> float:
    value = data.get(name, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    return float(value)


def _integer(data: dict[str, Any], name: str, default: int = 0) -> int:
    return int(_number(data, name, default))


def _require_dict(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be an object, got {type(data).__name__}")
    return data


# =============================================================================
# PREFERENCES
# =============================================================================


def preferences_to_dict(prefs: Preferences) -> dict[str, Any]:
    """Convert Preferences to its stored form."""
    return {"unit": prefs.unit, "lastVisit": prefs.last_visit}


def dict_to_preferences(data: Any) -> Preferences:
    """
    Convert a stored dict to Preferences.

    Raises:
        ValidationError: If the unit is unknown
    """
    data = _require_dict(data, "preferences")
    unit = data.get("unit", DEFAULT_UNIT)
    if unit not in VALID_UNITS:
        raise ValidationError(f"Invalid unit: {unit!r}. Must be one of {VALID_UNITS}")
    last_visit = data.get("lastVisit")
    return Preferences(unit=unit, last_visit=last_visit if isinstance(last_visit, str) else None)


# =============================================================================
# EXERCISE HISTORY
# =============================================================================


def performance_entry_to_dict(entry: PerformanceEntry) -> dict[str, Any]:
    """Convert PerformanceEntry to its stored form."""
    return {
        "weight": entry.weight,
        "reps": entry.reps,
        "sets": entry.sets,
        "date": entry.date,
    }


def dict_to_performance_entry(data: Any) -> PerformanceEntry:
    """
    Convert a stored dict to PerformanceEntry.

    Missing numeric fields default to 0; the date is required.

    Raises:
        ValidationError: If the date is missing/invalid or a field has the wrong type
    """
    data = _require_dict(data, "exercise entry")
    return PerformanceEntry(
        date=validate_date(data.get("date")),
        weight=_number(data, "weight"),
        reps=_integer(data, "reps"),
        sets=_integer(data, "sets"),
    )


def exercise_histories_to_dict(
    histories: dict[str, list[PerformanceEntry]],
) -> dict[str, list[dict[str, Any]]]:
    """Convert the per-exercise ledger to its stored form."""
    return {
        exercise_id: [performance_entry_to_dict(e) for e in entries]
        for exercise_id, entries in histories.items()
    }


# =============================================================================
# WORKOUT HISTORY
# =============================================================================


def exercise_result_to_dict(result: ExerciseResult) -> dict[str, Any]:
    """Convert ExerciseResult to its stored form."""
    return {
        "id": result.id,
        "completed": result.completed,
        "weight": result.weight,
        "reps": result.reps,
        "sets": result.sets,
    }


def dict_to_exercise_result(data: Any) -> ExerciseResult:
    """
    Convert a stored dict to ExerciseResult.

    Raises:
        ValidationError: If the id is missing or a field has the wrong type
    """
    data = _require_dict(data, "exercise result")
    exercise_id = data.get("id")
    if not isinstance(exercise_id, str) or not exercise_id:
        raise ValidationError(f"Invalid exercise id: {exercise_id!r}")
    return ExerciseResult(
        id=exercise_id,
        completed=bool(data.get("completed", False)),
        weight=_number(data, "weight"),
        reps=_integer(data, "reps"),
        sets=_integer(data, "sets"),
    )


def workout_session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    """Convert WorkoutSession to its stored form."""
    return {
        "date": session.date,
        "type": session.type,
        "workout": session.workout_id,
        "exercises": [exercise_result_to_dict(e) for e in session.exercises],
    }


def dict_to_workout_session(data: Any) -> WorkoutSession:
    """
    Convert a stored dict to WorkoutSession.

    Raises:
        ValidationError: If any field is invalid
    """
    data = _require_dict(data, "workout session")
    workout_type = data.get("type")
    if workout_type not in VALID_WORKOUT_TYPES:
        raise ValidationError(
            f"Invalid workout type: {workout_type!r}. Must be one of {VALID_WORKOUT_TYPES}"
        )
    workout_id = data.get("workout", "")
    if not isinstance(workout_id, str):
        raise ValidationError(f"Invalid workout id: {workout_id!r}")
    exercises = data.get("exercises") or []
    if not isinstance(exercises, list):
        raise ValidationError("exercises must be a list")
    return WorkoutSession(
        date=validate_date(data.get("date")),
        type=workout_type,
        workout_id=workout_id,
        exercises=[dict_to_exercise_result(e) for e in exercises],
    )


# =============================================================================
# WEEK COUNTER
# =============================================================================


def week_counter_to_dict(counter: WeekCounter) -> dict[str, Any]:
    """Convert WeekCounter to its stored form."""
    return {"week": counter.parity, "lastUpdated": counter.last_updated_week_key}


def dict_to_week_counter(data: Any) -> WeekCounter:
    """
    Convert a stored dict to WeekCounter.

    A non-string week key (older data stored a bare week number) is kept as
    its string form; it never equals a current key, so the next read flips
    once and rewrites it.

    Raises:
        ValidationError: If the parity is not 0 or 1
    """
    data = _require_dict(data, "week counter")
    parity = data.get("week", 0)
    if parity not in (0, 1) or isinstance(parity, bool):
        raise ValidationError(f"Invalid week parity: {parity!r}")
    key = data.get("lastUpdated")
    return WeekCounter(parity=int(parity), last_updated_week_key=None if key is None else str(key))


# =============================================================================
# DECODING SEAM
# =============================================================================


def decode_preferences(raw: Any) -> Preferences:
    """Stored preferences document -> Preferences (defaults when absent/malformed)."""
    if raw is None:
        return Preferences()
    try:
        return dict_to_preferences(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed preferences: %s", e)
        return Preferences()


def decode_week_counter(raw: Any) -> WeekCounter:
    """Stored week counter document -> WeekCounter (defaults when absent/malformed)."""
    if raw is None:
        return WeekCounter()
    try:
        return dict_to_week_counter(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed week counter: %s", e)
        return WeekCounter()


def decode_exercise_histories(raw: Any) -> dict[str, list[PerformanceEntry]]:
    """
    Stored exercise history document -> mapping exercise_id -> entries.

    A non-object document yields an empty mapping. Inside a valid document,
    exercises whose value is not a list and individual malformed entries are
    skipped; stored order is preserved.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed exercise history: expected an object")
        return {}

    histories: dict[str, list[PerformanceEntry]] = {}
    for exercise_id, entries in raw.items():
        if not isinstance(entries, list):
            logger.warning("Ignoring malformed history for %r: expected a list", exercise_id)
            continue
        decoded: list[PerformanceEntry] = []
        for item in entries:
            try:
                decoded.append(dict_to_performance_entry(item))
            except ValidationError as e:
                logger.warning("Skipping malformed entry for %r: %s", exercise_id, e)
        histories[exercise_id] = decoded
    return histories


def decode_workout_history(raw: Any) -> list[WorkoutSession]:
    """
    Stored workout history document -> list of sessions in stored order.

    A non-list document yields an empty list; malformed sessions are skipped.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring malformed workout history: expected a list")
        return []

    sessions: list[WorkoutSession] = []
    for item in raw:
        try:
            sessions.append(dict_to_workout_session(item))
        except ValidationError as e:
            logger.warning("Skipping malformed workout session: %s", e)
    return sessions


# =============================================================================
# CLI INPUT
# =============================================================================

_RESULT_RE = re.compile(
    r"^\s*(?P<id>[A-Za-z0-9_]+)\s*=\s*(?P<weight>\d+(?:\.\d+)?)\s*x\s*(?P<reps>\d+)"
    r"(?:\s*x\s*(?P<sets>\d+))?\s*$"
)


def parse_result_string(text: str) -> tuple[str, float, int, int | None]:
    """
    Parse an exercise result typed on the command line.

    Format: ``exercise_id=WEIGHTxREPS[xSETS]``, e.g. ``bench_press=60x10x3``.
    The weight is in the user's display unit; sets may be omitted.

    Args:
        text: Result string

    Returns:
        (exercise_id, weight, reps, sets or None)

    Raises:
        ValidationError: If the string does not match the format
    """
    match = _RESULT_RE.match(text)
    if match is None:
        raise ValidationError(
            f"Invalid exercise result: {text!r}. Expected id=WEIGHTxREPS[xSETS], "
            "e.g. bench_press=60x10x3"
        )
    sets = match.group("sets")
    return (
        match.group("id"),
        float(match.group("weight")),
        int(match.group("reps")),
        int(sets) if sets is not None else None,
    )
