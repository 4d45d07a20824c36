"""
Statistics over workout history.

Pure functions: callers pass a snapshot of the completion log and the
current calendar day. Nothing here touches storage.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta

from .calendar import parse_date, start_of_week
from .models import ExerciseProgress, PerformanceEntry, WorkoutSession, WorkoutStats


def total_workouts(history: Sequence[WorkoutSession]) -> int:
    """Number of sessions in the retained history."""
    return len(history)


def count_this_week(history: Iterable[WorkoutSession], today: date) -> int:
    """
    Count sessions dated on or after the most recent Sunday.

    Args:
        history: Completed sessions
        today: Current calendar day

    Returns:
        Number of sessions in the current Sunday-based week
    """
    week_start = start_of_week(today)
    return sum(1 for s in history if parse_date(s.date) >= week_start)


def calculate_streak(history: Sequence[WorkoutSession], today: date) -> int:
    """
    Count consecutive workout days ending today or yesterday.

    The most recent session must be dated today or yesterday, otherwise the
    streak is broken and 0 is returned. From there, walk back through the
    sessions (newest first) while each one is exactly one day before the
    previous; the first gap ends the streak.

    Args:
        history: Completed sessions in any order
        today: Current calendar day

    Returns:
        Length of the current streak in days
    """
    if not history:
        return 0

    dates = sorted((parse_date(s.date) for s in history), reverse=True)
    yesterday = today - timedelta(days=1)

    if dates[0] not in (today, yesterday):
        return 0

    streak = 1
    anchor = dates[0]
    for d in dates[1:]:
        expected = anchor - timedelta(days=1)
        if d != expected:
            break
        streak += 1
        anchor = expected

    return streak


def calculate_days_since_last(
    history: Sequence[WorkoutSession], today: date
) -> int | None:
    """
    Whole days between the most recent session and today.

    Returns:
        Day count (0 if trained today), or None with no history
    """
    if not history:
        return None
    latest = max(parse_date(s.date) for s in history)
    return (today - latest).days


def compute_stats(history: Sequence[WorkoutSession], today: date) -> WorkoutStats:
    """Bundle all headline statistics for *today*."""
    return WorkoutStats(
        total=total_workouts(history),
        this_week=count_this_week(history, today),
        streak=calculate_streak(history, today),
        days_since_last=calculate_days_since_last(history, today),
    )


def summarize_exercise_progress(
    histories: Mapping[str, Sequence[PerformanceEntry]],
) -> list[ExerciseProgress]:
    """
    Per-exercise progress, most recently trained first.

    "Latest" and "first" are the last and first stored entries, matching
    how the ledger defines last performance. Exercises with no entries are
    left out.

    Args:
        histories: Mapping exercise_id -> stored entries

    Returns:
        List of ExerciseProgress sorted by latest entry date, newest first
    """
    summaries = [
        ExerciseProgress(
            exercise_id=exercise_id,
            latest=entries[-1],
            first=entries[0],
            entry_count=len(entries),
        )
        for exercise_id, entries in histories.items()
        if entries
    ]
    summaries.sort(key=lambda p: p.latest.date, reverse=True)
    return summaries
