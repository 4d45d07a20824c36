"""
Progressive-overload suggestions.

The rule only looks at the single last logged performance:
- no history            -> start light (caller falls back to catalog weight)
- hit the rep target    -> add a fixed increment
- missed the rep target -> same weight, chase the reps
"""

import re
from typing import Protocol

from .config import FIRST_TIME_MESSAGE, PROGRESSION_INCREMENT_KG
from .models import PerformanceEntry, RepTarget, Suggestion
from .units import format_number

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


class LastPerformanceSource(Protocol):
    """Anything that can report the last logged entry for an exercise."""

    def get_last_performance(self, exercise_id: str) -> PerformanceEntry | None: ...


def parse_target_reps(default_reps: RepTarget) -> int | None:
    """
    Resolve a catalog rep target to a single rep count.

    Ranges such as "8-12" resolve to their upper bound. Strings with no
    leading integer (e.g. "AMRAP") resolve to None.

    Args:
        default_reps: Rep count or "low-high" range string

    Returns:
        Target reps, or None if it cannot be parsed
    """
    if isinstance(default_reps, int):
        return default_reps
    match = _LEADING_INT_RE.match(str(default_reps).split("-")[-1])
    return int(match.group(1)) if match else None


def suggest_next(
    last: PerformanceEntry | None,
    default_sets: int,
    default_reps: RepTarget,
    increment_kg: float = PROGRESSION_INCREMENT_KG,
) -> Suggestion:
    """
    Suggest weight and reps for the next session of one exercise.

    Args:
        last: Last logged performance, or None if never logged
        default_sets: Catalog set count (echoed back)
        default_reps: Catalog rep target, count or "low-high" range
        increment_kg: Weight added when the rep target was reached

    Returns:
        Suggestion with weight in kg
    """
    if last is None:
        return Suggestion(
            weight=None,
            reps=default_reps,
            sets=default_sets,
            message=FIRST_TIME_MESSAGE,
            is_new=True,
        )

    target_reps = parse_target_reps(default_reps)

    if target_reps is not None and last.reps >= target_reps:
        return Suggestion(
            weight=last.weight + increment_kg,
            reps=default_reps,
            sets=default_sets,
            message=f"Progress! +{format_number(increment_kg)}kg from last time",
            is_progression=True,
        )

    aim = target_reps if target_reps is not None else default_reps
    return Suggestion(
        weight=last.weight,
        reps=default_reps,
        sets=default_sets,
        message=f"Same weight, aim for {aim} reps",
        is_progression=False,
    )


class ProgressionAdvisor:
    """Suggests the next session's load from an exercise ledger."""

    def __init__(
        self,
        ledger: LastPerformanceSource,
        increment_kg: float = PROGRESSION_INCREMENT_KG,
    ):
        self.ledger = ledger
        self.increment_kg = increment_kg

    def suggest(
        self, exercise_id: str, default_sets: int, default_reps: RepTarget
    ) -> Suggestion:
        """Suggestion for *exercise_id* based on its last logged entry."""
        last = self.ledger.get_last_performance(exercise_id)
        return suggest_next(last, default_sets, default_reps, self.increment_kg)
