"""
Data models for the workout tracker.

Plain dataclasses for everything the engine persists or returns. Weights
are always kilograms; dates are ISO YYYY-MM-DD strings, matching the
stored form. Numeric ranges are not enforced here: callers sanitize input.
"""

from dataclasses import dataclass, field
from typing import Literal

from .calendar import parse_date

Unit = Literal["kg", "lbs"]
WorkoutType = Literal["gym", "run"]

# Rep targets come from the catalog either as a count (10) or a range ("8-12").
RepTarget = int | str


@dataclass
class PerformanceEntry:
    """One day's logged performance for a single exercise."""

    date: str  # ISO format: YYYY-MM-DD
    weight: float  # kg
    reps: int
    sets: int

    def __post_init__(self) -> None:
        parse_date(self.date)


@dataclass
class ExerciseResult:
    """Outcome of one exercise inside a completed workout session."""

    id: str
    completed: bool = False
    weight: float = 0.0  # kg
    reps: int = 0
    sets: int = 0


@dataclass
class WorkoutSession:
    """
    A completed workout.

    At most one session is kept per calendar day; recording a second one
    for the same date replaces the first.
    """

    date: str  # ISO format: YYYY-MM-DD
    type: WorkoutType
    workout_id: str
    exercises: list[ExerciseResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        parse_date(self.date)
        if self.type not in ("gym", "run"):
            raise ValueError(f"Invalid workout type: {self.type}")

    @property
    def completed_count(self) -> int:
        """Number of exercises ticked off in this session."""
        return sum(1 for e in self.exercises if e.completed)


@dataclass
class Preferences:
    """User display preferences."""

    unit: Unit = "kg"
    last_visit: str | None = None


@dataclass
class WeekCounter:
    """
    Binary index that flips once per ISO week.

    last_updated_week_key is None until the first flip.
    """

    parity: int = 0
    last_updated_week_key: str | None = None


@dataclass
class Suggestion:
    """Weight/rep recommendation for the next time an exercise is performed."""

    weight: float | None  # kg; None when there is no history yet
    reps: RepTarget
    sets: int
    message: str
    is_new: bool = False
    is_progression: bool = False


@dataclass
class WorkoutStats:
    """Snapshot of the headline numbers shown on the history screen."""

    total: int
    this_week: int
    streak: int
    days_since_last: int | None


@dataclass
class ExerciseProgress:
    """Progress summary for one exercise across its retained history."""

    exercise_id: str
    latest: PerformanceEntry
    first: PerformanceEntry
    entry_count: int

    @property
    def improvement_kg(self) -> float:
        """Weight change from the first to the latest entry (0 with a single entry)."""
        if self.entry_count <= 1:
            return 0.0
        return self.latest.weight - self.first.weight
