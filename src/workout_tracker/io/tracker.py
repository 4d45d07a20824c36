"""
Tracker: one object wiring every store to a shared key-value store and clock.

The tracker holds no data of its own; each call goes through to the store.
Workflows that touch more than one entity (finishing a workout, wiping all
data) live here.
"""

from datetime import date
from pathlib import Path

from ..core.calendar import Clock, format_date
from ..core.config import ALL_STORAGE_KEYS, PROGRESSION_INCREMENT_KG, RETENTION_DAYS
from ..core.engine.config_loader import Settings, load_settings
from ..core.models import (
    ExerciseProgress,
    ExerciseResult,
    WorkoutSession,
    WorkoutStats,
    WorkoutType,
)
from ..core.progression import ProgressionAdvisor
from ..core.stats import compute_stats, summarize_exercise_progress
from .completion_log import CompletionLog
from .exercise_ledger import ExerciseLedger
from .kv_store import FileKeyValueStore, JsonStore, KeyValueStore
from .preferences import PreferenceStore
from .week_counter import WeekCounterStore


class Tracker:
    """Entry point used by the CLI (or any other front end)."""

    def __init__(
        self,
        kv: KeyValueStore,
        today: Clock = date.today,
        retention_days: int = RETENTION_DAYS,
        progression_increment_kg: float = PROGRESSION_INCREMENT_KG,
    ):
        """
        Initialize the tracker.

        Args:
            kv: Durable key-value store
            today: Clock returning the current calendar day
            retention_days: Retention window for both histories
            progression_increment_kg: Weight added on progression
        """
        self.store = JsonStore(kv)
        self.today = today
        self.preferences = PreferenceStore(self.store)
        self.week_counter = WeekCounterStore(self.store, today)
        self.ledger = ExerciseLedger(self.store, today, retention_days)
        self.log = CompletionLog(self.store, today, retention_days)
        self.advisor = ProgressionAdvisor(self.ledger, progression_increment_kg)

    def complete_workout(
        self,
        workout_type: WorkoutType,
        workout_id: str,
        results: list[ExerciseResult],
    ) -> WorkoutSession:
        """
        Record today's workout.

        Every completed exercise is also logged to the exercise ledger so it
        feeds the next suggestion. Completing again on the same day replaces
        the earlier session.

        Args:
            workout_type: "gym" or "run"
            workout_id: Catalog workout id
            results: Per-exercise outcomes, weights in kg

        Returns:
            The stored session
        """
        for result in results:
            if result.completed:
                self.ledger.record_set(result.id, result.weight, result.reps, result.sets)

        session = WorkoutSession(
            date=format_date(self.today()),
            type=workout_type,
            workout_id=workout_id,
            exercises=list(results),
        )
        self.log.record_session(session)
        return session

    def redo_today(self) -> None:
        """Forget today's completion so the workout can be done again."""
        self.log.clear_today()

    def stats(self) -> WorkoutStats:
        """Headline statistics for today."""
        return compute_stats(self.log.get_history(), self.today())

    def exercise_progress(self) -> list[ExerciseProgress]:
        """Per-exercise progress, most recently trained first."""
        return summarize_exercise_progress(self.ledger.get_all_histories())

    def clear_all_data(self) -> None:
        """Delete every stored entity (preferences included)."""
        for key in ALL_STORAGE_KEYS:
            self.store.remove(key)


def get_default_tracker(
    settings: Settings | None = None,
    data_dir: Path | None = None,
    today: Clock = date.today,
) -> Tracker:
    """
    Get a file-backed Tracker configured from the user's settings.

    Args:
        settings: Settings to use (default: load settings.yaml)
        data_dir: Overrides settings.data_dir
        today: Clock returning the current calendar day

    Returns:
        Tracker instance
    """
    if settings is None:
        settings = load_settings()
    return Tracker(
        FileKeyValueStore(data_dir or settings.data_dir),
        today=today,
        retention_days=settings.retention_days,
        progression_increment_kg=settings.progression_increment_kg,
    )
