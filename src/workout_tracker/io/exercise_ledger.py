"""
Per-exercise performance history.

All exercises share one stored document mapping exercise_id to a list of
entries. Entries are kept in insertion order, which is also chronological
because every write is stamped with today's date and either replaces
today's entry in place or is appended. The last stored entry is therefore
the last performance.
"""

import logging
from datetime import date

from ..core.calendar import Clock, format_date, is_within_retention
from ..core.config import KEY_EXERCISE_HISTORY, RETENTION_DAYS
from ..core.models import PerformanceEntry
from .kv_store import JsonStore
from .serializers import decode_exercise_histories, exercise_histories_to_dict

logger = logging.getLogger(__name__)


class ExerciseLedger:
    """Stores weight/reps/sets per exercise per day with a retention window."""

    def __init__(
        self,
        store: JsonStore,
        today: Clock = date.today,
        retention_days: int = RETENTION_DAYS,
    ):
        """
        Initialize the ledger.

        Args:
            store: JSON store holding the exercise history document
            today: Clock returning the current calendar day
            retention_days: Entries older than this many days are evicted on write
        """
        self.store = store
        self.today = today
        self.retention_days = retention_days

    def get_all_histories(self) -> dict[str, list[PerformanceEntry]]:
        """Mapping exercise_id -> stored entries (empty if nothing logged)."""
        return decode_exercise_histories(self.store.read(KEY_EXERCISE_HISTORY))

    def get_history(self, exercise_id: str) -> list[PerformanceEntry]:
        """Entries for one exercise, oldest first, exactly as stored."""
        return self.get_all_histories().get(exercise_id, [])

    def get_last_performance(self, exercise_id: str) -> PerformanceEntry | None:
        """Last stored entry for *exercise_id*, or None if never logged."""
        history = self.get_history(exercise_id)
        return history[-1] if history else None

    def record_set(
        self, exercise_id: str, weight_kg: float, reps: int, sets: int
    ) -> PerformanceEntry:
        """
        Log today's performance for an exercise.

        A second call on the same day replaces the first entry in place.
        Afterwards, entries for this exercise older than the retention
        window are dropped and the whole document is written back.

        Args:
            exercise_id: Exercise identifier
            weight_kg: Weight used, in kg
            reps: Reps performed
            sets: Sets performed

        Returns:
            The stored entry
        """
        today = self.today()
        entry = PerformanceEntry(date=format_date(today), weight=weight_kg, reps=reps, sets=sets)

        histories = self.get_all_histories()
        history = histories.setdefault(exercise_id, [])

        for i, existing in enumerate(history):
            if existing.date == entry.date:
                history[i] = entry
                break
        else:
            history.append(entry)

        kept = [e for e in history if is_within_retention(e.date, today, self.retention_days)]
        if len(kept) != len(history):
            logger.debug("Evicted %d old entries for %s", len(history) - len(kept), exercise_id)
        histories[exercise_id] = kept

        self.store.write(KEY_EXERCISE_HISTORY, exercise_histories_to_dict(histories))
        return entry
