"""
Completed-workout log.

One session per calendar day: recording a session for a date that already
has one replaces it in place. Sessions older than the retention window are
dropped on every write.
"""

import logging
from datetime import date

from ..core.calendar import Clock, format_date, is_within_retention
from ..core.config import KEY_WORKOUT_HISTORY, RETENTION_DAYS
from ..core.models import WorkoutSession
from .kv_store import JsonStore
from .serializers import decode_workout_history, workout_session_to_dict

logger = logging.getLogger(__name__)


class CompletionLog:
    """Stores completed workout sessions."""

    def __init__(
        self,
        store: JsonStore,
        today: Clock = date.today,
        retention_days: int = RETENTION_DAYS,
    ):
        self.store = store
        self.today = today
        self.retention_days = retention_days

    def get_history(self) -> list[WorkoutSession]:
        """All retained sessions in insertion order."""
        return decode_workout_history(self.store.read(KEY_WORKOUT_HISTORY))

    def _write(self, sessions: list[WorkoutSession]) -> None:
        self.store.write(KEY_WORKOUT_HISTORY, [workout_session_to_dict(s) for s in sessions])

    def record_session(self, session: WorkoutSession) -> None:
        """
        Add a completed session, replacing every session on the same date.

        The new session takes the position of the first same-date session,
        or goes last if there was none.

        Args:
            session: Session to store
        """
        history = self.get_history()
        same_day = [i for i, s in enumerate(history) if s.date == session.date]
        sessions = [s for s in history if s.date != session.date]
        sessions.insert(same_day[0] if same_day else len(sessions), session)

        today = self.today()
        kept = [s for s in sessions if is_within_retention(s.date, today, self.retention_days)]
        if len(kept) != len(sessions):
            logger.debug("Evicted %d old workout sessions", len(sessions) - len(kept))
        self._write(kept)

    def get_today_session(self) -> WorkoutSession | None:
        """Session dated today, if any."""
        today = format_date(self.today())
        for session in self.get_history():
            if session.date == today:
                return session
        return None

    def has_completed_today(self) -> bool:
        """True if a session is recorded for today."""
        return self.get_today_session() is not None

    def clear_today(self) -> None:
        """Remove today's session so the workout can be redone."""
        today = format_date(self.today())
        sessions = self.get_history()
        remaining = [s for s in sessions if s.date != today]
        if len(remaining) != len(sessions):
            self._write(remaining)
