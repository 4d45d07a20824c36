"""
Weekly A/B alternation.

Some schedule days alternate between two workouts from one week to the
next. The counter flips its parity the first time it is read in a new ISO
week and is stable for the rest of that week, no matter how often it is
read. Skipped weeks are not caught up: a gap of several weeks still flips
only once.
"""

from datetime import date

from ..core.calendar import Clock, iso_week_key
from ..core.config import KEY_WEEK_COUNTER
from ..core.models import WeekCounter
from .kv_store import JsonStore
from .serializers import decode_week_counter, week_counter_to_dict


class WeekCounterStore:
    """Persisted parity that advances once per ISO week."""

    def __init__(self, store: JsonStore, today: Clock = date.today):
        self.store = store
        self.today = today

    def get_state(self) -> WeekCounter:
        """Stored counter, without advancing it."""
        return decode_week_counter(self.store.read(KEY_WEEK_COUNTER))

    def current_parity(self) -> int:
        """
        Parity for the current week (0 or 1), flipping it on the first call of a week.

        Returns:
            0 for the base workout, 1 for the alternate
        """
        counter = self.get_state()
        week_key = iso_week_key(self.today())

        if counter.last_updated_week_key != week_key:
            counter.parity = (counter.parity + 1) % 2
            counter.last_updated_week_key = week_key
            self.store.write(KEY_WEEK_COUNTER, week_counter_to_dict(counter))

        return counter.parity
