"""Display-unit preference, persisted under the preferences key."""

from ..core.config import KEY_PREFERENCES, VALID_UNITS
from ..core.models import Preferences, Unit
from ..core.units import format_number, from_kg, to_kg
from .kv_store import JsonStore
from .serializers import decode_preferences, preferences_to_dict


class PreferenceStore:
    """
    Reads and writes the user's display unit.

    Nothing is cached: every call reads the store, so two PreferenceStore
    instances over the same store always agree.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def load(self) -> Preferences:
        """Current preferences (kg by default)."""
        return decode_preferences(self.store.read(KEY_PREFERENCES))

    def save(self, prefs: Preferences) -> None:
        """Persist *prefs*."""
        self.store.write(KEY_PREFERENCES, preferences_to_dict(prefs))

    def get_unit(self) -> Unit:
        """Display unit, "kg" if never set."""
        return self.load().unit

    def set_unit(self, unit: Unit) -> None:
        """
        Change the display unit.

        Raises:
            ValueError: If *unit* is not "kg" or "lbs"
        """
        if unit not in VALID_UNITS:
            raise ValueError(f"Invalid unit: {unit!r}. Must be one of {VALID_UNITS}")
        prefs = self.load()
        prefs.unit = unit
        self.save(prefs)

    def toggle_unit(self) -> Unit:
        """Switch between kg and lbs; returns the new unit."""
        new_unit: Unit = "kg" if self.get_unit() == "lbs" else "lbs"
        self.set_unit(new_unit)
        return new_unit

    def display_weight(self, weight_kg: float) -> float:
        """*weight_kg* expressed in the display unit."""
        return from_kg(weight_kg, self.get_unit())

    def to_kg(self, value: float, from_unit: Unit) -> float:
        """Convert a value entered in *from_unit* back to kg."""
        return to_kg(value, from_unit)

    def format_weight(self, weight_kg: float) -> str:
        """E.g. "60 kg" or "132.3 lbs"."""
        unit = self.get_unit()
        return f"{format_number(from_kg(weight_kg, unit))} {unit}"
