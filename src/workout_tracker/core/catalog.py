"""
Exercise and schedule catalog.

Read-only reference data: which exercises exist with their default
prescription and alternatives, which workouts group them, and what is
planned for each weekday. Loaded from the bundled ``catalog.yaml`` or a
user-supplied file.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Literal

import yaml

from .models import RepTarget

DayType = Literal["gym", "run", "rest", "flexible"]

_DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class CatalogError(Exception):
    """Raised when a catalog file is missing or structurally invalid."""

    pass


@dataclass
class Alternative:
    """An exercise that can stand in for another (different equipment, same muscle)."""

    exercise_id: str
    name: str
    starting_weight_kg: float | None = None  # None = use the original's


@dataclass
class ExerciseSpec:
    """Default prescription for one exercise."""

    exercise_id: str
    name: str
    sets: int
    reps: RepTarget
    starting_weight_kg: float = 0.0
    alternatives: list[Alternative] = field(default_factory=list)

    def swapped_for(self, alternative_id: str) -> ExerciseSpec:
        """
        This slot performed with one of its alternatives.

        The substitute keeps this exercise's sets and reps but carries its own
        id (so the ledger and advisor track it separately) and its own
        starting weight when it has one. The original becomes one of the
        substitute's alternatives, so a swap can be undone.

        Raises:
            KeyError: If *alternative_id* is not an alternative of this exercise
        """
        for alt in self.alternatives:
            if alt.exercise_id == alternative_id:
                break
        else:
            raise KeyError(f"{alternative_id} is not an alternative to {self.exercise_id}")

        back = Alternative(self.exercise_id, self.name, self.starting_weight_kg)
        return replace(
            self,
            exercise_id=alt.exercise_id,
            name=alt.name,
            starting_weight_kg=(
                alt.starting_weight_kg
                if alt.starting_weight_kg is not None
                else self.starting_weight_kg
            ),
            alternatives=[back] + [a for a in self.alternatives if a is not alt],
        )


@dataclass
class RunSpec:
    """A named running workout."""

    run_id: str
    name: str
    duration_min: int = 0


@dataclass
class ExtraWorkout:
    """Optional add-on offered on top of the day's main workout."""

    type: Literal["gym", "run"]
    workout: str
    description: str = ""
    duration: int | None = None


@dataclass
class ScheduleDay:
    """What is planned for one weekday."""

    day: str
    type: DayType
    workout: str | None = None
    alternate_weekly: str | None = None
    include_abs: bool = False
    duration: int | None = None
    extra: ExtraWorkout | None = None

    @property
    def alternates(self) -> bool:
        """True if this day switches workout every other week."""
        return self.type == "gym" and self.alternate_weekly is not None


@dataclass
class Catalog:
    """All catalog data."""

    exercises: dict[str, ExerciseSpec] = field(default_factory=dict)
    workouts: dict[str, list[str]] = field(default_factory=dict)
    runs: dict[str, RunSpec] = field(default_factory=dict)
    schedule: dict[str, ScheduleDay] = field(default_factory=dict)

    def day_for(self, day: date) -> ScheduleDay:
        """Schedule entry for *day*'s weekday (rest if not listed)."""
        name = _DAY_NAMES[day.weekday()]
        return self.schedule.get(name, ScheduleDay(day=name, type="rest"))

    def exercises_for(
        self,
        workout_id: str,
        include_abs: bool = False,
        swaps: dict[str, str] | None = None,
    ) -> list[ExerciseSpec]:
        """
        Exercise specs for a gym workout, in catalog order.

        Unknown exercise ids are skipped.

        Args:
            workout_id: Catalog workout id
            include_abs: Append the "abs" workout's exercises
            swaps: original exercise_id -> alternative exercise_id

        Raises:
            KeyError: If a swap names an alternative the exercise does not have
        """
        ids = list(self.workouts.get(workout_id, []))
        if include_abs:
            ids += [i for i in self.workouts.get("abs", []) if i not in ids]
        specs = [self.exercises[i] for i in ids if i in self.exercises]
        if swaps:
            specs = [
                s.swapped_for(swaps[s.exercise_id]) if s.exercise_id in swaps else s
                for s in specs
            ]
        return specs

    def display_name(self, exercise_id: str) -> str:
        """Catalog name, or the id title-cased ("bench_press" -> "Bench Press")."""
        spec = self.exercises.get(exercise_id)
        if spec is not None:
            return spec.name
        for spec in self.exercises.values():
            for alt in spec.alternatives:
                if alt.exercise_id == exercise_id:
                    return alt.name
        return " ".join(w.capitalize() for w in exercise_id.split("_"))

    def next_run(self, today: date) -> tuple[date, RunSpec] | None:
        """
        First scheduled run within the next 7 days (today excluded).

        Returns:
            (run date, run) or None if no run is scheduled that week
        """
        for offset in range(1, 8):
            day = today + timedelta(days=offset)
            entry = self.day_for(day)
            if entry.type == "run" and entry.workout in self.runs:
                return day, self.runs[entry.workout]
        return None


def resolve_workout(day: ScheduleDay, parity: int) -> str | None:
    """
    Workout to perform on an alternating day.

    Args:
        day: Schedule entry
        parity: Current week parity (0 or 1)

    Returns:
        Base workout for parity 0, alternate for parity 1
    """
    if day.alternates and parity == 1:
        return day.alternate_weekly
    return day.workout


def _alternative_from_dict(d: dict[str, Any]) -> Alternative:
    weight = d.get("starting_weight_kg")
    return Alternative(
        exercise_id=str(d["id"]),
        name=str(d.get("name", d["id"])),
        starting_weight_kg=float(weight) if weight is not None else None,
    )


def _extra_from_dict(day_name: str, d: dict[str, Any] | None) -> ExtraWorkout | None:
    if d is None:
        return None
    extra_type = d.get("type")
    if extra_type not in ("gym", "run"):
        raise CatalogError(f"Invalid extra workout type for {day_name}: {extra_type!r}")
    return ExtraWorkout(
        type=extra_type,
        workout=str(d["workout"]),
        description=str(d.get("description", "")),
        duration=d.get("duration"),
    )


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """
    Build a Catalog from parsed YAML.

    Raises:
        CatalogError: If a section has the wrong shape
    """
    try:
        exercises = {
            ex_id: ExerciseSpec(
                exercise_id=ex_id,
                name=str(d.get("name", ex_id)),
                sets=int(d.get("sets", 3)),
                reps=d.get("reps", 10),
                starting_weight_kg=float(d.get("starting_weight_kg", 0.0)),
                alternatives=[_alternative_from_dict(a) for a in d.get("alternatives") or []],
            )
            for ex_id, d in (data.get("exercises") or {}).items()
        }
        workouts = {
            w_id: [str(e) for e in ids] for w_id, ids in (data.get("workouts") or {}).items()
        }
        runs = {
            run_id: RunSpec(
                run_id=run_id,
                name=str(d.get("name", run_id)),
                duration_min=int(d.get("duration_min", 0)),
            )
            for run_id, d in (data.get("runs") or {}).items()
        }
        schedule = {}
        for day_name, d in (data.get("schedule") or {}).items():
            day_type = d.get("type", "rest")
            if day_type not in ("gym", "run", "rest", "flexible"):
                raise CatalogError(f"Invalid day type for {day_name}: {day_type!r}")
            schedule[day_name] = ScheduleDay(
                day=day_name,
                type=day_type,
                workout=d.get("workout"),
                alternate_weekly=d.get("alternate_weekly"),
                include_abs=bool(d.get("include_abs", False)),
                duration=d.get("duration"),
                extra=_extra_from_dict(day_name, d.get("extra")),
            )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid catalog: {e}") from e

    return Catalog(exercises=exercises, workouts=workouts, runs=runs, schedule=schedule)


def get_bundled_catalog_path() -> Path:
    """Path of the catalog.yaml shipped with the package."""
    return Path(__file__).parent.parent / "catalog.yaml"


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Load the catalog from *path* (default: the bundled catalog).

    Raises:
        CatalogError: If the file cannot be read or parsed
    """
    catalog_path = Path(path) if path is not None else get_bundled_catalog_path()
    try:
        with open(catalog_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot load catalog {catalog_path}: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {catalog_path} must be a mapping")
    return catalog_from_dict(data)
