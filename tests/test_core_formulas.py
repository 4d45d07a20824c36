"""
Formula-focused unit tests for the pure engine pieces.

Covers unit conversion, ISO week numbering, progression rules and the
statistics engine. Expected values are hand-computed so the tests read as
a worked reference.
"""

from datetime import date

import pytest

from workout_tracker.core.calendar import (
    iso_week,
    iso_week_key,
    is_within_retention,
    parse_date,
    start_of_week,
)
from workout_tracker.core.models import (
    ExerciseProgress,
    PerformanceEntry,
    WorkoutSession,
)
from workout_tracker.core.progression import parse_target_reps, suggest_next
from workout_tracker.core.stats import (
    calculate_days_since_last,
    calculate_streak,
    compute_stats,
    count_this_week,
    summarize_exercise_progress,
)
from workout_tracker.core.units import format_number, kg_to_lbs, lbs_to_kg, to_kg

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _session(date_str: str, workout_id: str = "push") -> WorkoutSession:
    return WorkoutSession(date=date_str, type="gym", workout_id=workout_id)


def _entry(date_str: str, weight: float = 50.0, reps: int = 10, sets: int = 3) -> PerformanceEntry:
    return PerformanceEntry(date=date_str, weight=weight, reps=reps, sets=sets)


# ===========================================================================
# Unit conversion
# ===========================================================================


class TestUnitConversion:
    """1 kg = 2.205 lbs, rounded half up to one decimal."""

    def test_kg_to_lbs_rounds_half_up(self):
        # 10 * 2.205 = 22.05 -> 22.1
        assert kg_to_lbs(10) == 22.1

    def test_lbs_to_kg(self):
        # 22.1 / 2.205 = 10.0226... -> 10.0
        assert lbs_to_kg(22.1) == 10.0

    def test_round_trip_is_not_exact(self):
        # 1 * 2.205 = 2.205 -> 2.2; 2.2 / 2.205 = 0.9977 -> 1.0
        assert kg_to_lbs(1) == 2.2
        assert lbs_to_kg(kg_to_lbs(1)) == 1.0
        # 3 * 2.205 = 6.615 -> 6.6; 6.6 / 2.205 = 2.993 -> 3.0
        assert kg_to_lbs(3) == 6.6

    def test_other_half_cases(self):
        # 30 * 2.205 = 66.15 -> 66.2
        assert kg_to_lbs(30) == 66.2
        # 100 * 2.205 = 220.5 exactly
        assert kg_to_lbs(100) == 220.5

    def test_zero(self):
        assert kg_to_lbs(0) == 0.0
        assert lbs_to_kg(0) == 0.0

    def test_lbs_to_kg_typical_plate(self):
        # 45 / 2.205 = 20.408 -> 20.4
        assert lbs_to_kg(45) == 20.4

    def test_to_kg_is_noop_for_kg(self):
        assert to_kg(61.25, "kg") == 61.25
        assert to_kg(22.1, "lbs") == 10.0

    def test_format_number_drops_trailing_zero(self):
        assert format_number(60.0) == "60"
        assert format_number(52.5) == "52.5"
        assert format_number(0) == "0"


# ===========================================================================
# Calendar
# ===========================================================================


class TestCalendar:
    def test_iso_week_mid_year(self):
        assert iso_week(date(2024, 1, 3)) == (2024, 1)
        assert iso_week(date(2024, 1, 8)) == (2024, 2)

    def test_iso_week_belongs_to_previous_year(self):
        # Friday 2021-01-01 shifts to Thursday 2020-12-31 -> week 53 of 2020
        assert iso_week(date(2021, 1, 1)) == (2020, 53)

    def test_iso_week_belongs_to_next_year(self):
        # Monday 2024-12-30 shifts to Thursday 2025-01-02 -> week 1 of 2025
        assert iso_week(date(2024, 12, 30)) == (2025, 1)

    def test_iso_week_matches_isocalendar(self):
        d = date(2023, 1, 1)
        for offset in range(0, 800, 3):
            day = date.fromordinal(d.toordinal() + offset)
            expected = day.isocalendar()
            assert iso_week(day) == (expected[0], expected[1])

    def test_week_key_format(self):
        assert iso_week_key(date(2024, 1, 8)) == "2024-W02"

    def test_start_of_week_is_sunday(self):
        # Wednesday 2024-01-10 -> Sunday 2024-01-07
        assert start_of_week(date(2024, 1, 10)) == date(2024, 1, 7)
        # A Sunday is its own week start
        assert start_of_week(date(2024, 1, 7)) == date(2024, 1, 7)
        # Saturday belongs to the week started the previous Sunday
        assert start_of_week(date(2024, 1, 13)) == date(2024, 1, 7)

    def test_retention_window_boundaries(self):
        today = date(2024, 6, 1)
        assert is_within_retention("2024-03-04", today, 90)  # 89 days ago
        assert is_within_retention("2024-03-03", today, 90)  # exactly 90 days ago
        assert not is_within_retention("2024-03-02", today, 90)  # 91 days ago

    def test_parse_date_rejects_bad_input(self):
        with pytest.raises(ValueError):
            parse_date("2024-13-01")
        with pytest.raises(ValueError):
            parse_date("01/02/2024")
        with pytest.raises(ValueError):
            parse_date(None)  # type: ignore[arg-type]


# ===========================================================================
# Progression
# ===========================================================================


class TestProgression:
    def test_target_reps_range_uses_upper_bound(self):
        assert parse_target_reps("8-12") == 12
        assert parse_target_reps(10) == 10
        assert parse_target_reps("15") == 15
        assert parse_target_reps("30s") == 30
        assert parse_target_reps("AMRAP") is None

    def test_first_time(self):
        s = suggest_next(None, 3, "8-12")
        assert s.weight is None
        assert s.is_new is True
        assert s.message == "First time - start light!"
        assert s.sets == 3
        assert s.reps == "8-12"

    def test_progression_when_target_hit(self):
        s = suggest_next(_entry("2024-01-01", weight=50, reps=12), 3, "8-12")
        assert s.weight == 52.5
        assert s.is_progression is True
        assert s.message == "Progress! +2.5kg from last time"

    def test_same_weight_when_target_missed(self):
        s = suggest_next(_entry("2024-01-01", weight=50, reps=9), 3, "8-12")
        assert s.weight == 50
        assert s.is_progression is False
        assert s.message == "Same weight, aim for 12 reps"

    def test_numeric_target(self):
        s = suggest_next(_entry("2024-01-01", weight=20, reps=15), 3, 15)
        assert s.weight == 22.5
        assert s.is_progression is True

    def test_exceeding_target_also_progresses(self):
        s = suggest_next(_entry("2024-01-01", weight=40, reps=14), 3, "8-12")
        assert s.weight == 42.5

    def test_unparseable_target_never_progresses(self):
        s = suggest_next(_entry("2024-01-01", weight=0, reps=50), 3, "AMRAP")
        assert s.weight == 0
        assert s.is_progression is False
        assert s.message == "Same weight, aim for AMRAP reps"

    def test_custom_increment(self):
        s = suggest_next(_entry("2024-01-01", weight=50, reps=12), 3, 12, increment_kg=5.0)
        assert s.weight == 55.0
        assert s.message == "Progress! +5kg from last time"


# ===========================================================================
# Statistics
# ===========================================================================


class TestStreak:
    def test_three_consecutive_days(self):
        history = [_session("2024-01-03"), _session("2024-01-02"), _session("2024-01-01")]
        assert calculate_streak(history, date(2024, 1, 3)) == 3

    def test_broken_when_last_workout_too_old(self):
        history = [_session("2024-01-03"), _session("2024-01-02"), _session("2024-01-01")]
        assert calculate_streak(history, date(2024, 1, 5)) == 0

    def test_yesterday_keeps_streak(self):
        history = [_session("2024-01-03"), _session("2024-01-02")]
        assert calculate_streak(history, date(2024, 1, 4)) == 2

    def test_unsorted_input(self):
        history = [_session("2024-01-01"), _session("2024-01-03"), _session("2024-01-02")]
        assert calculate_streak(history, date(2024, 1, 3)) == 3

    def test_gap_stops_count(self):
        history = [_session("2024-01-10"), _session("2024-01-09"), _session("2024-01-07")]
        assert calculate_streak(history, date(2024, 1, 10)) == 2

    def test_across_month_boundary(self):
        history = [_session("2024-03-01"), _session("2024-02-29"), _session("2024-02-28")]
        assert calculate_streak(history, date(2024, 3, 1)) == 3

    def test_empty(self):
        assert calculate_streak([], date(2024, 1, 1)) == 0


class TestCountThisWeek:
    def test_monday_counted_saturday_not(self):
        wednesday = date(2024, 1, 10)
        history = [_session("2024-01-08"), _session("2024-01-06")]
        assert count_this_week(history, wednesday) == 1

    def test_sunday_starts_week(self):
        wednesday = date(2024, 1, 10)
        history = [_session("2024-01-07"), _session("2024-01-10")]
        assert count_this_week(history, wednesday) == 2

    def test_on_sunday_only_today_counts(self):
        sunday = date(2024, 1, 14)
        history = [_session("2024-01-13"), _session("2024-01-14")]
        assert count_this_week(history, sunday) == 1


class TestDaysSinceLast:
    def test_empty_is_none(self):
        assert calculate_days_since_last([], date(2024, 1, 1)) is None

    def test_uses_most_recent(self):
        history = [_session("2024-01-01"), _session("2024-01-03")]
        assert calculate_days_since_last(history, date(2024, 1, 5)) == 2

    def test_today_is_zero(self):
        assert calculate_days_since_last([_session("2024-01-05")], date(2024, 1, 5)) == 0


class TestComputeStats:
    def test_bundle(self):
        history = [_session("2024-01-08"), _session("2024-01-09"), _session("2024-01-10")]
        stats = compute_stats(history, date(2024, 1, 10))
        assert stats.total == 3
        assert stats.this_week == 3
        assert stats.streak == 3
        assert stats.days_since_last == 0


class TestExerciseProgress:
    def test_sorted_by_latest_entry(self):
        histories = {
            "squat": [_entry("2024-01-01", 60), _entry("2024-01-08", 65)],
            "bench_press": [_entry("2024-01-09", 50)],
            "plank": [],
        }
        summaries = summarize_exercise_progress(histories)
        assert [p.exercise_id for p in summaries] == ["bench_press", "squat"]

    def test_improvement(self):
        histories = {"squat": [_entry("2024-01-01", 60), _entry("2024-01-08", 65)]}
        (summary,) = summarize_exercise_progress(histories)
        assert summary.entry_count == 2
        assert summary.improvement_kg == 5

    def test_single_entry_has_no_improvement(self):
        p = ExerciseProgress(
            exercise_id="squat",
            latest=_entry("2024-01-01", 60),
            first=_entry("2024-01-01", 60),
            entry_count=1,
        )
        assert p.improvement_kg == 0.0
