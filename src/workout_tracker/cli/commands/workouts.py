"""Workout commands: today, suggest, log-set, complete, redo."""

from typing import Annotated, Optional

import typer

from ...core.catalog import ExerciseSpec, ScheduleDay, resolve_workout
from ...core.models import ExerciseResult, Suggestion
from ...core.progression import parse_target_reps
from ...io.serializers import ValidationError, parse_result_string
from .. import views
from ..app import CliState, app, get_state

SwapOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--swap",
        help="Swap an exercise for one of its alternatives as ORIGINAL=ALTERNATIVE. Repeatable.",
    ),
]


def _todays_workout(state: CliState) -> tuple[ScheduleDay, str | None]:
    """
    Today's schedule entry and the workout to do.

    The week counter is only consulted on alternating days so that viewing
    other days never advances it.
    """
    day = state.catalog.day_for(state.today)
    if day.alternates:
        parity = state.tracker.week_counter.current_parity()
        return day, resolve_workout(day, parity)
    return day, day.workout


def _parse_swaps(values: list[str] | None) -> dict[str, str]:
    swaps: dict[str, str] = {}
    for text in values or []:
        original, sep, alternative = text.partition("=")
        if not sep or not original.strip() or not alternative.strip():
            views.print_error(f"Invalid --swap '{text}'. Use ORIGINAL=ALTERNATIVE.")
            raise typer.Exit(1)
        swaps[original.strip()] = alternative.strip()
    return swaps


def _workout_specs(
    state: CliState, workout_id: str, include_abs: bool, swaps: dict[str, str]
) -> list[ExerciseSpec]:
    try:
        return state.catalog.exercises_for(workout_id, include_abs=include_abs, swaps=swaps)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)


def _day_title(state: CliState, day: ScheduleDay, workout_id: str | None) -> str:
    if day.type == "rest":
        return "Rest Day"
    if day.type == "flexible":
        return "Flexible Day"
    if day.type == "run":
        run = state.catalog.runs.get(workout_id or "")
        return run.name if run else (workout_id or "Run")
    return f"{(workout_id or 'Gym').capitalize()} Day"


@app.command()
def today(ctx: typer.Context, swap: SwapOption = None) -> None:
    """
    Show today's planned workout with suggested weights.
    """
    state = get_state(ctx)
    tracker = state.tracker
    swaps = _parse_swaps(swap)
    day, workout_id = _todays_workout(state)

    views.print_day_header(state.today, day, _day_title(state, day, workout_id))
    views.print_streak(tracker.stats().streak)

    if day.type == "rest":
        views.print_info("Take it easy today. Recovery is part of the plan.")
    elif day.type == "flexible":
        views.print_info("Pick any workout: " + ", ".join(sorted(state.catalog.workouts)))
    elif day.type == "run":
        run = state.catalog.runs.get(workout_id or "")
        if run is not None and run.duration_min:
            views.console.print(f"{run.name}: {run.duration_min} min")
    else:
        specs = _workout_specs(state, workout_id or "", day.include_abs, swaps)
        suggestions = {
            spec.exercise_id: tracker.advisor.suggest(spec.exercise_id, spec.sets, spec.reps)
            for spec in specs
        }
        views.console.print(views.format_workout_table(specs, suggestions, tracker.preferences))
        for spec in specs:
            if spec.alternatives:
                names = ", ".join(a.exercise_id for a in spec.alternatives)
                views.console.print(f"  [dim]{spec.name} can be swapped for: {names}[/dim]")
        next_run = state.catalog.next_run(state.today)
        if next_run is not None:
            views.print_next_run(state.today, *next_run)

    if day.extra is not None:
        views.console.print()
        views.print_extra_workout(day.extra, state.catalog)

    session = tracker.log.get_today_session()
    if session is not None:
        views.console.print()
        if session.exercises:
            views.console.print(
                views.format_today_results(session, tracker.preferences, state.catalog)
            )
        views.print_success("Workout completed today!")


@app.command()
def suggest(
    ctx: typer.Context,
    exercise: Annotated[str, typer.Argument(help="Exercise id, e.g. bench_press")],
    sets: Annotated[Optional[int], typer.Option("--sets", help="Default sets")] = None,
    reps: Annotated[
        Optional[str], typer.Option("--reps", help="Rep target, count or range like 8-12")
    ] = None,
    swap: Annotated[
        Optional[str], typer.Option("--swap", help="Suggest for this alternative instead")
    ] = None,
) -> None:
    """
    Suggest the weight for the next time you do an exercise.
    """
    state = get_state(ctx)
    spec = state.catalog.exercises.get(exercise)

    if swap is not None:
        if spec is None:
            views.print_error(f"Unknown exercise '{exercise}' has no alternatives.")
            raise typer.Exit(1)
        try:
            spec = spec.swapped_for(swap)
        except KeyError as e:
            views.print_error(e.args[0])
            raise typer.Exit(1)
        exercise = spec.exercise_id

    if reps is not None:
        default_reps: int | str = int(reps) if reps.isdigit() else reps
    elif spec is not None:
        default_reps = spec.reps
    else:
        views.print_error(f"Unknown exercise '{exercise}'. Pass --reps to set a target.")
        raise typer.Exit(1)

    default_sets = sets if sets is not None else (spec.sets if spec else 3)

    prefs = state.tracker.preferences
    result: Suggestion = state.tracker.advisor.suggest(exercise, default_sets, default_reps)
    name = spec.name if spec else state.catalog.display_name(exercise)

    if result.weight is None:
        start = spec.starting_weight_kg if spec else 0.0
        views.console.print(
            f"[bold]{name}[/bold]: {result.message} "
            f"(start at {prefs.format_weight(start)}, {default_sets} x {default_reps})"
        )
        return

    style = "green" if result.is_progression else "cyan"
    views.console.print(
        f"[bold]{name}[/bold]: [{style}]{prefs.format_weight(result.weight)}[/{style}] "
        f"for {default_sets} x {default_reps}"
    )
    views.console.print(f"  [dim]{result.message}[/dim]")


@app.command("log-set")
def log_set(
    ctx: typer.Context,
    exercise: Annotated[str, typer.Argument(help="Exercise id, e.g. bench_press")],
    weight: Annotated[float, typer.Option("--weight", "-w", help="Weight in your display unit")],
    reps: Annotated[int, typer.Option("--reps", "-r", help="Reps performed")],
    sets: Annotated[int, typer.Option("--sets", "-s", help="Sets performed")] = 1,
) -> None:
    """
    Log today's weight/reps/sets for one exercise.
    """
    state = get_state(ctx)
    prefs = state.tracker.preferences
    weight_kg = prefs.to_kg(weight, prefs.get_unit())

    entry = state.tracker.ledger.record_set(exercise, weight_kg, reps, sets)

    views.print_success(
        f"Logged {state.catalog.display_name(exercise)}: "
        f"{prefs.format_weight(entry.weight)} x {entry.reps} reps x {entry.sets} sets"
    )


@app.command()
def complete(
    ctx: typer.Context,
    exercise_results: Annotated[
        Optional[list[str]],
        typer.Option(
            "--exercise",
            "-x",
            help="Completed exercise as id=WEIGHTxREPS[xSETS], weight in display unit. Repeatable.",
        ),
    ] = None,
    workout: Annotated[
        Optional[str], typer.Option("--workout", help="Workout id (default: today's schedule)")
    ] = None,
    workout_type: Annotated[
        Optional[str], typer.Option("--type", help="gym or run (default: from schedule)")
    ] = None,
    swap: SwapOption = None,
) -> None:
    """
    Mark today's workout as done.

    Exercises of the workout that are not listed with --exercise are stored
    as not completed. With --swap, the alternative is recorded under its own id.
    """
    state = get_state(ctx)
    tracker = state.tracker
    prefs = tracker.preferences
    unit = prefs.get_unit()
    include_abs = False

    if workout is None:
        day, workout = _todays_workout(state)
        include_abs = day.include_abs
        if workout is None:
            views.print_error("Nothing scheduled today. Pass --workout to log one anyway.")
            raise typer.Exit(1)
        if workout_type is None:
            workout_type = "run" if day.type == "run" else "gym"
    if workout_type is None:
        workout_type = "run" if workout in state.catalog.runs else "gym"
    if workout_type not in ("gym", "run"):
        views.print_error(f"Invalid --type '{workout_type}'. Use gym or run.")
        raise typer.Exit(1)

    swaps = _parse_swaps(swap)
    specs = (
        _workout_specs(state, workout, include_abs, swaps) if workout_type == "gym" else []
    )
    specs_by_id = {spec.exercise_id: spec for spec in specs}

    completed: dict[str, ExerciseResult] = {}
    for text in exercise_results or []:
        try:
            exercise_id, weight, reps, sets = parse_result_string(text)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        spec = specs_by_id.get(exercise_id) or state.catalog.exercises.get(exercise_id)
        completed[exercise_id] = ExerciseResult(
            id=exercise_id,
            completed=True,
            weight=prefs.to_kg(weight, unit),
            reps=reps,
            sets=sets if sets is not None else (spec.sets if spec else 1),
        )

    results: list[ExerciseResult] = []
    for spec in specs:
        if spec.exercise_id in completed:
            results.append(completed.pop(spec.exercise_id))
        else:
            results.append(
                ExerciseResult(
                    id=spec.exercise_id,
                    reps=parse_target_reps(spec.reps) or 0,
                    sets=spec.sets,
                )
            )
    results.extend(completed.values())

    if tracker.log.has_completed_today():
        views.print_warning("Replacing the workout already recorded today.")

    session = tracker.complete_workout(workout_type, workout, results)
    done = session.completed_count
    suffix = f" ({done}/{len(session.exercises)} exercises)" if session.exercises else ""
    views.print_success(f"Great workout! Logged {workout} for {session.date}{suffix}.")


@app.command()
def redo(ctx: typer.Context) -> None:
    """
    Clear today's completion so the workout can be done again.
    """
    state = get_state(ctx)
    if not state.tracker.log.has_completed_today():
        views.print_info("No workout recorded today.")
        return
    state.tracker.redo_today()
    views.print_success("Workout reset - ready to go again!")
