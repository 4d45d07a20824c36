"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of workout data. Weights arrive in
kg and are shown in the user's display unit via the PreferenceStore.
"""

from datetime import date

from rich.console import Console
from rich.table import Table

from ..core.calendar import parse_date
from ..core.catalog import Catalog, ExerciseSpec, ExtraWorkout, RunSpec, ScheduleDay
from ..core.models import ExerciseProgress, Suggestion, WorkoutSession, WorkoutStats
from ..core.units import format_number
from ..io.preferences import PreferenceStore

# Number of sessions shown by the history command
HISTORY_DISPLAY_LIMIT = 20
# Number of exercises shown by the progress command
PROGRESS_DISPLAY_LIMIT = 15
# Exercises listed for a gym extra workout
EXTRA_PREVIEW_LIMIT = 4

console = Console()


def _fmt_day(date_str: str) -> str:
    """'2024-01-03' -> 'Wed Jan 3'."""
    d = parse_date(date_str)
    return f"{d.strftime('%a %b')} {d.day}"


def format_stats(stats: WorkoutStats) -> Table:
    """
    Format headline statistics as a two-column table.

    Args:
        stats: Statistics snapshot

    Returns:
        Rich Table
    """
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Total workouts", str(stats.total))
    table.add_row("This week", str(stats.this_week))
    table.add_row("Current streak", f"{stats.streak} days")
    table.add_row(
        "Last workout",
        "-" if stats.days_since_last is None else f"{stats.days_since_last} days ago",
    )
    return table


def format_session_table(sessions: list[WorkoutSession]) -> Table:
    """
    Format sessions newest first, capped at HISTORY_DISPLAY_LIMIT.

    Args:
        sessions: Sessions in any order

    Returns:
        Rich Table
    """
    table = Table(title="Workout History")
    table.add_column("Date", style="cyan")
    table.add_column("Workout")
    table.add_column("Type", justify="center")
    table.add_column("Done", justify="right")

    ordered = sorted(sessions, key=lambda s: s.date, reverse=True)
    for session in ordered[:HISTORY_DISPLAY_LIMIT]:
        type_style = "green" if session.type == "run" else "magenta"
        done = (
            f"{session.completed_count}/{len(session.exercises)}" if session.exercises else ""
        )
        table.add_row(
            _fmt_day(session.date),
            session.workout_id.replace("_", " ").capitalize(),
            f"[{type_style}]{session.type}[/{type_style}]",
            done,
        )
    return table


def format_progress_table(
    progress: list[ExerciseProgress], prefs: PreferenceStore, catalog: Catalog
) -> Table:
    """
    Format per-exercise progress, capped at PROGRESS_DISPLAY_LIMIT.

    Args:
        progress: Summaries, most recent first
        prefs: Preference store for the display unit
        catalog: Catalog for exercise names

    Returns:
        Rich Table
    """
    unit = prefs.get_unit()
    table = Table(title="Exercise Progress")
    table.add_column("Exercise")
    table.add_column("Entries", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Since start", justify="right")

    for p in progress[:PROGRESS_DISPLAY_LIMIT]:
        change = ""
        if p.entry_count > 1:
            delta = p.improvement_kg
            style = "green" if delta > 0 else "red" if delta < 0 else "dim"
            sign = "+" if delta > 0 else ""
            change = f"[{style}]{sign}{format_number(prefs.display_weight(delta))} {unit}[/{style}]"
        table.add_row(
            catalog.display_name(p.exercise_id),
            str(p.entry_count),
            f"{prefs.format_weight(p.latest.weight)} x {p.latest.reps}",
            change,
        )
    return table


def print_day_header(today: date, day: ScheduleDay, title: str) -> None:
    """Print the date and today's planned activity."""
    console.print()
    console.print(f"[bold]{today.strftime('%A, %B')} {today.day}, {today.year}[/bold]")
    line = f"[bold cyan]{title}[/bold cyan]"
    if day.duration:
        line += f"  [dim]{day.duration} min[/dim]"
    console.print(line)
    console.print()


def format_workout_table(
    specs: list[ExerciseSpec],
    suggestions: dict[str, Suggestion],
    prefs: PreferenceStore,
) -> Table:
    """
    Format a gym workout with a suggested load per exercise.

    New exercises show the catalog starting weight.

    Args:
        specs: Exercises in workout order
        suggestions: exercise_id -> Suggestion
        prefs: Preference store for the display unit

    Returns:
        Rich Table
    """
    table = Table()
    table.add_column("Exercise")
    table.add_column("Sets x Reps", justify="center")
    table.add_column("Weight", justify="right")
    table.add_column("Note", style="dim")

    for spec in specs:
        suggestion = suggestions[spec.exercise_id]
        if suggestion.weight is None:
            weight = prefs.format_weight(spec.starting_weight_kg)
            note = f"Start light at {weight} to practice form"
        else:
            weight = prefs.format_weight(suggestion.weight)
            note = suggestion.message
        style = "green" if suggestion.is_progression else ""
        table.add_row(
            spec.name,
            f"{spec.sets} x {spec.reps}",
            f"[{style}]{weight}[/{style}]" if style else weight,
            note,
        )
    return table


def format_today_results(
    session: WorkoutSession, prefs: PreferenceStore, catalog: Catalog
) -> Table:
    """
    Format what was already recorded today, one row per exercise.

    Args:
        session: Today's stored session
        prefs: Preference store for the display unit
        catalog: Catalog for exercise names

    Returns:
        Rich Table
    """
    table = Table(title="Recorded today")
    table.add_column("Exercise")
    table.add_column("Done", justify="center")
    table.add_column("Result", justify="right")

    for result in session.exercises:
        done = "[green]yes[/green]" if result.completed else "[dim]no[/dim]"
        outcome = (
            f"{prefs.format_weight(result.weight)} x {result.reps} x {result.sets}"
            if result.completed
            else ""
        )
        table.add_row(catalog.display_name(result.id), done, outcome)
    return table


def print_streak(streak: int) -> None:
    """Print the streak badge (nothing when there is no streak)."""
    if streak >= 1:
        console.print(f"[bold yellow]{streak} day streak[/bold yellow]")


def print_next_run(today: date, run_day: date, run: RunSpec) -> None:
    """Print the upcoming run, labelled 'Tomorrow' or by weekday."""
    label = "Tomorrow" if (run_day - today).days == 1 else run_day.strftime("%A")
    line = f"[dim]Next run:[/dim] {label} - {run.name}"
    if run.duration_min:
        line += f" ({run.duration_min} min)"
    console.print(line)


def print_extra_workout(extra: ExtraWorkout, catalog: Catalog) -> None:
    """
    Print the day's optional extra workout.

    Gym extras list their first EXTRA_PREVIEW_LIMIT exercises.
    """
    if extra.type == "run":
        run = catalog.runs.get(extra.workout)
        title = run.name if run else extra.workout
        duration = extra.duration or (run.duration_min if run else None)
    else:
        title = f"{extra.workout.capitalize()} Workout"
        duration = extra.duration

    line = f"[bold]Extra:[/bold] {title}"
    if duration:
        line += f"  [dim]{duration} min[/dim]"
    console.print(line)
    if extra.description:
        console.print(f"  [dim]{extra.description}[/dim]")

    if extra.type == "gym":
        names = [spec.name for spec in catalog.exercises_for(extra.workout)]
        if names:
            shown = ", ".join(names[:EXTRA_PREVIEW_LIMIT])
            more = len(names) - EXTRA_PREVIEW_LIMIT
            if more > 0:
                shown += f" +{more} more"
            console.print(f"  {shown}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
