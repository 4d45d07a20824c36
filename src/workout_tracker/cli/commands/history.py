"""History commands: history, progress."""

import typer

from .. import views
from ..app import app, get_state


@app.command()
def history(ctx: typer.Context) -> None:
    """
    Show workout statistics and recent sessions.
    """
    state = get_state(ctx)
    sessions = state.tracker.log.get_history()

    views.console.print(views.format_stats(state.tracker.stats()))
    views.console.print()

    if not sessions:
        views.print_info("No workouts yet. Complete one to start your history!")
        return

    views.console.print(views.format_session_table(sessions))


@app.command()
def progress(ctx: typer.Context) -> None:
    """
    Show weight progress per exercise.
    """
    state = get_state(ctx)
    summaries = state.tracker.exercise_progress()

    if not summaries:
        views.print_info("No exercise data yet. Complete some workouts to track progress!")
        return

    views.console.print(
        views.format_progress_table(summaries, state.tracker.preferences, state.catalog)
    )
