"""Settings commands: unit, reset."""

from typing import Annotated, Optional

import typer

from .. import views
from ..app import app, get_state


@app.command()
def unit(
    ctx: typer.Context,
    new_unit: Annotated[
        Optional[str], typer.Argument(help="kg or lbs; omit to show, 'toggle' to switch")
    ] = None,
) -> None:
    """
    Show or change the display unit.
    """
    prefs = get_state(ctx).tracker.preferences

    if new_unit is None:
        views.console.print(f"Display unit: [bold]{prefs.get_unit()}[/bold]")
        return

    if new_unit == "toggle":
        views.print_success(f"Display unit set to {prefs.toggle_unit()}")
        return

    try:
        prefs.set_unit(new_unit)  # type: ignore[arg-type]
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(f"Display unit set to {new_unit}")


@app.command()
def reset(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
) -> None:
    """
    Delete all workout data. This cannot be undone.
    """
    if not yes and not views.confirm_action(
        "Are you sure you want to clear all workout data? This cannot be undone."
    ):
        views.print_info("Cancelled.")
        return

    get_state(ctx).tracker.clear_all_data()
    views.print_success("All workout data cleared.")
