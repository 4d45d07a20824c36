"""Shared Typer app object, per-invocation state, and option parsing helpers."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..core.calendar import parse_date
from ..core.catalog import Catalog, CatalogError, load_catalog
from ..core.engine.config_loader import load_settings
from ..io.tracker import Tracker, get_default_tracker
from . import views

app = typer.Typer(
    name="workout-tracker",
    help="Personal workout tracker with progressive-overload suggestions.",
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Everything a command needs; built once per invocation."""

    tracker: Tracker
    catalog: Catalog
    today: date


def _configure_logging(verbose: bool) -> None:
    """Route the package's log records to the Rich console."""
    logger = logging.getLogger("workout_tracker")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=views.console, show_path=False))


def _parse_today(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--today") from e


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", help="Directory for stored data (default: ~/.workout-tracker)"),
    ] = None,
    today: Annotated[
        Optional[str],
        typer.Option("--today", help="Pretend today is this date (YYYY-MM-DD)"),
    ] = None,
    catalog_path: Annotated[
        Optional[Path],
        typer.Option("--catalog", help="Exercise/schedule catalog YAML (default: bundled)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """
    Track workouts, get weight suggestions, and review your history.
    """
    _configure_logging(verbose)

    current_day = _parse_today(today)
    settings = load_settings()

    try:
        catalog = load_catalog(catalog_path or settings.catalog_path)
    except CatalogError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    tracker = get_default_tracker(settings, data_dir=data_dir, today=lambda: current_day)
    ctx.obj = CliState(tracker=tracker, catalog=catalog, today=current_day)


def get_state(ctx: typer.Context) -> CliState:
    """State created by the app callback."""
    return ctx.obj
