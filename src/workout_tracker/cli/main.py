"""
CLI entry point using Typer.

Provides commands for workout tracking:
- today: Show today's workout with suggested weights
- suggest: Suggest the next weight for one exercise
- log-set: Log weight/reps/sets for one exercise
- complete: Mark today's workout as done
- redo: Clear today's completion
- history: Statistics and recent sessions
- progress: Weight progress per exercise
- unit: Show or change the display unit
- reset: Delete all data
"""

from .app import app
from .commands import history, settings, workouts  # noqa: F401  (registers commands)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
