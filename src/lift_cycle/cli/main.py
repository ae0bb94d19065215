"""
CLI entry point using Typer.

Provides commands for running a lifting program:
- start: Start a new program from a template
- status: Show the current program state
- next: Show the next workout
- complete: Record the next workout and advance the program
- programs: List the available program templates
"""

from .app import app
from .commands import workouts  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
