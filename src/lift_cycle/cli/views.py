"""
CLI view formatters using Rich for console output.

Handles display of program status and workouts, and the yes/no prompts
used to record how a workout went.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import (
    Completed,
    LiftAttempt,
    LiftAttemptResult,
    NotCompleted,
    Program,
)
from ..core.progression import current_day
from ..core.templates import ProgramTemplate
from ..core.weights import format_attempt, has_rep_range

console = Console()
err_console = Console(stderr=True)

MAX_REPS_QUESTION = "        ... were you able to achieve the maximum rep range?"


def format_status_display(program: Program) -> str:
    """
    Format program status as text block.

    Args:
        program: Program to describe

    Returns:
        Formatted string
    """
    lines = [
        f"Current program: {program.name}",
        f"Current reference weight: {program.reference_weight}",
        f"Starting reference weight: {program.starting_reference_weight}",
        f"Workouts completed: {program.workouts_completed}",
        f"Next day: {current_day(program).name}"
        f" ({program.current_day + 1} of {len(program.days)})",
    ]
    return "\n".join(lines)


def format_workout(day_name: str, attempts: list[LiftAttempt]) -> str:
    """Format a day's attempts, one per line, under a day header."""
    lines = [f"=== Day: {day_name} ==="]
    lines.extend(format_attempt(attempt) for attempt in attempts)
    return "\n".join(lines)


def print_status(program: Program) -> None:
    """Print program status."""
    console.print(escape(format_status_display(program)), highlight=False)


def print_workout(day_name: str, attempts: list[LiftAttempt]) -> None:
    """Print the prescribed workout."""
    console.print(escape(format_workout(day_name, attempts)), highlight=False, soft_wrap=True)


def print_templates(templates: list[ProgramTemplate]) -> None:
    """
    Print available program templates.

    Args:
        templates: Templates to list
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Days", justify="right")
    table.add_column("Description")

    for template in templates:
        table.add_row(template.template_id, template.name, str(len(template.days)), template.description)

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error: {escape(message)}[/red]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def ask_yes_no(prompt: str) -> bool:
    """
    Ask a yes/no question until the answer is 'y' or 'n'.

    Args:
        prompt: Question to ask

    Returns:
        True for 'y', False for 'n'
    """
    while True:
        answer = console.input(f"{escape(prompt)} \\[y/n] ").strip()
        if answer == "y":
            return True
        if answer == "n":
            return False


class ConsolePrompter:
    """Asks the lifter, attempt by attempt, whether the workout was completed."""

    def check_complete(self, attempts: list[LiftAttempt]) -> list[LiftAttemptResult]:
        return [self._ask_for_result(attempt) for attempt in attempts]

    def _ask_for_result(self, attempt: LiftAttempt) -> LiftAttemptResult:
        if not ask_yes_no(f"Did you complete: {format_attempt(attempt)}?"):
            return NotCompleted()
        # Only rep ranges have a top end worth asking about
        if has_rep_range(attempt.lift):
            return Completed(completed_maximum_reps=ask_yes_no(MAX_REPS_QUESTION))
        return Completed(completed_maximum_reps=True)
