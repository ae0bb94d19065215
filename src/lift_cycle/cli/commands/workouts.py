"""Program commands: start, status, next, complete, programs."""

from typing import Annotated

import typer

from ...core.progression import ResultCountError
from ...core.templates import DEFAULT_TEMPLATE_ID, TEMPLATE_REGISTRY
from ...io.program_store import ProgramNotStartedError, ProgramStore
from ...io.serializers import ValidationError
from ... import services
from .. import views
from ..app import app


def _store(ctx: typer.Context) -> ProgramStore:
    return ctx.obj


@app.command("start")
def start(
    ctx: typer.Context,
    reference_weight: Annotated[
        int,
        typer.Option(
            "--reference-weight",
            "-r",
            min=0,
            help="Reference weight to start with (45 is a good number for a first program)",
        ),
    ],
    program_id: Annotated[
        str,
        typer.Option("--program", "-p", help="Program template ID (see 'programs')"),
    ] = DEFAULT_TEMPLATE_ID,
) -> None:
    """
    Start a new lifting program, replacing any program already saved.
    """
    store = _store(ctx)
    replacing = store.exists()
    try:
        program = services.start_new_program(store, reference_weight, program_id)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if replacing:
        views.print_info(f"Replaced the program saved in {store.data_dir}")
    views.print_success(f"Started program: {program.name}")


@app.command("status")
def status(ctx: typer.Context) -> None:
    """
    Display the current status of your lifting program.
    """
    try:
        program = services.get_program(_store(ctx))
    except (ProgramNotStartedError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_status(program)


@app.command("next")
def next_(ctx: typer.Context) -> None:
    """
    Show the next workout in your program.
    """
    try:
        day_name, attempts = services.show_next_workout(_store(ctx))
    except (ProgramNotStartedError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_workout(day_name, attempts)


@app.command("complete")
def complete(ctx: typer.Context) -> None:
    """
    Complete the next workout of your program (run 'next' to see it first).
    """
    try:
        services.complete_next_workout(_store(ctx), views.ConsolePrompter())
    except (ProgramNotStartedError, ValidationError, ResultCountError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success("Well done!")


@app.command("programs")
def programs() -> None:
    """
    List the program templates you can start.
    """
    views.print_templates(list(TEMPLATE_REGISTRY.values()))
