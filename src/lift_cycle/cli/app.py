"""Shared Typer app object, global options, and store utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..io.program_store import ProgramStore, get_default_save_dir
from . import views

app = typer.Typer(
    name="lift-cycle",
    help="Track a cyclic strength-training program and its progression.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    save_directory: Annotated[
        Optional[Path],
        typer.Option(
            "--save-directory",
            "-s",
            help="Directory used to save program data (default: current directory)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Keep track of your lifts and weights, one training day at a time.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=views.err_console, show_path=False)],
        )
    ctx.obj = get_store(save_directory)


def get_store(save_directory: Path | None) -> ProgramStore:
    """Get program store from path or default location."""
    if save_directory is None:
        save_directory = get_default_save_dir()
    return ProgramStore(save_directory)
