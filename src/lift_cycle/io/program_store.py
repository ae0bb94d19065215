"""
File-based storage for the program and its lift history.

Handles reading, writing, and appending to the save directory.
"""

import logging
from datetime import datetime
from pathlib import Path

from ..core.config import (
    HISTORY_FILENAME,
    HISTORY_TIMESTAMP_FORMAT,
    PROGRAM_FILENAME,
    SAVE_DATA_DIRNAME,
)
from ..core.models import LiftAttempt, LiftAttemptResult, Program
from ..core.notation import format_result
from ..core.weights import format_attempt
from .serializers import json_to_program, program_to_json

logger = logging.getLogger(__name__)

PROGRAM_NOT_STARTED_MESSAGE = "Start a lifting program first!"


class ProgramNotStartedError(FileNotFoundError):
    """Raised when no program has been saved yet."""

    def __init__(self, message: str = PROGRAM_NOT_STARTED_MESSAGE):
        super().__init__(message)


class ProgramStore:
    """
    Manages the saved program and the lift history.

    Both files live in ``<save_dir>/lift_cycle_save_data/``:
    - program.json: the current Program, overwritten after every change
    - lift_history.txt: one line per lift attempt, append-only
    """

    def __init__(self, save_dir: str | Path | None = None):
        """
        Initialize the program store.

        Args:
            save_dir: Directory to keep save data in (default: current directory)
        """
        base = Path(save_dir) if save_dir is not None else Path.cwd()
        self.data_dir = base / SAVE_DATA_DIRNAME
        self.program_path = self.data_dir / PROGRAM_FILENAME
        self.history_path = self.data_dir / HISTORY_FILENAME

    def exists(self) -> bool:
        """Check if a program has been saved."""
        return self.program_path.exists()

    def summon(self) -> Program:
        """
        Load the saved program.

        Returns:
            The saved Program

        Raises:
            ProgramNotStartedError: If no program has been saved
            ValidationError: If the saved file is invalid
        """
        if not self.program_path.exists():
            raise ProgramNotStartedError()

        logger.debug("Loading program from %s", self.program_path)
        with open(self.program_path, "r", encoding="utf-8") as f:
            return json_to_program(f.read())

    def persist(self, program: Program) -> None:
        """
        Save the program, replacing any previous save.

        Creates the save directory if needed.

        Args:
            program: Program to save
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Saving program to %s", self.program_path)
        with open(self.program_path, "w", encoding="utf-8") as f:
            f.write(program_to_json(program) + "\n")

    def save_history(
        self,
        attempt: LiftAttempt,
        result: LiftAttemptResult,
        when: datetime | None = None,
    ) -> None:
        """
        Append one line to the lift history.

        Format: "<timestamp>: <attempt> | <result>", e.g.
        "2026-10-19 18:02:11: Barbell Row -> 3x10 @ 65 | NotCompleted"

        Args:
            attempt: The attempt as it was prescribed
            result: How it went
            when: Timestamp for the line (default: now)
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        stamp = (when or datetime.now()).strftime(HISTORY_TIMESTAMP_FORMAT)
        line = f"{stamp}: {format_attempt(attempt)} | {format_result(result)}"
        with open(self.history_path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def load_history_lines(self) -> list[str]:
        """
        Read the lift history.

        Returns:
            History lines, oldest first (empty if nothing logged yet)
        """
        if not self.history_path.exists():
            return []
        with open(self.history_path, "r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f if line.strip()]


def get_default_save_dir() -> Path:
    """
    Get the default save directory.

    Returns:
        The current working directory
    """
    return Path.cwd()
