"""
Port interfaces for lift-cycle.

The core never performs I/O.  Callers reach storage and the lifter through
these protocols; io/program_store.py and cli/views.py provide the
implementations used by the command line.
"""

from typing import Protocol

from .models import LiftAttempt, LiftAttemptResult, Program


class PersistencePort(Protocol):
    """
    Storage for the program and the lift history.

    Implementations own where and how the data is kept; the services only
    rely on the three operations below.
    """

    def summon(self) -> Program:
        """
        Load the saved program.

        Raises:
            ProgramNotStartedError: If no program has been saved yet
        """
        ...

    def persist(self, program: Program) -> None:
        """Overwrite the saved program."""
        ...

    def save_history(self, attempt: LiftAttempt, result: LiftAttemptResult) -> None:
        """Append one history line for a completed attempt."""
        ...


class UserInputPort(Protocol):
    """Asks the lifter how each attempt of a workout went."""

    def check_complete(self, attempts: list[LiftAttempt]) -> list[LiftAttemptResult]:
        """Return one result per attempt, in order."""
        ...
