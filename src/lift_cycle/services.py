"""
Application services: one function per thing the lifter can do.

Each service combines the persistence port, the user-input port and the
progression engine.  Services never print; the CLI decides how results
are shown.
"""

import logging

from .core.models import LiftAttempt, Program
from .core.ports import PersistencePort, UserInputPort
from .core.progression import complete_workout, current_day, next_workout
from .core.templates import DEFAULT_TEMPLATE_ID, get_template, start_program

logger = logging.getLogger(__name__)


def get_program(store: PersistencePort) -> Program:
    """
    Load the current program.

    Raises:
        ProgramNotStartedError: If no program has been started
    """
    return store.summon()


def start_new_program(
    store: PersistencePort,
    reference_weight: int,
    template_id: str = DEFAULT_TEMPLATE_ID,
) -> Program:
    """
    Start a program from a template and save it, replacing any previous one.

    Args:
        store: Where to save the program
        reference_weight: Initial reference weight
        template_id: Program template to start

    Returns:
        The new Program

    Raises:
        ValueError: If the template is unknown or the weight is negative
    """
    program = start_program(get_template(template_id), reference_weight)
    store.persist(program)
    logger.info("Started %s at reference weight %s", program.name, reference_weight)
    return program


def show_next_workout(store: PersistencePort) -> tuple[str, list[LiftAttempt]]:
    """
    Describe the next workout without changing anything.

    Returns:
        (day name, prescribed attempts)
    """
    program = get_program(store)
    return current_day(program).name, next_workout(program)


def complete_next_workout(store: PersistencePort, prompter: UserInputPort) -> Program:
    """
    Ask how the next workout went, then save the advanced program and history.

    The program is saved before the history lines are appended.

    Args:
        store: Persistence port
        prompter: Asks the lifter for each attempt's result

    Returns:
        The advanced Program
    """
    program = get_program(store)
    attempts = next_workout(program)
    results = prompter.check_complete(attempts)
    advanced = complete_workout(program, results)
    store.persist(advanced)
    for attempt, result in zip(attempts, results):
        store.save_history(attempt, result)
    return advanced
