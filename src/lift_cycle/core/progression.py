"""
Progression rules: prescribing the next workout and completing it.

Implements the cycle state machine.  Completing a day records its results,
ratchets linear lift weights, and, when the last day of the cycle closes,
raises the reference weight if every reference-based lift was completed
at the top of its rep range.

Both operations are pure: they read a Program and return new values.
"""

import logging
from dataclasses import replace

from .config import REFERENCE_WEIGHT_INCREMENT
from .models import (
    AnyWeight,
    BasedOnReference,
    Completed,
    Day,
    LiftAttempt,
    LiftAttemptResult,
    LinearBasedOnPrevious,
    NoWeight,
    Program,
)

logger = logging.getLogger(__name__)


class ResultCountError(ValueError):
    """Raised when the number of results does not match the day's lifts."""

    pass


def _is_max_reps(result: LiftAttemptResult | None) -> bool:
    return isinstance(result, Completed) and result.completed_maximum_reps


def current_day(program: Program) -> Day:
    """Return the day the program is currently on."""
    return program.days[program.current_day]


def next_workout(program: Program) -> list[LiftAttempt]:
    """
    Prescribe the attempts for the current day.

    Reference-based lifts carry the raw reference weight (multiplier and
    offset are applied at display time); linear lifts carry their tracked
    weight, or None if it was never recorded.

    Args:
        program: Current program state

    Returns:
        One LiftAttempt per lift of the current day, in order
    """
    attempts: list[LiftAttempt] = []
    for lift in current_day(program).lifts:
        scheme = lift.weight
        if isinstance(scheme, BasedOnReference):
            weight: int | None = program.reference_weight
        elif isinstance(scheme, (AnyWeight, NoWeight)):
            weight = None
        elif isinstance(scheme, LinearBasedOnPrevious):
            weight = program.weights.get(lift.key)
        else:
            raise TypeError(f"Not a weight scheme: {scheme!r}")
        attempts.append(LiftAttempt(lift=lift, weight=weight))
    return attempts


def _record_results(
    program: Program, results: tuple[LiftAttemptResult, ...]
) -> tuple[tuple[LiftAttemptResult, ...], ...]:
    recorded = list(program.current_cycle_attempt_results)
    while len(recorded) <= program.current_day:
        recorded.append(())
    recorded[program.current_day] = results
    return tuple(recorded)


def _ratchet_linear_weights(
    program: Program, results: tuple[LiftAttemptResult, ...]
) -> dict[str, int]:
    weights = dict(program.weights)
    for lift, result in zip(current_day(program).lifts, results):
        if isinstance(lift.weight, LinearBasedOnPrevious) and _is_max_reps(result):
            key = lift.key
            weights[key] = weights.get(key, 0) + lift.weight.amount_to_increase
            logger.debug("Linear weight for %r raised to %s", key, weights[key])
    return weights


def cycle_was_perfect(
    days: tuple[Day, ...],
    recorded: tuple[tuple[LiftAttemptResult, ...], ...],
) -> bool:
    """
    Check every reference-based lift of the cycle for a max-reps completion.

    A lift with no recorded result counts as not completed.  Results are
    whatever was last recorded for each day, so a day skipped this cycle
    contributes its results from an earlier cycle.

    Args:
        days: The cycle's days
        recorded: Results recorded per day, aligned with each day's lifts

    Returns:
        True if every reference-based lift was completed at max reps
    """
    for day_index, day in enumerate(days):
        day_results = recorded[day_index] if day_index < len(recorded) else ()
        for lift_index, lift in enumerate(day.lifts):
            if not isinstance(lift.weight, BasedOnReference):
                continue
            result = day_results[lift_index] if lift_index < len(day_results) else None
            if not _is_max_reps(result):
                return False
    return True


def complete_workout(program: Program, results: list[LiftAttemptResult]) -> Program:
    """
    Complete the current day and advance the program.

    Steps, in order:
    1. record the results for the current day
    2. add each linear lift's increment when it was completed at max reps
    3. when closing the cycle, add REFERENCE_WEIGHT_INCREMENT to the
       reference weight if the cycle was perfect
    4. count the workout
    5. move to the next day, wrapping at the end of the cycle

    Args:
        program: Current program state (left untouched)
        results: One result per lift of the current day, in order

    Returns:
        The new Program

    Raises:
        ResultCountError: If len(results) differs from the day's lift count
    """
    day = current_day(program)
    if len(results) != len(day.lifts):
        raise ResultCountError(
            f"Day '{day.name}' has {len(day.lifts)} lifts but {len(results)} results were given"
        )

    recorded = _record_results(program, tuple(results))
    weights = _ratchet_linear_weights(program, tuple(results))

    reference_weight = program.reference_weight
    closing_cycle = program.current_day == len(program.days) - 1
    if closing_cycle and cycle_was_perfect(program.days, recorded):
        reference_weight += REFERENCE_WEIGHT_INCREMENT
        logger.debug(
            "Perfect cycle: reference weight %s -> %s",
            program.reference_weight,
            reference_weight,
        )

    next_day = (program.current_day + 1) % len(program.days)
    logger.debug(
        "Completed day %s (%s); next day %s",
        program.current_day,
        day.name,
        next_day,
    )

    return replace(
        program,
        current_cycle_attempt_results=recorded,
        weights=weights,
        reference_weight=reference_weight,
        workouts_completed=program.workouts_completed + 1,
        current_day=next_day,
    )
