"""
Base types for program templates.

A ProgramTemplate holds the fixed cycle of days a Program is started
from, plus the starting weights for its independently tracked lifts.
"""

import logging
from dataclasses import dataclass, field

from ..config import DEFAULT_LINEAR_START_WEIGHT
from ..models import Day, LinearBasedOnPrevious, Program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramTemplate:
    """Full definition of one lifting program."""

    template_id: str          # e.g. "gzcl_4day"
    name: str                 # e.g. "GZCL-based 4-day cycle"
    days: tuple[Day, ...]
    description: str = ""

    # Starting weight per linear lift, keyed by the lift's notation.
    # Linear lifts missing here start at DEFAULT_LINEAR_START_WEIGHT.
    starting_weights: dict[str, int] = field(default_factory=dict)

    def linear_lift_keys(self) -> list[str]:
        """Notation keys of every linear lift, in cycle order, without repeats."""
        keys: list[str] = []
        for day in self.days:
            for lift in day.lifts:
                if isinstance(lift.weight, LinearBasedOnPrevious) and lift.key not in keys:
                    keys.append(lift.key)
        return keys


def start_program(template: ProgramTemplate, reference_weight: int) -> Program:
    """
    Start a new Program from a template.

    Args:
        template: The program template
        reference_weight: Initial reference weight (also kept as the
            starting reference weight)

    Returns:
        A Program on its first day with no workouts completed

    Raises:
        ValueError: If reference_weight is negative
    """
    if reference_weight < 0:
        raise ValueError(f"reference weight must be non-negative, got {reference_weight}")

    weights = {
        key: template.starting_weights.get(key, DEFAULT_LINEAR_START_WEIGHT)
        for key in template.linear_lift_keys()
    }
    logger.debug(
        "Starting %s at reference weight %s with %d linear lifts",
        template.template_id,
        reference_weight,
        len(weights),
    )
    return Program(
        name=template.name,
        days=template.days,
        reference_weight=reference_weight,
        starting_reference_weight=reference_weight,
        weights=weights,
    )
