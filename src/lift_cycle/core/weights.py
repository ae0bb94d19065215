"""
Weight resolution and rounding for prescribed lift attempts.

The progression engine hands out raw weights (the reference weight, or a
linear lift's tracked weight).  This module turns them into the number a
lifter actually loads on the bar.
"""

import math

from .config import WEIGHT_ROUNDING_STEP
from .models import (
    AnyWeight,
    BasedOnReference,
    Lift,
    LiftAttempt,
    LinearBasedOnPrevious,
    NoWeight,
    RangeSet,
)
from .notation import format_sets


def round_up_to_nearest_5(weight: int) -> int:
    """
    Round a weight up to the next multiple of WEIGHT_ROUNDING_STEP.

    Multiples are returned unchanged: 20 -> 20, 21 -> 25, 24 -> 25.
    """
    remainder = weight % WEIGHT_ROUNDING_STEP
    if remainder == 0:
        return weight
    return weight + (WEIGHT_ROUNDING_STEP - remainder)


def reference_based_weight(scheme: BasedOnReference, reference_weight: int) -> int:
    """
    Working weight for a reference-based lift.

    ceil(multiplier * reference + offset), floored at 0, then rounded up to
    the nearest 5.  Example: 0.5r-30 at reference 100 gives 20.
    """
    raw = math.ceil(scheme.multiplier * reference_weight + scheme.offset)
    return round_up_to_nearest_5(max(raw, 0))


def prescribed_weight(attempt: LiftAttempt) -> int | None:
    """
    Resolve the weight to display for an attempt.

    Returns:
        The rounded weight, or None when the lift has no weight or the
        weight is left to the lifter.
    """
    scheme = attempt.lift.weight
    if isinstance(scheme, NoWeight):
        return None
    if isinstance(scheme, BasedOnReference):
        if attempt.weight is None:
            return None
        return reference_based_weight(scheme, attempt.weight)
    if isinstance(scheme, (AnyWeight, LinearBasedOnPrevious)):
        if attempt.weight is None:
            return None
        return round_up_to_nearest_5(attempt.weight)
    raise TypeError(f"Not a weight scheme: {scheme!r}")


def format_attempt(attempt: LiftAttempt) -> str:
    """
    Format an attempt for the lifter, e.g. "Weighted Pullup -> 4x3,1x3+ @ 20".

    Lifts without a weight print as "name -> sets"; lifts whose weight is
    unknown print "@ any".
    """
    lift = attempt.lift
    sets = format_sets(lift.sets)
    if isinstance(lift.weight, NoWeight):
        return f"{lift.name} -> {sets}"
    weight = prescribed_weight(attempt)
    return f"{lift.name} -> {sets} @ {weight if weight is not None else 'any'}"


def has_rep_range(lift: Lift) -> bool:
    """True if any set of the lift is a rep range."""
    return any(isinstance(s, RangeSet) for s in lift.sets)
