"""
Compact text notation for sets, weight schemes, lifts, days and results.

Grammar summary:

    set           "Any" | "min-max" | "n+" | "Ns" | "n"
    weight        "any" | "<mult>r[+-<offset>]" | "add<amount>"
    sets          "<count>x<set>[,<count>x<set>...]"
    lift          "<name> -> <sets>[ @ <weight>]"
    day           "<name> | <lift> | <lift> ..."
    result        "NotCompleted" | "Completed" | "Completed+MaxReps"

Examples:
    "Weighted Pullup -> 4x3,1x3+ @ 0.5r-30"
    "Face Pull -> 2x15,1x15-25 @ add20"
    "Pull | Pullup -> 3x7+ | Barbell Row -> 3x10 @ 0.65r"

Every parse function raises NotationParseError on malformed input and every
format function is its exact inverse for canonical notation.
"""

import re

from .config import (
    RESULT_COMPLETED,
    RESULT_COMPLETED_MAX_REPS,
    RESULT_NOT_COMPLETED,
)
from .models import (
    AmrapSet,
    AnySet,
    AnyWeight,
    BasedOnReference,
    Completed,
    Day,
    DefinedSet,
    Lift,
    LiftAttemptResult,
    LinearBasedOnPrevious,
    NotCompleted,
    NoWeight,
    RangeSet,
    Set,
    TimedSet,
    WeightScheme,
)

_UNSIGNED_RE = re.compile(r"\d+", re.ASCII)
_SIGNED_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

LIFT_SEPARATOR = "->"
WEIGHT_SEPARATOR = "@"
DAY_SEPARATOR = " | "


class NotationParseError(ValueError):
    """Raised when notation text cannot be parsed."""

    pass


def _parse_unsigned(text: str, what: str, notation: str) -> int:
    if not _UNSIGNED_RE.fullmatch(text):
        raise NotationParseError(
            f"Invalid {what} in '{notation}': expected a whole number, got '{text}'"
        )
    return int(text)


def _parse_signed(text: str) -> int | None:
    return int(text) if _SIGNED_RE.fullmatch(text) else None


def _parse_float(text: str, what: str, notation: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise NotationParseError(
            f"Invalid {what} in '{notation}': expected a number, got '{text}'"
        )
    return float(text)


def _format_number(value: float) -> str:
    """Shortest decimal form, without a trailing '.0' (1.0 -> '1')."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


# =============================================================================
# SETS
# =============================================================================


def parse_set(notation: str) -> Set:
    """
    Parse a single set.

    Checks run in a fixed order and the first match wins: "3-5+" is read
    as a range (and rejected), never as an AMRAP set.

    Args:
        notation: e.g. "Any", "8-12", "3+", "30s", "5"

    Returns:
        The parsed Set

    Raises:
        NotationParseError: If the notation is malformed
    """
    if notation == "Any":
        return AnySet()
    if "-" in notation:
        low, high = notation.split("-", 1)
        return RangeSet(
            minimum_reps=_parse_unsigned(low, "minimum reps", notation),
            maximum_reps=_parse_unsigned(high, "maximum reps", notation),
        )
    if "+" in notation:
        reps = notation.split("+", 1)[0]
        return AmrapSet(minimum_reps=_parse_unsigned(reps, "minimum reps", notation))
    if "s" in notation:
        seconds = notation.split("s", 1)[0]
        return TimedSet(seconds=_parse_unsigned(seconds, "duration", notation))
    return DefinedSet(reps=_parse_unsigned(notation, "reps", notation))


def format_set(set_: Set) -> str:
    """Format a single set as notation."""
    if isinstance(set_, AmrapSet):
        return f"{set_.minimum_reps}+"
    if isinstance(set_, RangeSet):
        return f"{set_.minimum_reps}-{set_.maximum_reps}"
    if isinstance(set_, AnySet):
        return "Any"
    if isinstance(set_, DefinedSet):
        return f"{set_.reps}"
    if isinstance(set_, TimedSet):
        return f"{set_.seconds}s"
    raise TypeError(f"Not a set: {set_!r}")


def parse_sets(notation: str) -> tuple[Set, ...]:
    """
    Parse a comma-separated list of "<count>x<set>" runs.

    Each run expands into ``count`` copies of its set, in order:
    "2x5,1x5-6,1x6+" gives five sets.

    Raises:
        NotationParseError: If any run is malformed
    """
    sets: list[Set] = []
    for run in notation.split(","):
        run = run.strip()
        if "x" not in run:
            raise NotationParseError(
                f"Invalid sets notation '{notation}': run '{run}' must look like 3x5"
            )
        count, set_notation = run.split("x", 1)
        times = _parse_unsigned(count, "set count", notation)
        parsed = parse_set(set_notation)
        sets.extend([parsed] * times)
    return tuple(sets)


def format_sets(sets: tuple[Set, ...] | list[Set]) -> str:
    """
    Format sets as run-length "<count>x<set>" tokens.

    Only adjacent equal sets are merged; order is preserved.
    """
    runs: list[list] = []  # [count, set]
    for set_ in sets:
        if runs and runs[-1][1] == set_:
            runs[-1][0] += 1
        else:
            runs.append([1, set_])
    return ",".join(f"{count}x{format_set(set_)}" for count, set_ in runs)


# =============================================================================
# WEIGHT SCHEMES
# =============================================================================


def parse_weight_scheme(notation: str) -> WeightScheme:
    """
    Parse a weight scheme.

    Args:
        notation: "any", "0.8r", "0.5r-30", "1.35r+10" or "add20"

    Returns:
        The parsed WeightScheme

    Raises:
        NotationParseError: If the notation is malformed
    """
    if notation == "any":
        return AnyWeight()
    if "r" in notation:
        multiplier, offset = notation.split("r", 1)
        parsed_offset = _parse_signed(offset)
        return BasedOnReference(
            multiplier=_parse_float(multiplier, "multiplier", notation),
            offset=parsed_offset if parsed_offset is not None else 0,
        )
    if notation.startswith("add"):
        amount = notation[len("add"):]
        return LinearBasedOnPrevious(
            amount_to_increase=_parse_unsigned(amount, "increase", notation)
        )
    raise NotationParseError(
        f"Invalid weight notation: '{notation}'. Use any, <mult>r[+-offset] or add<amount>"
    )


def format_weight_scheme(scheme: WeightScheme) -> str:
    """Format a weight scheme; NoWeight formats as the empty string."""
    if isinstance(scheme, BasedOnReference):
        multiplier = _format_number(scheme.multiplier)
        if scheme.offset > 0:
            return f"{multiplier}r+{scheme.offset}"
        if scheme.offset == 0:
            return f"{multiplier}r"
        return f"{multiplier}r{scheme.offset}"
    if isinstance(scheme, AnyWeight):
        return "any"
    if isinstance(scheme, NoWeight):
        return ""
    if isinstance(scheme, LinearBasedOnPrevious):
        return f"add{scheme.amount_to_increase}"
    raise TypeError(f"Not a weight scheme: {scheme!r}")


# =============================================================================
# LIFTS
# =============================================================================


def parse_lift(notation: str) -> Lift:
    """
    Parse a lift: "<name> -> <sets>[ @ <weight>]".

    A lift without '@' has no weight concept (NoWeight).

    Raises:
        NotationParseError: If the separator is missing or a part is malformed
    """
    if LIFT_SEPARATOR not in notation:
        raise NotationParseError(
            f"Invalid lift notation: '{notation}'. Expected 'name -> sets @ weight'"
        )
    name, rest = notation.split(LIFT_SEPARATOR, 1)
    if WEIGHT_SEPARATOR in rest:
        sets_notation, weight_notation = rest.split(WEIGHT_SEPARATOR, 1)
        weight = parse_weight_scheme(weight_notation.strip())
    else:
        sets_notation = rest
        weight = NoWeight()
    return Lift(name=name.strip(), sets=parse_sets(sets_notation.strip()), weight=weight)


def format_lift(lift: Lift) -> str:
    """Format a lift as its canonical notation."""
    weight = format_weight_scheme(lift.weight)
    if weight:
        return f"{lift.name} -> {format_sets(lift.sets)} @ {weight}"
    return f"{lift.name} -> {format_sets(lift.sets)}"


# =============================================================================
# DAYS
# =============================================================================


def parse_day(notation: str) -> Day:
    """
    Parse a day: "<name> | <lift> | <lift> ...".

    Blank lift slots are ignored.

    Raises:
        NotationParseError: If any lift is malformed
    """
    name, *lift_notations = notation.split(DAY_SEPARATOR)
    lifts = tuple(parse_lift(text) for text in lift_notations if text.strip())
    return Day(name=name.strip(), lifts=lifts)


def format_day(day: Day) -> str:
    """Format a day as "<name> | <lift> | ..."."""
    return f"{day.name}{DAY_SEPARATOR}{DAY_SEPARATOR.join(format_lift(lift) for lift in day.lifts)}"


# =============================================================================
# RESULTS
# =============================================================================


def parse_result(notation: str) -> LiftAttemptResult:
    """
    Parse a lift attempt result.

    Raises:
        NotationParseError: If the notation is not one of the three results
    """
    if notation == RESULT_NOT_COMPLETED:
        return NotCompleted()
    if notation == RESULT_COMPLETED:
        return Completed(completed_maximum_reps=False)
    if notation == RESULT_COMPLETED_MAX_REPS:
        return Completed(completed_maximum_reps=True)
    raise NotationParseError(
        f"Invalid result: '{notation}'. Must be one of "
        f"{RESULT_NOT_COMPLETED}, {RESULT_COMPLETED}, {RESULT_COMPLETED_MAX_REPS}"
    )


def format_result(result: LiftAttemptResult) -> str:
    """Format a lift attempt result."""
    if isinstance(result, NotCompleted):
        return RESULT_NOT_COMPLETED
    if isinstance(result, Completed):
        return RESULT_COMPLETED_MAX_REPS if result.completed_maximum_reps else RESULT_COMPLETED
    raise TypeError(f"Not a lift attempt result: {result!r}")
