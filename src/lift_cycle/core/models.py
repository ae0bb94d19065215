"""
Data models for lift-cycle.

All core dataclasses representing sets, weight schemes, lifts, days,
attempts and the program itself.  Every model is frozen: the program
moves forward by building new values (see core/progression.py), never
by mutating an existing one.

String conversion of the notation-backed types is delegated to
core/notation.py so that ``str(lift)`` is always the canonical notation.
"""

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AmrapSet:
    """As many reps as possible, with a floor of minimum_reps."""

    minimum_reps: int

    def __str__(self) -> str:
        from .notation import format_set

        return format_set(self)


@dataclass(frozen=True)
class RangeSet:
    """A rep range, e.g. 15-25."""

    minimum_reps: int
    maximum_reps: int

    def __str__(self) -> str:
        from .notation import format_set

        return format_set(self)


@dataclass(frozen=True)
class AnySet:
    """No rep target."""

    def __str__(self) -> str:
        from .notation import format_set

        return format_set(self)


@dataclass(frozen=True)
class DefinedSet:
    """An exact rep count."""

    reps: int

    def __str__(self) -> str:
        from .notation import format_set

        return format_set(self)


@dataclass(frozen=True)
class TimedSet:
    """A timed hold, in whole seconds."""

    seconds: int

    def __str__(self) -> str:
        from .notation import format_set

        return format_set(self)


Set = Union[AmrapSet, RangeSet, AnySet, DefinedSet, TimedSet]


# ---------------------------------------------------------------------------
# Weight schemes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BasedOnReference:
    """
    Working weight derived from the program's reference weight.

    weight = multiplier * reference_weight + offset (rounded at display time).
    """

    multiplier: float
    offset: int = 0

    def __str__(self) -> str:
        from .notation import format_weight_scheme

        return format_weight_scheme(self)


@dataclass(frozen=True)
class AnyWeight:
    """The lifter picks the weight."""

    def __str__(self) -> str:
        from .notation import format_weight_scheme

        return format_weight_scheme(self)


@dataclass(frozen=True)
class NoWeight:
    """No weight concept at all (bodyweight reps, holds)."""

    def __str__(self) -> str:
        from .notation import format_weight_scheme

        return format_weight_scheme(self)


@dataclass(frozen=True)
class LinearBasedOnPrevious:
    """Independently tracked weight that grows by amount_to_increase on success."""

    amount_to_increase: int

    def __post_init__(self) -> None:
        if self.amount_to_increase < 0:
            raise ValueError("amount_to_increase must be non-negative")

    def __str__(self) -> str:
        from .notation import format_weight_scheme

        return format_weight_scheme(self)


WeightScheme = Union[BasedOnReference, AnyWeight, NoWeight, LinearBasedOnPrevious]


# ---------------------------------------------------------------------------
# Lifts and days
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Lift:
    """
    A prescribed exercise: name, ordered sets, and how its weight is derived.

    Two lifts are equal iff name, sets (in order) and weight scheme match.
    """

    name: str
    sets: tuple[Set, ...]
    weight: WeightScheme = field(default_factory=NoWeight)

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the lift stays hashable
        if not isinstance(self.sets, tuple):
            object.__setattr__(self, "sets", tuple(self.sets))

    @property
    def key(self) -> str:
        """Canonical notation, used as the lookup key for tracked weights."""
        return str(self)

    def __str__(self) -> str:
        from .notation import format_lift

        return format_lift(self)


@dataclass(frozen=True)
class Day:
    """One training day of the cycle."""

    name: str
    lifts: tuple[Lift, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.lifts, tuple):
            object.__setattr__(self, "lifts", tuple(self.lifts))

    def __str__(self) -> str:
        from .notation import format_day

        return format_day(self)


# ---------------------------------------------------------------------------
# Attempts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LiftAttempt:
    """
    A concrete instance of a lift with its resolved weight.

    For reference-based lifts ``weight`` holds the raw reference weight;
    multiplier and offset are applied when the attempt is displayed.
    """

    lift: Lift
    weight: int | None = None

    def __str__(self) -> str:
        from .weights import format_attempt

        return format_attempt(self)


@dataclass(frozen=True)
class NotCompleted:
    """The lift was not completed."""

    def __str__(self) -> str:
        from .notation import format_result

        return format_result(self)


@dataclass(frozen=True)
class Completed:
    """The lift was completed, possibly hitting the top of every rep range."""

    completed_maximum_reps: bool

    def __str__(self) -> str:
        from .notation import format_result

        return format_result(self)


LiftAttemptResult = Union[NotCompleted, Completed]

NOT_COMPLETED = NotCompleted()
COMPLETED = Completed(completed_maximum_reps=False)
COMPLETED_MAX_REPS = Completed(completed_maximum_reps=True)


# ---------------------------------------------------------------------------
# Program
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Program:
    """
    Complete program state: the cycle template plus progression bookkeeping.

    ``weights`` maps a lift's canonical notation to its independently
    tracked weight and only ever holds linear lifts.

    ``current_cycle_attempt_results[i]`` holds the results last recorded for
    day ``i``, positionally aligned with that day's lifts.  Entries are only
    overwritten when the day is completed again, never cleared.
    """

    name: str
    days: tuple[Day, ...]
    reference_weight: int
    starting_reference_weight: int
    weights: dict[str, int] = field(default_factory=dict)
    current_day: int = 0
    current_cycle_attempt_results: tuple[tuple[LiftAttemptResult, ...], ...] = ()
    workouts_completed: int = 0

    def __post_init__(self) -> None:
        """Validate program state."""
        if not isinstance(self.days, tuple):
            object.__setattr__(self, "days", tuple(self.days))
        object.__setattr__(
            self,
            "current_cycle_attempt_results",
            tuple(tuple(r) for r in self.current_cycle_attempt_results),
        )

        if not self.days:
            raise ValueError("a program needs at least one day")
        if not 0 <= self.current_day < len(self.days):
            raise ValueError(
                f"current_day must be in [0, {len(self.days)}), got {self.current_day}"
            )
        if self.reference_weight < 0:
            raise ValueError("reference_weight must be non-negative")
        if self.starting_reference_weight < 0:
            raise ValueError("starting_reference_weight must be non-negative")
        if self.workouts_completed < 0:
            raise ValueError("workouts_completed must be non-negative")

        linear_keys = set(self.linear_lift_keys())
        for key, weight in self.weights.items():
            if key not in linear_keys:
                raise ValueError(f"weights holds '{key}', which is not a linear lift of this program")
            if weight < 0:
                raise ValueError(f"weight for '{key}' must be non-negative, got {weight}")

    def linear_lift_keys(self) -> list[str]:
        """Notation keys of every linear lift, in cycle order, without repeats."""
        keys: list[str] = []
        for day in self.days:
            for lift in day.lifts:
                if isinstance(lift.weight, LinearBasedOnPrevious) and lift.key not in keys:
                    keys.append(lift.key)
        return keys
