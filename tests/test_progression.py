"""
Unit tests for weight resolution and the progression engine.

Values are hand-computed from the progression rules:
- reference lifts: round_up_to_nearest_5(ceil(multiplier * reference + offset))
- linear lifts: +amount_to_increase after a max-rep completion
- reference weight: +5 when a cycle closes with every reference lift
  completed at max reps
"""

import pytest

from lift_cycle.core.config import REFERENCE_WEIGHT_INCREMENT
from lift_cycle.core.models import (
    COMPLETED,
    COMPLETED_MAX_REPS,
    NOT_COMPLETED,
    Day,
    LiftAttempt,
    Program,
)
from lift_cycle.core.notation import parse_day, parse_lift
from lift_cycle.core.progression import (
    ResultCountError,
    complete_workout,
    current_day,
    cycle_was_perfect,
    next_workout,
)
from lift_cycle.core.templates import get_template, start_program
from lift_cycle.core.weights import (
    format_attempt,
    has_rep_range,
    prescribed_weight,
    round_up_to_nearest_5,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

FACE_PULL = "Face Pull -> 2x15,1x15-25 @ add20"


def _gzcl(reference_weight: int = 100) -> Program:
    return start_program(get_template("gzcl_4day"), reference_weight)


def _small_program(reference_weight: int = 100, weights: dict | None = None) -> Program:
    """Two days: a reference lift plus a linear lift, then a reference lift plus bodyweight."""
    days = (
        parse_day(f"A | Squat -> 4x3,1x3+ @ 1r | {FACE_PULL}"),
        parse_day("B | Bench press -> 3x5 @ 0.8r | Pullup -> 3x7+"),
    )
    return Program(
        name="Test cycle",
        days=days,
        reference_weight=reference_weight,
        starting_reference_weight=reference_weight,
        weights=dict(weights or {}),
    )


def _complete_day(program: Program, result) -> Program:
    return complete_workout(program, [result] * len(current_day(program).lifts))


def _complete_cycle(program: Program, result=COMPLETED_MAX_REPS) -> Program:
    for _ in range(len(program.days)):
        program = _complete_day(program, result)
    return program


# ---------------------------------------------------------------------------
# Weight helpers
# ---------------------------------------------------------------------------


class TestRoundUpToNearest5:
    """round_up_to_nearest_5."""

    @pytest.mark.parametrize(
        "weight, expected",
        [(0, 0), (20, 20), (21, 25), (22, 25), (24, 25), (25, 25), (101, 105)],
    )
    def test_rounding(self, weight, expected):
        assert round_up_to_nearest_5(weight) == expected


class TestPrescribedWeight:
    """Display-time weight resolution for attempts."""

    def test_reference_with_negative_offset(self):
        attempt = LiftAttempt(lift=parse_lift("Weighted Pullup -> 4x3,1x3+ @ 0.5r-30"), weight=100)
        assert prescribed_weight(attempt) == 20

    def test_reference_with_positive_offset(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5 @ 0.5r+10"), weight=100)
        assert str(attempt) == "Pullups -> 3x5 @ 60"

    def test_reference_fraction_rounds_up(self):
        """0.222 * 100 = 22.2 -> ceil 23 -> 25."""
        attempt = LiftAttempt(lift=parse_lift("Doobee doos -> 3x5 @ 0.222r"), weight=100)
        assert str(attempt) == "Doobee doos -> 3x5 @ 25"

    def test_reference_never_negative(self):
        attempt = LiftAttempt(lift=parse_lift("Weighted Pullup -> 4x3 @ 0.5r-30"), weight=40)
        assert prescribed_weight(attempt) == 0

    def test_linear_rounds_up(self):
        attempt = LiftAttempt(lift=parse_lift("Doobee doos -> 3x5 @ add20"), weight=22)
        assert str(attempt) == "Doobee doos -> 3x5 @ 25"

    def test_linear_without_weight_is_any(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5 @ add10"), weight=None)
        assert str(attempt) == "Pullups -> 3x5 @ any"

    def test_linear_with_weight(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5 @ add10"), weight=25)
        assert str(attempt) == "Pullups -> 3x5 @ 25"

    def test_any_weight(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5 @ any"), weight=None)
        assert str(attempt) == "Pullups -> 3x5 @ any"

    def test_any_weight_with_concrete_weight(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5 @ any"), weight=33)
        assert format_attempt(attempt) == "Pullups -> 3x5 @ 35"

    def test_no_weight(self):
        attempt = LiftAttempt(lift=parse_lift("Pullups -> 3x5"), weight=None)
        assert str(attempt) == "Pullups -> 3x5"
        assert prescribed_weight(attempt) is None


class TestHasRepRange:
    def test_range_detected(self):
        assert has_rep_range(parse_lift(FACE_PULL))

    def test_no_range(self):
        assert not has_rep_range(parse_lift("Squat -> 4x3,1x3+ @ 1.35r"))


# ---------------------------------------------------------------------------
# Progression engine
# ---------------------------------------------------------------------------


class TestStartProgram:
    """Creating a program from a template."""

    def test_initial_state(self):
        program = _gzcl(100)
        assert program.name == "GZCL-based 4-day cycle"
        assert program.reference_weight == 100
        assert program.starting_reference_weight == 100
        assert program.current_day == 0
        assert program.workouts_completed == 0
        assert program.current_cycle_attempt_results == ()

    def test_linear_lifts_are_seeded(self):
        program = _gzcl(100)
        assert program.weights[FACE_PULL] == 20
        assert program.weights["Leg press -> 2x15,1x15-25 @ add30"] == 30
        assert len(program.weights) == 5

    def test_negative_reference_weight_rejected(self):
        with pytest.raises(ValueError):
            _gzcl(-5)


class TestNextWorkout:
    """next_workout resolves one attempt per lift of the current day."""

    def test_first_lift_prescription(self):
        """Started at 100: 0.5r-30 gives ceil(0.5*100-30) = 20."""
        attempts = next_workout(_gzcl(100))
        assert str(attempts[0]) == "Weighted Pullup -> 4x3,1x3+ @ 20"
        assert str(attempts[1]) == "Pullup -> 3x7+"
        assert str(attempts[2]) == "Barbell Row -> 3x10 @ 65"
        assert str(attempts[3]) == "Face Pull -> 2x15,1x15-25 @ 20"

    def test_raw_weights(self):
        program = _small_program(100, weights={FACE_PULL: 40})
        attempts = next_workout(program)
        assert [a.weight for a in attempts] == [100, 40]

    def test_unrecorded_linear_weight_is_none(self):
        attempts = next_workout(_small_program(100))
        assert attempts[1].weight is None
        assert str(attempts[1]) == "Face Pull -> 2x15,1x15-25 @ any"

    def test_no_weight_and_any_are_none(self):
        program = _gzcl(100)
        core_day = program.days[3]
        program = Program(
            name=program.name,
            days=program.days,
            reference_weight=100,
            starting_reference_weight=100,
            current_day=3,
        )
        attempts = next_workout(program)
        assert len(attempts) == len(core_day.lifts)
        assert all(a.weight is None for a in attempts)

    def test_does_not_change_program(self):
        program = _gzcl(100)
        next_workout(program)
        assert program == _gzcl(100)


class TestCompleteWorkout:
    """Single-day transitions."""

    def test_advances_one_day(self):
        program = _complete_day(_small_program(), NOT_COMPLETED)
        assert program.current_day == 1
        assert program.workouts_completed == 1

    def test_wraps_after_last_day(self):
        program = _complete_cycle(_small_program(), NOT_COMPLETED)
        assert program.current_day == 0
        assert program.workouts_completed == 2

    def test_records_results_for_the_day(self):
        program = complete_workout(_small_program(), [COMPLETED, NOT_COMPLETED])
        assert program.current_cycle_attempt_results == ((COMPLETED, NOT_COMPLETED),)

    def test_input_program_untouched(self):
        before = _small_program(weights={FACE_PULL: 20})
        complete_workout(before, [COMPLETED_MAX_REPS, COMPLETED_MAX_REPS])
        assert before.current_day == 0
        assert before.workouts_completed == 0
        assert before.weights == {FACE_PULL: 20}
        assert before.current_cycle_attempt_results == ()

    def test_wrong_result_count_raises(self):
        with pytest.raises(ResultCountError):
            complete_workout(_small_program(), [COMPLETED_MAX_REPS])

    def test_result_count_error_is_value_error(self):
        with pytest.raises(ValueError):
            complete_workout(_small_program(), [])


class TestLinearWeights:
    """Linear lifts ratchet only on a max-rep completion."""

    def test_increases_on_max_reps(self):
        program = complete_workout(_small_program(weights={FACE_PULL: 20}), [NOT_COMPLETED, COMPLETED_MAX_REPS])
        assert program.weights[FACE_PULL] == 40

    def test_unchanged_without_max_reps(self):
        program = complete_workout(_small_program(weights={FACE_PULL: 20}), [COMPLETED_MAX_REPS, COMPLETED])
        assert program.weights[FACE_PULL] == 20

    def test_unchanged_when_not_completed(self):
        program = complete_workout(_small_program(weights={FACE_PULL: 20}), [COMPLETED_MAX_REPS, NOT_COMPLETED])
        assert program.weights[FACE_PULL] == 20

    def test_inserted_from_zero_when_absent(self):
        program = complete_workout(_small_program(), [NOT_COMPLETED, COMPLETED_MAX_REPS])
        assert program.weights == {FACE_PULL: 20}

    def test_reference_lifts_never_tracked(self):
        program = _complete_cycle(_small_program())
        assert set(program.weights) == {FACE_PULL}


class TestReferenceWeight:
    """End-of-cycle auto-regulation."""

    def test_perfect_cycle_adds_five(self):
        program = _complete_cycle(_gzcl(100))
        assert program.reference_weight == 105
        assert program.starting_reference_weight == 100
        assert program.workouts_completed == 4
        assert program.current_day == 0

    def test_increment_constant(self):
        assert REFERENCE_WEIGHT_INCREMENT == 5

    def test_only_changes_when_cycle_closes(self):
        program = _gzcl(100)
        for _ in range(3):
            program = _complete_day(program, COMPLETED_MAX_REPS)
            assert program.reference_weight == 100

    def test_one_not_completed_blocks_increase(self):
        program = _gzcl(100)
        program = _complete_day(program, COMPLETED_MAX_REPS)
        results = [COMPLETED_MAX_REPS] * len(current_day(program).lifts)
        results[0] = NOT_COMPLETED  # Bench press
        program = complete_workout(program, results)
        program = _complete_day(program, COMPLETED_MAX_REPS)
        program = _complete_day(program, COMPLETED_MAX_REPS)
        assert program.current_day == 0
        assert program.reference_weight == 100

    def test_completed_without_max_reps_blocks_increase(self):
        program = _small_program(100)
        program = complete_workout(program, [COMPLETED, COMPLETED_MAX_REPS])
        program = _complete_day(program, COMPLETED_MAX_REPS)
        assert program.reference_weight == 100

    def test_non_reference_failures_do_not_block(self):
        """Only reference-based lifts decide the increase."""
        program = _small_program(100)
        program = complete_workout(program, [COMPLETED_MAX_REPS, NOT_COMPLETED])
        program = complete_workout(program, [COMPLETED_MAX_REPS, NOT_COMPLETED])
        assert program.reference_weight == 105

    def test_two_perfect_cycles(self):
        program = _complete_cycle(_complete_cycle(_gzcl(100)))
        assert program.reference_weight == 110
        assert program.starting_reference_weight == 100
        assert program.workouts_completed == 8

    def test_prescriptions_follow_new_reference(self):
        program = _complete_cycle(_gzcl(100))
        attempts = next_workout(program)
        # 0.5 * 105 - 30 = 22.5 -> 23 -> 25
        assert str(attempts[0]) == "Weighted Pullup -> 4x3,1x3+ @ 25"

    def test_linear_weights_after_perfect_cycle(self):
        program = _complete_cycle(_gzcl(100))
        assert program.weights[FACE_PULL] == 40
        assert program.weights["Leg press -> 2x15,1x15-25 @ add30"] == 60


class TestStaleCycleResults:
    """Recorded results are never cleared at cycle boundaries."""

    def test_results_survive_cycle_boundary(self):
        program = _complete_cycle(_small_program(), COMPLETED_MAX_REPS)
        assert program.current_cycle_attempt_results == (
            (COMPLETED_MAX_REPS, COMPLETED_MAX_REPS),
            (COMPLETED_MAX_REPS, COMPLETED_MAX_REPS),
        )

    def test_stale_results_count_for_a_skipped_day(self):
        """
        Day A's results from the previous cycle still count when the program
        starts the next cycle on the last day.
        """
        program = _complete_cycle(_small_program(100), COMPLETED_MAX_REPS)
        assert program.reference_weight == 105

        # Jump straight to day B, as if day A was skipped this cycle
        skipped = Program(
            name=program.name,
            days=program.days,
            reference_weight=program.reference_weight,
            starting_reference_weight=program.starting_reference_weight,
            weights=program.weights,
            current_day=1,
            current_cycle_attempt_results=program.current_cycle_attempt_results,
            workouts_completed=program.workouts_completed,
        )
        closed = _complete_day(skipped, COMPLETED_MAX_REPS)
        assert closed.reference_weight == 110

    def test_missing_record_counts_as_not_completed(self):
        program = Program(
            name="Test cycle",
            days=_small_program().days,
            reference_weight=100,
            starting_reference_weight=100,
            current_day=1,
        )
        closed = _complete_day(program, COMPLETED_MAX_REPS)
        assert closed.reference_weight == 100


class TestCycleWasPerfect:
    def test_no_reference_lifts_is_perfect(self):
        days = (Day(name="Core", lifts=(parse_lift("Plank -> 1x30s @ any"),)),)
        assert cycle_was_perfect(days, ((NOT_COMPLETED,),))

    def test_missing_day(self):
        days = _small_program().days
        assert not cycle_was_perfect(days, ((COMPLETED_MAX_REPS, COMPLETED_MAX_REPS),))


class TestProgramValidation:
    def test_current_day_out_of_range(self):
        with pytest.raises(ValueError):
            Program(
                name="x",
                days=_small_program().days,
                reference_weight=100,
                starting_reference_weight=100,
                current_day=2,
            )

    def test_needs_days(self):
        with pytest.raises(ValueError):
            Program(name="x", days=(), reference_weight=100, starting_reference_weight=100)

    def test_negative_linear_weight_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            _small_program(weights={FACE_PULL: -20})

    def test_weight_for_reference_lift_rejected(self):
        with pytest.raises(ValueError, match="not a linear lift"):
            _small_program(weights={"Squat -> 4x3,1x3+ @ 1r": 100})

    def test_weight_for_unknown_lift_rejected(self):
        with pytest.raises(ValueError, match="not a linear lift"):
            _small_program(weights={"Curl -> 3x10 @ add5": 20})

    def test_linear_lift_keys(self):
        assert _gzcl().linear_lift_keys() == get_template("gzcl_4day").linear_lift_keys()
        assert _small_program().linear_lift_keys() == [FACE_PULL]
