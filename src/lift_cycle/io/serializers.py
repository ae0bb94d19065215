"""
JSON serialization for the program model.

Handles conversion between the Program dataclass and JSON-compatible
dicts.  Days, lifts and results are stored in notation form so the saved
file stays readable and editable by hand:

    {
      "name": "GZCL-based 4-day cycle",
      "reference_weight": 105,
      "starting_reference_weight": 100,
      "workouts_completed": 4,
      "days_in_notation": ["Pull | Weighted Pullup -> 4x3,1x3+ @ 0.5r-30 | ..."],
      "weights": {"Face Pull -> 2x15,1x15-25 @ add20": 40},
      "current_day": 0,
      "past_attempt_results_in_notation": [["Completed+MaxReps", "NotCompleted"]]
    }
"""

import json
from typing import Any

from ..core.models import Program
from ..core.notation import (
    NotationParseError,
    format_day,
    format_result,
    parse_day,
    parse_result,
)

_REQUIRED_PROGRAM_KEYS = (
    "name",
    "reference_weight",
    "starting_reference_weight",
    "workouts_completed",
    "days_in_notation",
    "weights",
    "current_day",
    "past_attempt_results_in_notation",
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_non_negative_int(value: Any, name: str) -> int:
    """
    Validate that a value is a non-negative integer.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value as int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def program_to_dict(program: Program) -> dict[str, Any]:
    """
    Convert Program to JSON-compatible dict.

    Args:
        program: Program to convert

    Returns:
        Dict representation
    """
    return {
        "name": program.name,
        "reference_weight": program.reference_weight,
        "starting_reference_weight": program.starting_reference_weight,
        "workouts_completed": program.workouts_completed,
        "days_in_notation": [format_day(day) for day in program.days],
        "weights": dict(program.weights),
        "current_day": program.current_day,
        "past_attempt_results_in_notation": [
            [format_result(result) for result in day_results]
            for day_results in program.current_cycle_attempt_results
        ],
    }


def dict_to_program(data: dict[str, Any]) -> Program:
    """
    Convert dict to Program.

    Args:
        data: Dict representation

    Returns:
        Program instance

    Raises:
        ValidationError: If data is invalid
    """
    missing = [key for key in _REQUIRED_PROGRAM_KEYS if key not in data]
    if missing:
        raise ValidationError(f"Saved program is missing keys: {', '.join(missing)}")

    reference_weight = validate_non_negative_int(data["reference_weight"], "reference_weight")
    starting = validate_non_negative_int(
        data["starting_reference_weight"], "starting_reference_weight"
    )
    completed = validate_non_negative_int(data["workouts_completed"], "workouts_completed")
    current_day = validate_non_negative_int(data["current_day"], "current_day")

    raw_weights = data["weights"]
    if not isinstance(raw_weights, dict):
        raise ValidationError("weights must be an object of lift notation -> weight")
    weights = {
        str(key): validate_non_negative_int(value, f"weights[{key!r}]")
        for key, value in raw_weights.items()
    }

    raw_days = data["days_in_notation"]
    raw_results = data["past_attempt_results_in_notation"]
    if not isinstance(raw_days, list) or not all(isinstance(d, str) for d in raw_days):
        raise ValidationError("days_in_notation must be a list of strings")
    if not isinstance(raw_results, list) or not all(isinstance(r, list) for r in raw_results):
        raise ValidationError("past_attempt_results_in_notation must be a list of lists")

    try:
        days = tuple(parse_day(notation) for notation in raw_days)
        results = tuple(
            tuple(parse_result(notation) for notation in day_results)
            for day_results in raw_results
        )
    except NotationParseError as e:
        raise ValidationError(f"Invalid notation in saved program: {e}") from e

    try:
        return Program(
            name=str(data["name"]),
            days=days,
            reference_weight=reference_weight,
            starting_reference_weight=starting,
            weights=weights,
            current_day=current_day,
            current_cycle_attempt_results=results,
            workouts_completed=completed,
        )
    except ValueError as e:
        raise ValidationError(f"Invalid saved program: {e}") from e


def program_to_json(program: Program) -> str:
    """
    Serialize a program to an indented JSON document.

    Args:
        program: Program to serialize

    Returns:
        JSON string
    """
    return json.dumps(program_to_dict(program), indent=2)


def json_to_program(text: str) -> Program:
    """
    Deserialize a JSON document to a Program.

    Args:
        text: JSON string

    Returns:
        Program instance

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError("Saved program must be a JSON object")

    return dict_to_program(data)
