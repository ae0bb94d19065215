"""
Configuration constants for the lifting program tracker.

All adjustable parameters are centralized here for easy tuning.
Program templates themselves are configured through YAML files
(see core/templates/loader.py).
"""

from typing import Final

# =============================================================================
# PROGRESSION
# =============================================================================

REFERENCE_WEIGHT_INCREMENT: Final[int] = 5  # Added to the reference weight after a perfect cycle
WEIGHT_ROUNDING_STEP: Final[int] = 5  # Prescribed weights round up to a multiple of this
DEFAULT_LINEAR_START_WEIGHT: Final[int] = 0  # Seed for linear lifts a template leaves unset

# =============================================================================
# PERSISTENCE
# =============================================================================

SAVE_DATA_DIRNAME: Final[str] = "lift_cycle_save_data"  # Created inside --save-directory
PROGRAM_FILENAME: Final[str] = "program.json"
HISTORY_FILENAME: Final[str] = "lift_history.txt"
HISTORY_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# USER OVERRIDES
# =============================================================================

USER_CONFIG_DIRNAME: Final[str] = ".lift-cycle"  # ~/.lift-cycle/templates/*.yaml

# =============================================================================
# RESULT NOTATION
# =============================================================================

RESULT_NOT_COMPLETED: Final[str] = "NotCompleted"
RESULT_COMPLETED: Final[str] = "Completed"
RESULT_COMPLETED_MAX_REPS: Final[str] = "Completed+MaxReps"
