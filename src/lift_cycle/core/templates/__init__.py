"""
Program templates for lift-cycle.

Each template describes a fixed cycle of days in notation form and is
used to start a new Program.
"""

from .base import ProgramTemplate, start_program
from .registry import DEFAULT_TEMPLATE_ID, TEMPLATE_REGISTRY, get_template

__all__ = [
    "ProgramTemplate",
    "start_program",
    "DEFAULT_TEMPLATE_ID",
    "TEMPLATE_REGISTRY",
    "get_template",
]
