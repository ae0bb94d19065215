"""
Program template registry.

All available program templates are registered here.  Use get_template()
to look up a ProgramTemplate by its template_id string.

Templates are loaded from per-template YAML files in the bundled
``src/lift_cycle/templates/`` directory at import time.  If no template
can be loaded a RuntimeError is raised: the application cannot start
a program without one.

User overrides: place matching files in ``~/.lift-cycle/templates/``.
"""

from .base import ProgramTemplate

DEFAULT_TEMPLATE_ID = "gzcl_4day"


def _build_registry() -> dict[str, ProgramTemplate]:
    from .loader import load_templates_from_yaml

    loaded = load_templates_from_yaml()
    if not loaded:
        raise RuntimeError(
            "lift-cycle: no program templates could be loaded from YAML. "
            "Check that src/lift_cycle/templates/*.yaml files are present and valid."
        )
    return loaded


TEMPLATE_REGISTRY: dict[str, ProgramTemplate] = _build_registry()


def get_template(template_id: str = DEFAULT_TEMPLATE_ID) -> ProgramTemplate:
    """
    Return the ProgramTemplate for the given template_id.

    Args:
        template_id: e.g. "gzcl_4day" (or any template in the registry)

    Returns:
        ProgramTemplate for the requested program

    Raises:
        ValueError: If template_id is not in the registry
    """
    if template_id not in TEMPLATE_REGISTRY:
        valid = ", ".join(TEMPLATE_REGISTRY)
        raise ValueError(f"Unknown program '{template_id}'. Valid IDs: {valid}")
    return TEMPLATE_REGISTRY[template_id]
