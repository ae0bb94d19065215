"""
YAML to ProgramTemplate loader.

Loads program templates from individual YAML files in the bundled
``src/lift_cycle/templates/`` directory.  Each file (e.g. gzcl_4day.yaml)
contains one template:

    template_id: gzcl_4day
    name: GZCL-based 4-day cycle
    days:
      - "Pull | Weighted Pullup -> 4x3,1x3+ @ 0.5r-30 | Pullup -> 3x7+"
      - ...
    default_linear_weight: 0          # optional
    starting_weights:                 # optional, keyed by lift notation
      "Face Pull -> 2x15,1x15-25 @ add20": 20

User overrides: place matching files in ``~/.lift-cycle/templates/``.
A user file is deep-merged over the bundled template, so only changed
keys need to be listed.  A user file whose stem does not match any
bundled file is treated as a new template.

Usage (internal, called by registry.py):
    from .loader import load_templates_from_yaml
    templates = load_templates_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..config import USER_CONFIG_DIRNAME
from ..notation import NotationParseError, parse_day, parse_lift
from .base import ProgramTemplate

_REQUIRED_TEMPLATE_FIELDS: frozenset[str] = frozenset({"template_id", "name", "days"})


def template_from_dict(d: dict) -> ProgramTemplate:
    """Convert a raw dict (from YAML) to a ProgramTemplate.

    Raises ValueError if a required field is absent or a day's notation
    cannot be parsed.
    """
    missing = _REQUIRED_TEMPLATE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ProgramTemplate missing fields: {sorted(missing)}")

    raw_days = d["days"]
    if not isinstance(raw_days, list) or not raw_days:
        raise ValueError("ProgramTemplate 'days' must be a non-empty list of day notations")

    try:
        days = tuple(parse_day(str(notation)) for notation in raw_days)
    except NotationParseError as exc:
        raise ValueError(f"bad day notation: {exc}") from exc

    template = ProgramTemplate(
        template_id=str(d["template_id"]),
        name=str(d["name"]),
        days=days,
        description=str(d.get("description", "")),
    )

    # Explicit starting weights win over the template-wide default
    starting_weights: dict[str, int] = {}
    if "default_linear_weight" in d:
        default = int(d["default_linear_weight"])
        starting_weights = {key: default for key in template.linear_lift_keys()}
    for raw_key, weight in (d.get("starting_weights") or {}).items():
        try:
            key = parse_lift(str(raw_key)).key
        except NotationParseError as exc:
            raise ValueError(f"bad starting weight lift notation: {exc}") from exc
        if key not in template.linear_lift_keys():
            raise ValueError(f"starting weight given for unknown linear lift '{key}'")
        starting_weights[key] = int(weight)

    return ProgramTemplate(
        template_id=template.template_id,
        name=template.name,
        days=template.days,
        description=template.description,
        starting_weights=starting_weights,
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-cycle: cannot read template file {path}: {exc}", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _get_bundled_templates_dir() -> Path | None:
    """Return path to the bundled templates/ data directory, or None if not found."""
    # loader.py lives at src/lift_cycle/core/templates/loader.py
    # three levels up: src/lift_cycle/
    candidate = Path(__file__).parent.parent.parent / "templates"
    return candidate if candidate.is_dir() else None


def _get_user_templates_dir() -> Path | None:
    """Return ~/.lift-cycle/templates/ if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / USER_CONFIG_DIRNAME / "templates"
    return p if p.is_dir() else None


def load_templates_from_yaml() -> dict[str, ProgramTemplate] | None:
    """Return {template_id: ProgramTemplate} loaded from per-template YAML files.

    Loads each ``<template_id>.yaml`` from the bundled templates/ directory.
    If a matching file exists in ``~/.lift-cycle/templates/`` it is
    deep-merged over the bundled template.  User-only files are loaded as
    new templates.  Invalid templates are skipped with a warning.

    Returns None when no template could be loaded.
    """
    bundled_dir = _get_bundled_templates_dir()
    user_dir = _get_user_templates_dir()

    if bundled_dir is None and user_dir is None:
        return None

    result: dict[str, ProgramTemplate] = {}

    stems: dict[str, Path] = {}  # stem -> bundled path
    if bundled_dir is not None:
        for p in sorted(bundled_dir.glob("*.yaml")):
            stems[p.stem] = p

    user_only: list[Path] = []
    if user_dir is not None:
        for p in sorted(user_dir.glob("*.yaml")):
            if p.stem not in stems:
                user_only.append(p)

    for stem, bundled_path in stems.items():
        raw = _load_yaml_file(bundled_path)
        if not raw:
            continue
        if user_dir is not None:
            user_path = user_dir / f"{stem}.yaml"
            if user_path.exists():
                user_raw = _load_yaml_file(user_path)
                if user_raw:
                    raw = _deep_merge(raw, user_raw)
        try:
            template = template_from_dict(raw)
            result[template.template_id] = template
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"lift-cycle: skipping template '{stem}': {exc}",
                stacklevel=2,
            )

    for p in user_only:
        raw = _load_yaml_file(p)
        if not raw:
            continue
        try:
            template = template_from_dict(raw)
            result[template.template_id] = template
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"lift-cycle: skipping user template '{p.stem}': {exc}",
                stacklevel=2,
            )

    return result if result else None
