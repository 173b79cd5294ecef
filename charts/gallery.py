"""Built-in chart gallery loaded from YAML.

The gallery file holds a top-level `charts:` list of stored chart definitions
(see `charts.charting.definition_codec`). Definitions are decoded and
validated when loaded; any error fails the whole load.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from django.conf import settings

from charts.charting.definition_codec import decode_chart_definition
from charts.charting.schema import ChartDefinition
from charts.charting.validator import validate_chart_definitions

logger = logging.getLogger(__name__)

DEFAULT_GALLERY_PATH = Path(__file__).resolve().parent / "gallery.yaml"


def load_gallery(path: Path | str) -> tuple[ChartDefinition, ...]:
    """Load and validate chart definitions from a YAML file.

    Args:
        path: YAML file with a top-level `charts` list.

    Returns:
        Definitions in file order.

    Raises:
        ValueError: When the file is malformed or any definition is invalid.
    """

    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict) or not isinstance(raw.get("charts", []), list):
        raise ValueError(f"Invalid chart gallery {path}: expected a mapping with a `charts` list.")

    errors: list[str] = []
    definitions: list[ChartDefinition] = []
    for idx, entry in enumerate(raw.get("charts", [])):
        try:
            definitions.append(decode_chart_definition(entry))
        except ValueError as exc:
            errors.append(f"charts[{idx}]: {exc}")

    result = validate_chart_definitions(definitions)
    errors.extend(result.errors)
    if errors:
        joined = "\n".join(f"- {error}" for error in errors)
        raise ValueError(f"Invalid chart gallery {path}:\n{joined}")
    for warning in result.warnings:
        logger.warning("Chart gallery %s: %s", path, warning)

    logger.debug("Loaded %d chart definitions from %s", len(definitions), path)
    return tuple(definitions)


@lru_cache(maxsize=4)
def _cached_gallery(path: str) -> tuple[ChartDefinition, ...]:
    return load_gallery(path)


def gallery_path() -> Path:
    """Return the configured gallery path (`CHARTDECK_GALLERY_PATH`)."""

    return Path(getattr(settings, "CHARTDECK_GALLERY_PATH", None) or DEFAULT_GALLERY_PATH)


def get_gallery() -> tuple[ChartDefinition, ...]:
    """Return the configured gallery, loading it once per path."""

    return _cached_gallery(str(gallery_path()))


def get_definition(slug: str) -> ChartDefinition | None:
    """Return the gallery definition for `slug`, or None when unknown."""

    for definition in get_gallery():
        if definition.slug == slug:
            return definition
    return None
