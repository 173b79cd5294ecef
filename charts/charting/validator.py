"""Validation for ChartDefinition objects.

Composers never reject data: empty or ragged datasets fall through to the
empty state and missing keys render as gaps. Stored definitions (the gallery,
YAML files) are different: they are authored by hand, so validation is strict
and fails fast before anything is rendered.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, get_args

from .instance import FAMILIES
from .schema import (
    AxisConfig,
    BarChartProps,
    BarVariant,
    CartesianChartProps,
    ChartDefinition,
    ComposedChartProps,
    ContainerVariant,
    CurveType,
    GaugeChartProps,
    GridDirection,
    LegendAlign,
    LegendPosition,
    PieChartProps,
    PieLabelType,
    ReferenceStatistic,
    SeriesType,
    SparklineProps,
    SparklineType,
    YAxisId,
)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
COLOR_PATTERN = re.compile(r"^(#[0-9a-fA-F]{3,8}|rgba?\([^)]*\)|hsla?\([^)]*\)|[a-zA-Z]+)$")
MIN_HEIGHT = 16
MAX_HEIGHT = 2000


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart definition."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_definition(definition: ChartDefinition) -> ValidationResult:
    """Validate a single ChartDefinition.

    Args:
        definition: ChartDefinition to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []
    prefix = f"ChartDefinition[{definition.slug}]"

    if not SLUG_PATTERN.match(definition.slug):
        errors.append(f"{prefix}.slug must be lowercase words joined by hyphens.")

    family = FAMILIES.get(definition.family)
    if family is None:
        errors.append(f"{prefix}.family is not a supported value: {definition.family!r}.")
        return ValidationResult(is_valid=False, errors=tuple(errors), warnings=tuple(warnings))
    props = definition.props
    if not isinstance(props, family.props_type):
        errors.append(
            f"{prefix}.props must be {family.props_type.__name__} for family {definition.family!r}, "
            f"got {type(props).__name__}."
        )
        return ValidationResult(is_valid=False, errors=tuple(errors), warnings=tuple(warnings))

    if not MIN_HEIGHT <= props.height <= MAX_HEIGHT:
        warnings.append(f"{prefix}.props.height={props.height} is outside {MIN_HEIGHT}-{MAX_HEIGHT}px.")

    if isinstance(props, SparklineProps):
        _validate_sparkline(props, prefix=prefix, errors=errors)
    else:
        _check_choice(props.container_variant, ContainerVariant, f"{prefix}.props.container_variant", errors)
        _check_choice(props.legend.position, LegendPosition, f"{prefix}.props.legend.position", errors)
        _check_choice(props.legend.align, LegendAlign, f"{prefix}.props.legend.align", errors)
        for idx, color in enumerate(props.colors or ()):
            if not isinstance(color, str) or not COLOR_PATTERN.match(color):
                errors.append(f"{prefix}.props.colors[{idx}] is not a color: {color!r}.")

    if isinstance(props, CartesianChartProps):
        _validate_cartesian(props, prefix=prefix, errors=errors, warnings=warnings)
    elif isinstance(props, ComposedChartProps):
        _validate_composed(props, prefix=prefix, errors=errors, warnings=warnings)
    elif isinstance(props, PieChartProps):
        _validate_pie(props, prefix=prefix, errors=errors, warnings=warnings)
    elif isinstance(props, GaugeChartProps):
        if props.max <= props.min:
            errors.append(f"{prefix}.props.max must be greater than min ({props.min} >= {props.max}).")
        if props.thresholds and len({item.value for item in props.thresholds}) != len(props.thresholds):
            warnings.append(f"{prefix}.props.thresholds contains duplicate values.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_chart_definitions(definitions: Iterable[ChartDefinition]) -> ValidationResult:
    """Validate a collection of ChartDefinitions.

    Args:
        definitions: Definitions to validate.

    Returns:
        Combined ValidationResult, including duplicate slug errors.
    """

    errors: list[str] = []
    warnings: list[str] = []
    items = list(definitions)
    counts = Counter(definition.slug for definition in items)
    for slug, count in sorted(counts.items()):
        if count > 1:
            errors.append(f"Duplicate ChartDefinition.slug: {slug!r} appears {count} times.")

    for definition in items:
        result = validate_chart_definition(definition)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _check_choice(value: object, choices: Any, field: str, errors: list[str]) -> None:
    if value not in get_args(choices):
        errors.append(f"{field} is not a supported value: {value!r}.")


def _check_domain(axis: AxisConfig | None, field: str, errors: list[str]) -> None:
    if axis is None or axis.domain is None:
        return
    if len(axis.domain) != 2:
        errors.append(f"{field}.domain must be a (min, max) pair.")
        return
    for end in axis.domain:
        if isinstance(end, str) and end != "auto":
            errors.append(f"{field}.domain ends must be numbers or 'auto', got {end!r}.")


def _check_series_keys(
    series: Sequence[Any],
    data: Sequence[Any],
    prefix: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    if not series:
        errors.append(f"{prefix}.props.series must contain at least one entry.")
        return
    counts = Counter(item.data_key for item in series)
    duplicates = sorted(key for key, count in counts.items() if count > 1)
    if duplicates:
        errors.append(f"{prefix}.props.series has duplicate data_key values: {duplicates}.")
    present: set[str] = set()
    for row in data:
        present.update(row)
    for idx, item in enumerate(series):
        if not item.data_key:
            errors.append(f"{prefix}.props.series[{idx}].data_key must be a non-empty string.")
        elif data and item.data_key not in present:
            warnings.append(f"{prefix}.props.series[{idx}] data_key={item.data_key!r} is missing from every row.")


def _validate_cartesian(
    props: CartesianChartProps,
    *,
    prefix: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    _check_series_keys(props.series, props.data, prefix, errors, warnings)
    _check_choice(props.grid_direction, GridDirection, f"{prefix}.props.grid_direction", errors)
    _check_domain(props.x_axis, f"{prefix}.props.x_axis", errors)
    _check_domain(props.y_axis, f"{prefix}.props.y_axis", errors)
    curve = getattr(props, "curve_type", None)
    if curve is not None:
        _check_choice(curve, CurveType, f"{prefix}.props.curve_type", errors)
    for idx, line in enumerate(props.reference_lines):
        if line.axis not in ("x", "y"):
            errors.append(f"{prefix}.props.reference_lines[{idx}].axis must be 'x' or 'y'.")
    for idx, area in enumerate(props.reference_areas):
        if area.axis not in ("x", "y"):
            errors.append(f"{prefix}.props.reference_areas[{idx}].axis must be 'x' or 'y'.")

    if isinstance(props, BarChartProps):
        _check_choice(props.variant, BarVariant, f"{prefix}.props.variant", errors)
        if props.layout not in ("vertical", "horizontal"):
            errors.append(f"{prefix}.props.layout is not a supported value: {props.layout!r}.")
        if isinstance(props.bar_radius, tuple) and len(props.bar_radius) != 4:
            errors.append(f"{prefix}.props.bar_radius must be an int or four corner radii.")
        if props.variant == "grouped" and any(item.stack_id for item in props.series):
            warnings.append(f"{prefix} sets series stack_id but variant is 'grouped'; stack_id is ignored.")


def _validate_composed(
    props: ComposedChartProps,
    *,
    prefix: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    _check_series_keys(props.series, props.data, prefix, errors, warnings)
    _check_domain(props.y_axis, f"{prefix}.props.y_axis", errors)
    _check_domain(props.y_axis_right, f"{prefix}.props.y_axis_right", errors)
    for idx, item in enumerate(props.series):
        _check_choice(item.type, SeriesType, f"{prefix}.props.series[{idx}].type", errors)
        _check_choice(item.y_axis_id, YAxisId, f"{prefix}.props.series[{idx}].y_axis_id", errors)
    if props.y_axis_right is None and any(item.y_axis_id == "right" for item in props.series):
        warnings.append(f"{prefix} binds series to the right axis without y_axis_right; a default axis is used.")
    for idx, line in enumerate(props.reference_lines):
        if line.x is None and line.y is None:
            errors.append(f"{prefix}.props.reference_lines[{idx}] must set x or y.")


def _validate_pie(
    props: PieChartProps,
    *,
    prefix: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    _check_choice(props.label_type, PieLabelType, f"{prefix}.props.label_type", errors)
    if not 0 <= props.inner_radius < 1:
        errors.append(f"{prefix}.props.inner_radius must be a ratio in [0, 1).")
    for idx, point in enumerate(props.data):
        if point.value < 0:
            errors.append(f"{prefix}.props.data[{idx}].value must be non-negative, got {point.value}.")
    names = Counter(point.name for point in props.data)
    duplicates = sorted(name for name, count in names.items() if count > 1)
    if duplicates:
        warnings.append(f"{prefix}.props.data has duplicate segment names: {duplicates}.")


def _validate_sparkline(props: SparklineProps, *, prefix: str, errors: list[str]) -> None:
    _check_choice(props.type, SparklineType, f"{prefix}.props.type", errors)
    if isinstance(props.reference_line, str):
        _check_choice(props.reference_line, ReferenceStatistic, f"{prefix}.props.reference_line", errors)
