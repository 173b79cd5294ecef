"""Encoding/decoding helpers for stored chart definitions.

Definitions are stored as plain dicts (YAML or JSON). Nested config objects
are written as mappings, tuples as lists, and formatters by registered name;
formatters without a registered name cannot be stored and are dropped on
encode.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import fields, is_dataclass
from typing import Any, cast

from .instance import get_family
from .schema import (
    AxisConfig,
    ChartDefinition,
    ComposedReferenceLineConfig,
    ComposedSeriesConfig,
    GridConfig,
    LegendConfig,
    PieDataPoint,
    RadialDataPoint,
    ReferenceAreaConfig,
    ReferenceLineConfig,
    ScatterDataPoint,
    ScatterSeries,
    SeriesConfig,
    Threshold,
    TooltipConfig,
    ZAxisConfig,
)
from .values import format_number


def _percent(value: object) -> str:
    return f"{format_number(value)}%"


def _currency(value: object) -> str:
    return f"${format_number(value)}"


def _compact(value: object) -> str:
    number = float(value)  # type: ignore[arg-type]
    for divisor, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if abs(number) >= divisor:
            return f"{format_number(round(number / divisor, 1))}{suffix}"
    return format_number(number)


FORMATTERS: dict[str, Callable[[Any], str]] = {
    "number": format_number,
    "percent": _percent,
    "currency": _currency,
    "compact": _compact,
}
_FORMATTER_NAMES = {id(formatter): name for name, formatter in FORMATTERS.items()}

_FORMATTER_FIELDS = {"tick_formatter", "formatter", "label_formatter", "value_formatter"}
_CALLBACK_FIELDS = {"on_data_point_click", "on_segment_click", "on_point_click"}
_TUPLE_FIELDS = {"domain", "range", "colors", "bar_radius"}

_NESTED: dict[str, type] = {
    "legend": LegendConfig,
    "tooltip": TooltipConfig,
    "x_axis": AxisConfig,
    "y_axis": AxisConfig,
    "y_axis_right": AxisConfig,
    "z_axis": ZAxisConfig,
    "grid": GridConfig,
}
_NULLABLE_NESTED = frozenset({"y_axis_right"})

_DATA_POINTS: dict[str, type] = {
    "pie": PieDataPoint,
    "donut": PieDataPoint,
    "radial": RadialDataPoint,
}


def encode_chart_definition(definition: ChartDefinition) -> dict[str, Any]:
    """Encode a ChartDefinition into a JSON/YAML-safe dictionary.

    Args:
        definition: ChartDefinition to encode.

    Returns:
        Dict payload. Fields equal to their defaults are omitted.
    """

    payload: dict[str, Any] = {"slug": definition.slug, "family": definition.family}
    if definition.description:
        payload["description"] = definition.description
    payload["props"] = _encode_dataclass(definition.props)
    return payload


def decode_chart_definition(payload: Mapping[str, Any]) -> ChartDefinition:
    """Decode a ChartDefinition from a stored payload.

    Args:
        payload: Dict previously produced by `encode_chart_definition` (or written by hand).

    Returns:
        ChartDefinition with a fully typed props object.

    Raises:
        ValueError: When the family is unknown or the payload is malformed.
    """

    if not isinstance(payload, Mapping):
        raise ValueError(f"Chart definition must be a mapping, got {type(payload).__name__}.")
    slug = str(payload.get("slug") or "").strip()
    if not slug:
        raise ValueError("Chart definition is missing a slug.")
    family_name = str(payload.get("family") or "")
    family = get_family(family_name)
    props_raw = payload.get("props")
    if props_raw is None:
        props_raw = {}
    if not isinstance(props_raw, Mapping):
        raise ValueError(f"Chart definition {slug!r}: props must be a mapping.")

    known = {field.name for field in fields(family.props_type)}
    unknown = sorted(set(props_raw) - known)
    if unknown:
        raise ValueError(f"Chart definition {slug!r}: unknown {family_name} props {unknown}.")
    kwargs: dict[str, Any] = {}
    for name, value in props_raw.items():
        if value is None and name in _NESTED and name not in _NULLABLE_NESTED:
            # null reads as the default config
            continue
        kwargs[name] = _decode_prop(family_name, name, value, slug=slug)
    return ChartDefinition(
        slug=slug,
        family=family_name,
        props=family.props_type(**kwargs),
        description=str(payload.get("description") or ""),
    )


def _encode_value(name: str, value: Any) -> Any:
    if name in _FORMATTER_FIELDS or callable(value):
        return _FORMATTER_NAMES.get(id(value)) if value is not None else None
    if is_dataclass(value) and not isinstance(value, type):
        return _encode_dataclass(value)
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(name, item) for item in value]
    return value


def _encode_dataclass(obj: Any) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    defaults = type(obj)() if _has_all_defaults(type(obj)) else None
    for field in fields(obj):
        if field.name in _CALLBACK_FIELDS:
            continue
        value = getattr(obj, field.name)
        if defaults is not None and getattr(defaults, field.name) == value:
            continue
        encoded_value = _encode_value(field.name, value)
        if encoded_value is None and value is not None:
            continue
        encoded[field.name] = encoded_value
    return encoded


def _has_all_defaults(cls: type) -> bool:
    try:
        cls()
    except TypeError:
        return False
    return True


def _decode_prop(family: str, name: str, value: Any, *, slug: str) -> Any:
    if name in _CALLBACK_FIELDS:
        raise ValueError(f"Chart definition {slug!r}: callbacks cannot be stored ({name}).")
    if name in _FORMATTER_FIELDS:
        return _parse_formatter(value, slug=slug)
    if name in _NESTED:
        return None if value is None else _build(_NESTED[name], value, slug=slug)
    if name == "series":
        item_type = ComposedSeriesConfig if family == "composed" else SeriesConfig
        return tuple(_build(item_type, item, slug=slug) for item in _parse_list(value, name, slug=slug))
    if name == "reference_lines":
        item_type = ComposedReferenceLineConfig if family == "composed" else ReferenceLineConfig
        return tuple(_build(item_type, item, slug=slug) for item in _parse_list(value, name, slug=slug))
    if name == "reference_areas":
        return tuple(_build(ReferenceAreaConfig, item, slug=slug) for item in _parse_list(value, name, slug=slug))
    if name == "thresholds":
        return tuple(_build(Threshold, item, slug=slug) for item in _parse_list(value, name, slug=slug))
    if name == "data":
        return _decode_data(family, value, slug=slug)
    if name in _TUPLE_FIELDS and isinstance(value, list):
        return tuple(value)
    return value


def _decode_data(family: str, value: Any, *, slug: str) -> tuple[Any, ...]:
    rows = _parse_list(value, "data", slug=slug)
    if family == "sparkline":
        return tuple(rows)
    if family in _DATA_POINTS:
        return tuple(_build(_DATA_POINTS[family], row, slug=slug) for row in rows)
    if family in ("scatter", "bubble"):
        if rows and isinstance(rows[0], Mapping) and "data" in rows[0]:
            return tuple(_build_scatter_series(row, slug=slug) for row in rows)
        return tuple(_build(ScatterDataPoint, row, slug=slug) for row in rows)
    for row in rows:
        if not isinstance(row, Mapping):
            raise ValueError(f"Chart definition {slug!r}: data rows must be mappings.")
    return tuple(dict(row) for row in rows)


def _build_scatter_series(raw: Mapping[str, Any], *, slug: str) -> ScatterSeries:
    points = tuple(_build(ScatterDataPoint, row, slug=slug) for row in _parse_list(raw.get("data"), "data", slug=slug))
    return ScatterSeries(name=str(raw.get("name") or ""), data=points, color=raw.get("color"))


def _build(cls: type, raw: Any, *, slug: str) -> Any:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Chart definition {slug!r}: expected a mapping for {cls.__name__}, got {raw!r}.")
    known = {field.name for field in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Chart definition {slug!r}: unknown {cls.__name__} fields {unknown}.")
    kwargs = {}
    for key, value in raw.items():
        if key in _FORMATTER_FIELDS:
            value = _parse_formatter(value, slug=slug)
        elif key in _TUPLE_FIELDS and isinstance(value, list):
            value = tuple(value)
        kwargs[key] = value
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ValueError(f"Chart definition {slug!r}: invalid {cls.__name__}: {exc}") from exc


def _parse_list(value: object, name: str, *, slug: str) -> list[Any]:
    """Lists are required where sequences are expected; None reads as empty."""

    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Chart definition {slug!r}: {name} must be a list.")
    return list(cast(list[Any], value))


def _parse_formatter(value: object, *, slug: str) -> Callable[[Any], str] | None:
    """Resolve a formatter by registered name."""

    if value is None or value == "":
        return None
    if callable(value):
        return cast(Callable[[Any], str], value)
    try:
        return FORMATTERS[str(value)]
    except KeyError:
        raise ValueError(
            f"Chart definition {slug!r}: unknown formatter {value!r}; expected one of {sorted(FORMATTERS)}."
        ) from None
