"""Tooltip content aggregation.

The renderer reports hover events as a payload: one entry per visible series
at the hovered category. These helpers turn that payload into display rows,
optionally appending a synthesized total row for stacked charts. Pie
percentages are recomputed from the current data on every call so they never
go stale when the dataset changes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypedDict

from .primitives import TooltipSpec
from .schema import LabelFormatter, PieDataPoint, ScatterDataPoint, TooltipConfig, ValueFormatter
from .values import format_number, format_with, to_number

__all__ = [
    "TooltipEntry",
    "TooltipRow",
    "TooltipContent",
    "format_number",
    "build_tooltip",
    "build_simple_tooltip",
    "pie_percentage",
    "build_pie_tooltip",
    "build_scatter_tooltip",
    "tooltip_spec",
]

TOTAL_LABEL = "Total"


class TooltipEntry(TypedDict, total=False):
    """One hover payload entry as reported by the renderer."""

    name: str
    value: Any
    color: str
    dataKey: str


class TooltipRow(TypedDict):
    """One formatted tooltip line."""

    name: str
    value: str
    color: str | None


class TooltipContent(TypedDict):
    """Formatted tooltip content ready for display."""

    label: str | None
    rows: list[TooltipRow]
    total: TooltipRow | None


def build_tooltip(
    payload: Sequence[TooltipEntry] | None,
    *,
    label: object = None,
    value_formatter: ValueFormatter | None = None,
    label_formatter: LabelFormatter | None = None,
    show_total: bool = False,
    unit: str = "",
    series_formatters: Mapping[str, ValueFormatter] | None = None,
) -> TooltipContent | None:
    """Build tooltip content for a hovered category.

    Args:
        payload: Hover entries, one per visible series.
        label: Hovered category label.
        value_formatter: Formatter applied to every value (and the total).
        label_formatter: Formatter applied to the label.
        show_total: Append a `Total` row summing the numeric entry values.
        unit: Suffix appended to every formatted value.
        series_formatters: Per-data-key formatters that override `value_formatter`.

    Returns:
        TooltipContent, or None when there is nothing to show.
    """

    if not payload:
        return None

    formatted_label: str | None = None
    if label is not None and label != "":
        formatted_label = label_formatter(str(label)) if label_formatter else str(label)

    rows: list[TooltipRow] = []
    for entry in payload:
        formatter = value_formatter
        data_key = entry.get("dataKey")
        if series_formatters and data_key in series_formatters:
            formatter = series_formatters[data_key]
        rows.append(
            {
                "name": str(entry.get("name") or data_key or ""),
                "value": f"{format_with(formatter, entry.get('value'))}{unit}",
                "color": entry.get("color"),
            }
        )

    total_row: TooltipRow | None = None
    if show_total:
        total = sum((to_number(entry.get("value")) or 0.0) for entry in payload)
        total_row = {"name": TOTAL_LABEL, "value": f"{format_with(value_formatter, total)}{unit}", "color": None}

    return {"label": formatted_label, "rows": rows, "total": total_row}


def build_simple_tooltip(
    entry: TooltipEntry | None,
    *,
    value_formatter: ValueFormatter | None = None,
    unit: str = "",
) -> TooltipRow | None:
    """Build a single-value tooltip row (sparklines, gauges)."""

    if not entry:
        return None
    return {
        "name": str(entry.get("name") or ""),
        "value": f"{format_with(value_formatter, entry.get('value'))}{unit}",
        "color": entry.get("color"),
    }


def pie_percentage(value: float, total: float) -> float:
    """Return `value` as a percentage of `total`, rounded to one decimal.

    A non-positive total yields 0.0 instead of dividing by zero.
    """

    if total <= 0:
        return 0.0
    return round(value / total * 100, 1)


def build_pie_tooltip(
    entry: PieDataPoint | None,
    data: Sequence[PieDataPoint],
    *,
    value_formatter: ValueFormatter | None = None,
    color: str | None = None,
) -> dict[str, Any] | None:
    """Build the tooltip for a hovered pie segment.

    The total is summed from `data` on every call.

    Returns:
        Dict with `name`, `value`, `percent` (e.g. ``"33.3%"``) and `color`.
    """

    if entry is None:
        return None
    total = sum(point.value for point in data)
    percent = pie_percentage(entry.value, total)
    return {
        "name": entry.name,
        "value": format_with(value_formatter, entry.value),
        "percent": f"{percent:.1f}%",
        "color": color or entry.color,
    }


def build_scatter_tooltip(
    point: ScatterDataPoint | None,
    *,
    x_label: str | None = None,
    y_label: str | None = None,
    z_label: str | None = None,
    has_bubble: bool = False,
) -> dict[str, Any] | None:
    """Build the tooltip for a hovered scatter point.

    Returns:
        Dict with an optional `name` heading and `(label, value)` rows for x, y
        and, for bubble charts, z.
    """

    if point is None:
        return None
    rows = [
        {"name": x_label or "X", "value": format_number(point.x)},
        {"name": y_label or "Y", "value": format_number(point.y)},
    ]
    if has_bubble and point.z is not None:
        rows.append({"name": z_label or "Size", "value": format_number(point.z)})
    return {"name": point.name, "rows": rows}


def tooltip_spec(
    config: TooltipConfig,
    *,
    show_total: bool = False,
    cursor: dict[str, Any] | bool = True,
    series_formatters: Mapping[str, ValueFormatter] | None = None,
) -> TooltipSpec | None:
    """Resolve the tooltip block of a payload, or None when tooltips are off."""

    if not config.show:
        return None
    spec: TooltipSpec = {
        "show": True,
        "showTotal": show_total,
        "cursor": cursor,
        "valueFormatter": config.formatter,
        "labelFormatter": config.label_formatter,
    }
    if series_formatters:
        spec["seriesFormatters"] = dict(series_formatters)
    return spec
