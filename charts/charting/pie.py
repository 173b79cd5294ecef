"""Pie and donut chart composers."""

from __future__ import annotations

from dataclasses import replace

from . import tokens
from .colors import resolve_color
from .gradients import GradientTable
from .legend import LegendItem, legend_placement, pie_legend_entries
from .primitives import ChartPayload, LegendSpec, Mark, base_payload
from .schema import PieChartProps, PieDataPoint, PieLabelType, ThemeContext
from .tooltip import pie_percentage, tooltip_spec
from .values import format_number

OUTER_RADIUS = "80%"
ACTIVE_SHADOW = "drop-shadow(0 4px 8px rgba(0, 0, 0, 0.15))"


def pie_label(point: PieDataPoint, total: float, label_type: PieLabelType) -> str:
    """Return the segment label for a label strategy.

    Percent labels are whole numbers (``"33%"``); tooltips keep one decimal.
    """

    if label_type == "value":
        return format_number(point.value)
    if label_type == "name":
        return point.name
    percent = point.value / total * 100 if total > 0 else 0
    return f"{percent:.0f}%"


def segment_angles(data: list[PieDataPoint], start_angle: float, end_angle: float) -> list[tuple[float, float]]:
    """Split the sweep between `start_angle` and `end_angle` proportionally to values."""

    total = sum(point.value for point in data)
    sweep = end_angle - start_angle
    angles: list[tuple[float, float]] = []
    current = start_angle
    for point in data:
        share = point.value / total if total > 0 else 0
        following = current + sweep * share
        angles.append((current, following))
        current = following
    return angles


def compose_pie_chart(
    props: PieChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a pie (or donut, when `inner_radius > 0`) chart.

    Args:
        props: Pie chart props.
        gradients: Unused; segments are filled with flat colors.
        theme: Active theme.

    Returns:
        ChartPayload with a single `pie` mark whose cells are the segments.
    """

    payload = base_payload(family="pie", props=props, default_label="Pie chart")
    data = list(props.data)
    payload["data"] = [{"name": point.name, "value": point.value} for point in data]
    total = sum(point.value for point in data)
    segment_colors = [resolve_color(point, idx, props.colors) for idx, point in enumerate(data)]
    is_donut = props.inner_radius > 0

    cells = []
    for idx, (point, color, (start, end)) in enumerate(
        zip(data, segment_colors, segment_angles(data, props.start_angle, props.end_angle))
    ):
        cells.append(
            {
                "name": point.name,
                "value": point.value,
                "fill": color,
                "percent": pie_percentage(point.value, total),
                "label": pie_label(point, total, props.label_type) if props.show_labels else None,
                "startAngle": start,
                "endAngle": end,
                "active": idx == props.active_index,
            }
        )

    mark: Mark = {
        "kind": "pie",
        "key": "pie",
        "dataKey": "value",
        "name": "name",
        "cells": cells,
        "cornerRadius": props.corner_radius,
        "label": bool(props.show_labels),
        "labelLine": {"stroke": tokens.GRAY[400]} if props.show_labels else False,
        "clickable": props.on_segment_click is not None,
    }
    payload["marks"] = [mark]
    payload["options"] = {
        "cx": "50%",
        "cy": "50%",
        "innerRadius": f"{props.inner_radius * 100:g}%" if is_donut else 0,
        "outerRadius": OUTER_RADIUS,
        "paddingAngle": props.padding_angle,
        "startAngle": props.start_angle,
        "endAngle": props.end_angle,
        "activeIndex": props.active_index,
        "activeShape": {"outerRadiusOffset": tokens.PIE_OUTER_PADDING, "filter": ACTIVE_SHADOW},
        "centerContent": props.center_content if is_donut else None,
        "total": total,
    }
    payload["tooltip"] = tooltip_spec(props.tooltip)
    payload["legend"] = _pie_legend(props, data, segment_colors)
    return payload


def compose_donut_chart(
    props: PieChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Pie chart with the token donut inner radius unless one is given."""

    if props.inner_radius <= 0:
        props = replace(props, inner_radius=tokens.DONUT_INNER_RATIO)
    return compose_pie_chart(props, gradients=gradients, theme=theme)


def _pie_legend(props: PieChartProps, data: list[PieDataPoint], colors: list[str]) -> LegendSpec | None:
    """Side legends list value and percentage; top/bottom legends only the percentage."""

    if not props.legend.show or not data:
        return None
    items: list[LegendItem] = [{"value": point.name, "color": color} for point, color in zip(data, colors)]
    on_side = props.legend.position in ("left", "right")
    spec: LegendSpec = {
        **legend_placement(props.legend),  # type: ignore[typeddict-item]
        "entries": pie_legend_entries(
            items,
            data,
            show_values=on_side,
            show_percent=True,
            value_formatter=props.tooltip.formatter,
        ),
        "formatter": props.legend.formatter,
    }
    return spec
