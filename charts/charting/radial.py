"""Radial bar and gauge composers."""

from __future__ import annotations

from collections.abc import Sequence

from . import tokens
from .colors import resolve_color
from .gradients import GradientTable
from .legend import legend_placement
from .primitives import ChartPayload, Mark, base_payload
from .schema import GaugeChartProps, RadialBarChartProps, ThemeContext, Threshold
from .tooltip import tooltip_spec
from .values import format_number, format_with

RADIAL_BAR_SIZE = 20
RADIAL_CORNER_RADIUS = 10
GAUGE_BAR_SIZE = 16
GAUGE_CORNER_RADIUS = 8
GAUGE_START_ANGLE = 180
GAUGE_END_ANGLE = 0
GAUGE_INNER_RADIUS = "60%"
GAUGE_OUTER_RADIUS = "90%"
TRACK_FILL = tokens.GRAY[100]


def gauge_percentage(value: float, minimum: float, maximum: float) -> float:
    """Return `value` as a 0-100 position between `minimum` and `maximum`.

    The result is clamped. A range with `maximum <= minimum` yields 0.0.
    """

    if maximum <= minimum:
        return 0.0
    share = (value - minimum) / (maximum - minimum)
    return min(max(share, 0.0), 1.0) * 100


def threshold_color(value: float, thresholds: Sequence[Threshold], default: str) -> str:
    """Return the color of the first threshold (ascending) that `value` does not exceed.

    Values above every threshold take the last threshold's color. Without
    thresholds the `default` color is used.
    """

    if not thresholds:
        return default
    ordered = sorted(thresholds, key=lambda item: item.value)
    for threshold in ordered:
        if value <= threshold.value:
            return threshold.color
    return ordered[-1].color


def compose_radial_bar_chart(
    props: RadialBarChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a radial bar chart: one concentric arc per data row.

    Args:
        props: Radial bar props.
        gradients: Unused; arcs are filled with flat colors.
        theme: Active theme.

    Returns:
        ChartPayload with a single `radialBar` mark.
    """

    payload = base_payload(family="radial", props=props, default_label="Radial bar chart")
    rows = []
    for idx, point in enumerate(props.data):
        rows.append({"name": point.name, "value": point.value, "fill": resolve_color(None, idx, props.colors)})
    payload["data"] = rows

    mark: Mark = {
        "kind": "radialBar",
        "key": "radial",
        "dataKey": "value",
        "background": {"fill": TRACK_FILL},
        "cornerRadius": RADIAL_CORNER_RADIUS,
        "label": (
            {"position": "insideStart", "fill": "#FFFFFF", "fontSize": 11, "fontWeight": 600}
            if props.show_labels
            else False
        ),
    }
    payload["marks"] = [mark]
    payload["options"] = {
        "cx": "50%",
        "cy": "50%",
        "innerRadius": props.inner_radius,
        "outerRadius": props.outer_radius,
        "barSize": RADIAL_BAR_SIZE,
        "startAngle": props.start_angle,
        "endAngle": props.end_angle,
    }
    payload["tooltip"] = tooltip_spec(props.tooltip)
    if props.legend.show and rows:
        payload["legend"] = {
            **legend_placement(props.legend),  # type: ignore[typeddict-item]
            "entries": [
                {"key": row["name"], "label": row["name"], "color": row["fill"], "detail": format_number(row["value"])}
                for row in rows
            ],
            "formatter": props.legend.formatter,
        }
    return payload


def compose_gauge_chart(
    props: GaugeChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a single-value gauge drawn as a half-circle arc.

    Args:
        props: Gauge props.
        gradients: Unused; the arc is filled with a flat color.
        theme: Active theme.

    Returns:
        ChartPayload with one arc, plus center value and min/max labels under `options`.
    """

    payload = base_payload(family="gauge", props=props, default_label=f"Gauge showing {props.value}{props.unit}")
    color = threshold_color(props.value, props.thresholds, props.color)
    percentage = gauge_percentage(props.value, props.min, props.max)
    payload["data"] = [{"name": "Value", "value": percentage, "fill": color}]
    payload["marks"] = [
        {
            "kind": "radialBar",
            "key": "gauge",
            "dataKey": "value",
            "fill": color,
            "background": {"fill": TRACK_FILL},
            "cornerRadius": GAUGE_CORNER_RADIUS,
        }
    ]
    payload["axes"] = [{"id": "angle", "side": "angle", "type": "number", "domain": [0, 100], "hide": True}]
    payload["options"] = {
        "cx": "50%",
        "cy": "50%",
        "innerRadius": GAUGE_INNER_RADIUS,
        "outerRadius": GAUGE_OUTER_RADIUS,
        "barSize": GAUGE_BAR_SIZE,
        "startAngle": GAUGE_START_ANGLE,
        "endAngle": GAUGE_END_ANGLE,
        "percentage": percentage,
        "color": color,
        "center": (
            {
                "value": format_with(props.value_formatter, props.value),
                "unit": props.unit,
                "label": props.value_label,
                "fontSize": props.height / 6,
                "color": color,
            }
            if props.show_value
            else None
        ),
        "minLabel": format_number(props.min),
        "maxLabel": format_number(props.max),
    }
    return payload
