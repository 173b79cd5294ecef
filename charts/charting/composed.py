"""Composed chart composer: line, bar and area series on shared or dual y axes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from . import tokens
from .axes import axis_line_style, category_axis, resolve_domain
from .colors import resolve_color
from .gradients import COMPOSED_DARK_OPACITY, COMPOSED_LIGHT_OPACITY, GradientTable, linear_gradient
from .legend import legend_spec, series_legend_items
from .primitives import AxisSpec, ChartPayload, Mark, ReferenceSpec, base_payload
from .schema import AxisConfig, ComposedChartProps, ComposedReferenceLineConfig, ComposedSeriesConfig, ThemeContext
from .tooltip import tooltip_spec

COMPOSED_BAR_RADIUS = [4, 4, 0, 0]
COMPOSED_MAX_BAR_SIZE = 40
COMPOSED_AREA_OPACITY = 0.6
COMPOSED_DOT_RADIUS = 4
COMPOSED_ACTIVE_DOT_RADIUS = 6
REFERENCE_DASH = "4 4"
REFERENCE_LABEL_POSITION = "right"


def composed_margin(props: ComposedChartProps) -> dict[str, int]:
    """Return the plot margin; room is made for a right axis and rotated ticks."""

    return {
        "top": 10,
        "right": 20 if props.y_axis_right is not None else 10,
        "left": 10,
        "bottom": 40 if props.x_axis.angle else 20,
    }


def _tick(theme: ThemeContext) -> dict[str, Any]:
    return {
        "fill": tokens.resolve_style("axis.tickColor", theme.mode),
        "fontSize": tokens.AXIS_STYLES["tickFontSize"],
        "fontFamily": tokens.FONT_FAMILY,
    }


def _y_axis(config: AxisConfig, *, axis_id: str, theme: ThemeContext) -> AxisSpec:
    label = None
    if config.label:
        label = {
            "value": config.label,
            "angle": -90 if axis_id == "left" else 90,
            "position": "insideLeft" if axis_id == "left" else "insideRight",
            "style": {
                "fill": tokens.resolve_style("axis.tickColor", theme.mode),
                "fontSize": tokens.AXIS_STYLES["labelFontSize"],
                "textAnchor": "middle",
            },
        }
    return {
        "id": axis_id,
        "side": "y",
        "type": "number",
        "orientation": axis_id,
        "hide": config.hide,
        "domain": resolve_domain(config.domain),
        "tickFormatter": config.tick_formatter,
        "tickCount": config.tick_count,
        "unit": config.unit,
        "tick": _tick(theme),
        "axisLine": axis_line_style(theme),
        "tickLine": False,
        "label": label,
    }


def _series_mark(
    config: ComposedSeriesConfig,
    *,
    color: str,
    gradient_id: str | None,
    theme: ThemeContext,
    clickable: bool,
) -> Mark:
    mark: Mark = {
        "kind": config.type,
        "key": config.data_key,
        "dataKey": config.data_key,
        "name": config.display_name,
        "yAxisId": config.y_axis_id,
        "clickable": clickable,
    }
    contrast = tokens.GRAY[800] if theme.is_dark else "#FFFFFF"
    if config.type == "bar":
        mark.update(
            {
                "fill": color,
                "radius": list(COMPOSED_BAR_RADIUS),
                "maxBarSize": config.max_bar_size or COMPOSED_MAX_BAR_SIZE,
            }
        )
    elif config.type == "area":
        mark.update(
            {
                "curve": config.curve or "monotone",
                "stroke": color,
                "strokeWidth": config.stroke_width or tokens.STROKE_WIDTH["default"],
                "fill": f"url(#{gradient_id})",
                "gradientId": gradient_id,
                "fillOpacity": COMPOSED_AREA_OPACITY if config.fill_opacity is None else config.fill_opacity,
            }
        )
    else:
        mark.update(
            {
                "curve": config.curve or "monotone",
                "stroke": color,
                "strokeWidth": config.stroke_width or tokens.STROKE_WIDTH["default"],
                "strokeDasharray": config.stroke_dasharray,
                "dot": (
                    {"fill": contrast, "stroke": color, "strokeWidth": 2, "r": COMPOSED_DOT_RADIUS}
                    if config.show_dots
                    else False
                ),
                "activeDot": {"r": COMPOSED_ACTIVE_DOT_RADIUS, "fill": color, "stroke": contrast, "strokeWidth": 2},
            }
        )
    return mark


def composed_references(lines: Sequence[ComposedReferenceLineConfig]) -> list[ReferenceSpec]:
    """Resolve reference lines bound to a specific y axis."""

    specs: list[ReferenceSpec] = []
    for line in lines:
        spec: ReferenceSpec = {
            "kind": "line",
            "stroke": line.color or tokens.GRAY[400],
            "strokeDasharray": line.stroke_dasharray or REFERENCE_DASH,
            "strokeWidth": line.stroke_width or 1,
            "yAxisId": line.y_axis_id,
            "label": (
                {
                    "value": line.label,
                    "position": line.label_position or REFERENCE_LABEL_POSITION,
                    "fill": line.color or tokens.GRAY[500],
                    "fontSize": 11,
                }
                if line.label
                else None
            ),
            "layer": "front",
        }
        if line.x is not None:
            spec["x"] = line.x
        if line.y is not None:
            spec["y"] = line.y
        specs.append(spec)
    return specs


def compose_composed_chart(
    props: ComposedChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a composed chart.

    Marks follow the series list order. Series bound to the right axis are
    scaled by it, and their tooltip values use its tick formatter. Gradient
    definitions are emitted for area series only; their opacity depends on
    the theme mode.

    Args:
        props: Composed chart props.
        gradients: Gradient table of the mounted instance; a fresh one is used when omitted.
        theme: Active theme.

    Returns:
        ChartPayload for the renderer.
    """

    payload = base_payload(
        family="composed",
        props=props,
        default_label="Composed chart",
        margin=composed_margin(props),
    )
    payload["data"] = [dict(row) for row in props.data]
    series = list(props.series)
    series_colors = [resolve_color(item, idx, props.colors) for idx, item in enumerate(series)]

    table = gradients if gradients is not None else GradientTable("composed-gradient")
    near, far = COMPOSED_DARK_OPACITY if theme.is_dark else COMPOSED_LIGHT_OPACITY
    clickable = props.on_data_point_click is not None
    marks: list[Mark] = []
    defs = []
    for idx, (item, color) in enumerate(zip(series, series_colors)):
        gradient_id = None
        if item.type == "area":
            gradient_id = table.id_for(idx)
            defs.append(linear_gradient(gradient_id, color, near, far))
        marks.append(_series_mark(item, color=color, gradient_id=gradient_id, theme=theme, clickable=clickable))
    payload["marks"] = marks
    payload["defs"] = defs

    x_spec = category_axis(props.x_axis, side="x", data=props.data, theme=theme, data_key=props.x_axis_key)
    x_spec["tick"] = _tick(theme)
    x_spec["tickLine"] = False
    axes = [x_spec, _y_axis(props.y_axis, axis_id="left", theme=theme)]
    right_axis = props.y_axis_right
    if right_axis is None and any(item.y_axis_id == "right" for item in series):
        right_axis = AxisConfig()
    if right_axis is not None:
        axes.append(_y_axis(right_axis, axis_id="right", theme=theme))
    payload["axes"] = axes

    if props.grid.show:
        payload["grid"] = {
            "stroke": tokens.resolve_style("grid.stroke", theme.mode),
            "strokeOpacity": tokens.resolve_style("grid.strokeOpacity", theme.mode),
            "strokeDasharray": tokens.GRID_STYLES["strokeDasharray"],
            "horizontal": props.grid.horizontal,
            "vertical": props.grid.vertical,
        }
    payload["references"] = composed_references(props.reference_lines)

    series_formatters = {}
    if right_axis is not None and right_axis.tick_formatter is not None:
        series_formatters = {item.data_key: right_axis.tick_formatter for item in series if item.y_axis_id == "right"}
    payload["tooltip"] = tooltip_spec(
        props.tooltip,
        cursor={"fill": "rgba(255, 255, 255, 0.05)" if theme.is_dark else "rgba(0, 0, 0, 0.05)"},
        series_formatters=series_formatters,
    )
    payload["legend"] = legend_spec(props.legend, series_legend_items(series, series_colors))
    payload["options"] = {"barGap": props.bar_gap, "barCategoryGap": props.bar_category_gap}
    return payload
