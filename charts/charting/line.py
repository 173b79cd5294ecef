"""Line chart composer."""

from __future__ import annotations

from typing import Any

from . import tokens
from .axes import cartesian_axes, grid_spec, plot_margin, reference_specs
from .colors import resolve_color
from .gradients import LINE_FILL_OPACITY, GradientTable, linear_gradient
from .legend import legend_spec, series_legend_items
from .primitives import ChartPayload, Mark, base_payload
from .schema import LineChartProps, ThemeContext
from .tooltip import tooltip_spec

DOT_OUTLINE = "#FFFFFF"


def point_dot(color: str, radius: int) -> dict[str, Any]:
    """Return a dot style with a white outline."""

    return {"r": radius, "fill": color, "strokeWidth": 2, "stroke": DOT_OUTLINE}


def compose_line_chart(
    props: LineChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a line chart into a renderer payload.

    With `show_area`, every line also gets an unstroked area mark filled with
    a fading vertical gradient in the line's color.

    Args:
        props: Line chart props.
        gradients: Gradient table of the mounted instance; a fresh one is used when omitted.
        theme: Active theme.

    Returns:
        ChartPayload for the renderer.
    """

    payload = base_payload(family="line", props=props, default_label="Line chart", margin=plot_margin(props.margin))
    payload["data"] = [dict(row) for row in props.data]
    series_colors = [resolve_color(item, idx, props.colors) for idx, item in enumerate(props.series)]

    marks: list[Mark] = []
    if props.show_area:
        table = gradients if gradients is not None else GradientTable("line-gradient")
        gradient_ids = table.ids_for(len(props.series))
        near, far = LINE_FILL_OPACITY
        payload["defs"] = [
            linear_gradient(gradient_id, color, near, far) for gradient_id, color in zip(gradient_ids, series_colors)
        ]
        for item, gradient_id in zip(props.series, gradient_ids):
            marks.append(
                {
                    "kind": "area",
                    "key": f"area-{item.data_key}",
                    "dataKey": item.data_key,
                    "curve": props.curve_type,
                    "stroke": "none",
                    "fill": f"url(#{gradient_id})",
                    "fillOpacity": 1,
                    "gradientId": gradient_id,
                    "connectNulls": props.connect_nulls,
                }
            )

    clickable = props.on_data_point_click is not None
    for item, color in zip(props.series, series_colors):
        marks.append(
            {
                "kind": "line",
                "key": item.data_key,
                "dataKey": item.data_key,
                "name": item.display_name,
                "curve": props.curve_type,
                "stroke": color,
                "strokeWidth": tokens.STROKE_WIDTH["default"],
                "strokeDasharray": item.stroke_dasharray,
                "dot": point_dot(color, tokens.DOT_SIZE["small"]) if item.show_dots else False,
                "activeDot": point_dot(color, tokens.DOT_SIZE["default"]),
                "connectNulls": props.connect_nulls,
                "clickable": clickable,
            }
        )
    payload["marks"] = marks

    payload["axes"] = cartesian_axes(x_axis=props.x_axis, y_axis=props.y_axis, data=props.data, theme=theme)
    payload["grid"] = grid_spec(show=props.show_grid, direction=props.grid_direction, theme=theme)
    payload["references"] = reference_specs(props.reference_lines, props.reference_areas)
    payload["tooltip"] = tooltip_spec(
        props.tooltip,
        cursor={"stroke": tokens.resolve_style("grid.stroke", theme.mode)},
    )
    payload["legend"] = legend_spec(props.legend, series_legend_items(props.series, series_colors))
    return payload
