"""Area chart composer."""

from __future__ import annotations

from . import tokens
from .axes import cartesian_axes, grid_spec, plot_margin, reference_specs
from .colors import resolve_color
from .gradients import AREA_OPACITY, GradientTable, linear_gradient
from .legend import legend_spec, series_legend_items
from .line import point_dot
from .primitives import ChartPayload, Mark, base_payload
from .schema import AreaChartProps, ThemeContext
from .stacking import DEFAULT_STACK_ID
from .tooltip import tooltip_spec

FLAT_FILL_OPACITY = 0.3


def compose_area_chart(
    props: AreaChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve an area chart into a renderer payload.

    Args:
        props: Area chart props.
        gradients: Gradient table of the mounted instance; a fresh one is used when omitted.
        theme: Active theme.

    Returns:
        ChartPayload for the renderer.
    """

    payload = base_payload(family="area", props=props, default_label="Area chart", margin=plot_margin(props.margin))
    payload["data"] = [dict(row) for row in props.data]
    series_colors = [resolve_color(item, idx, props.colors) for idx, item in enumerate(props.series)]

    gradient_ids: list[str | None] = [None] * len(props.series)
    if props.gradient:
        table = gradients if gradients is not None else GradientTable("area-gradient")
        gradient_ids = list(table.ids_for(len(props.series)))
        near, far = AREA_OPACITY
        payload["defs"] = [
            linear_gradient(gradient_id, color, near, far) for gradient_id, color in zip(gradient_ids, series_colors)
        ]

    clickable = props.on_data_point_click is not None
    marks: list[Mark] = []
    for item, color, gradient_id in zip(props.series, series_colors, gradient_ids):
        if item.fill_opacity is not None:
            fill_opacity = item.fill_opacity
        else:
            fill_opacity = 1 if props.gradient else FLAT_FILL_OPACITY
        marks.append(
            {
                "kind": "area",
                "key": item.data_key,
                "dataKey": item.data_key,
                "name": item.display_name,
                "curve": props.curve_type,
                "stroke": color,
                "strokeWidth": tokens.STROKE_WIDTH["default"],
                "strokeDasharray": item.stroke_dasharray,
                "fill": f"url(#{gradient_id})" if gradient_id else color,
                "fillOpacity": fill_opacity,
                "gradientId": gradient_id,
                "stackId": (item.stack_id or DEFAULT_STACK_ID) if props.stacked else None,
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
        show_total=props.stacked,
        cursor={"stroke": tokens.resolve_style("grid.stroke", theme.mode)},
    )
    payload["legend"] = legend_spec(props.legend, series_legend_items(props.series, series_colors))
    return payload
