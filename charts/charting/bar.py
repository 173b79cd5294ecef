"""Bar chart composer: grouped, stacked and stacked-percent, in either orientation."""

from __future__ import annotations

from dataclasses import replace

from .axes import cartesian_axes, grid_spec, plot_margin, reference_specs
from .colors import resolve_color
from .gradients import GradientTable
from .legend import legend_spec, series_legend_items
from .primitives import ChartPayload, Mark, base_payload
from .schema import AxisConfig, BarChartProps, ThemeContext
from .stacking import bar_radius, is_stacked, percent_normalize, stack_id_for
from .tooltip import tooltip_spec

PERCENT_DOMAIN = (0, 100)
BAR_CURSOR = {"fill": "rgba(0, 0, 0, 0.04)"}


def _percent_tick(value: object) -> str:
    return f"{value}%"


def compose_bar_chart(
    props: BarChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a bar chart into a renderer payload.

    Stacked variants share a stack id per series (defaulting to one common
    stack) and only the outermost series is rounded. `stacked-percent` plots
    each value as its share of the category's stack; the untouched rows are
    kept under `options.rawData` so hover content can show source values.

    Args:
        props: Bar chart props.
        gradients: Unused; bars are filled with flat colors.
        theme: Active theme.

    Returns:
        ChartPayload for the renderer.
    """

    # The renderer calls a left-to-right bar chart "vertical" (its category axis is y).
    renderer_layout = "vertical" if props.layout == "horizontal" else "horizontal"
    payload = base_payload(
        family="bar",
        props=props,
        default_label="Bar chart",
        layout=renderer_layout,
        margin=plot_margin(props.margin),
    )

    x_axis, y_axis = props.x_axis, props.y_axis
    value_domain = None
    if props.variant == "stacked-percent":
        payload["data"] = percent_normalize(props.data, props.series)
        payload["options"]["rawData"] = [dict(row) for row in props.data]
        if props.layout == "horizontal":
            value_domain = x_axis.domain or PERCENT_DOMAIN
            x_axis = _with_percent_ticks(x_axis)
        else:
            value_domain = y_axis.domain or PERCENT_DOMAIN
            y_axis = _with_percent_ticks(y_axis)
    else:
        payload["data"] = [dict(row) for row in props.data]

    series_colors = [resolve_color(item, idx, props.colors) for idx, item in enumerate(props.series)]
    count = len(props.series)
    clickable = props.on_data_point_click is not None
    marks: list[Mark] = []
    for idx, (item, color) in enumerate(zip(props.series, series_colors)):
        marks.append(
            {
                "kind": "bar",
                "key": item.data_key,
                "dataKey": item.data_key,
                "name": item.display_name,
                "fill": color,
                "stackId": stack_id_for(item, props.variant),
                "radius": bar_radius(idx, count, variant=props.variant, layout=props.layout, radius=props.bar_radius),
                "maxBarSize": props.max_bar_width,
                "clickable": clickable,
            }
        )
    payload["marks"] = marks
    payload["options"].update(
        {"variant": props.variant, "barGap": props.bar_gap, "barCategoryGap": props.bar_category_gap}
    )

    payload["axes"] = cartesian_axes(
        x_axis=x_axis,
        y_axis=y_axis,
        data=props.data,
        theme=theme,
        layout=props.layout,
        value_domain=value_domain,
    )
    payload["grid"] = grid_spec(
        show=props.show_grid,
        direction=props.grid_direction,
        theme=theme,
        layout=props.layout,
    )
    payload["references"] = reference_specs(props.reference_lines, props.reference_areas, layout=props.layout)
    payload["tooltip"] = tooltip_spec(props.tooltip, show_total=is_stacked(props.variant), cursor=dict(BAR_CURSOR))
    payload["legend"] = legend_spec(props.legend, series_legend_items(props.series, series_colors))
    return payload


def _with_percent_ticks(axis: AxisConfig) -> AxisConfig:
    if axis.tick_formatter is not None:
        return axis
    return replace(axis, tick_formatter=_percent_tick)
