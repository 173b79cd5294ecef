"""Scatter and bubble chart composers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import replace

from . import tokens
from .axes import grid_spec, value_axis
from .colors import resolve_color
from .gradients import GradientTable
from .legend import LegendItem, legend_spec
from .primitives import ChartPayload, Mark, base_payload
from .schema import (
    AxisDomain,
    ScatterChartProps,
    ScatterDataPoint,
    ScatterSeries,
    ThemeContext,
    ZAxisConfig,
)
from .tooltip import tooltip_spec
from .values import to_number

DEFAULT_SERIES_NAME = "Data"
DEFAULT_Z_DOMAIN: AxisDomain = (0, "auto")
DEFAULT_Z_RANGE = (50.0, 400.0)
POINT_OPACITY = 0.8
SCATTER_MARGIN = {"top": 20, "right": 30, "bottom": 20, "left": 20}


def normalize_scatter_data(
    data: Sequence[ScatterDataPoint] | Sequence[ScatterSeries],
    palette: Sequence[str] | None = None,
) -> list[ScatterSeries]:
    """Return scatter input as a list of series.

    Grouped input (elements carrying `data`) is returned as-is. A flat point
    list becomes one series named "Data" colored with the first palette color.
    Normalizing an already-normalized list returns an equal list.
    """

    if not data:
        return []
    if isinstance(data[0], ScatterSeries):
        return list(data)  # type: ignore[arg-type]
    color = (palette or tokens.PRIMARY)[0]
    return [ScatterSeries(name=DEFAULT_SERIES_NAME, data=tuple(data), color=color)]  # type: ignore[arg-type]


def has_bubble(series: Sequence[ScatterSeries]) -> bool:
    """Return True when any point carries a size value."""

    return any(point.z is not None for item in series for point in item.data)


def bubble_radius(
    z: float,
    domain: tuple[float, float],
    size_range: tuple[float, float] = DEFAULT_Z_RANGE,
) -> float:
    """Return the radius for a bubble of size `z`.

    `size_range` is an area range: `z` is mapped linearly from `domain` onto
    it (clamped), and the radius is the square root of that area over pi.
    Larger `z` never yields a smaller radius.
    """

    low, high = domain
    area_low, area_high = size_range
    if high <= low:
        area = (area_low + area_high) / 2
    else:
        share = min(max((z - low) / (high - low), 0.0), 1.0)
        area = area_low + share * (area_high - area_low)
    return math.sqrt(max(area, 0.0) / math.pi)


def resolve_z_domain(series: Sequence[ScatterSeries], config: ZAxisConfig) -> tuple[float, float]:
    """Resolve the z domain, replacing "auto" ends with the data extremes."""

    low, high = config.domain or DEFAULT_Z_DOMAIN
    values = [point.z for item in series for point in item.data if point.z is not None]
    low_number = to_number(low)
    high_number = to_number(high)
    if low_number is None:
        low_number = min(values) if values else 0.0
    if high_number is None:
        high_number = max(values) if values else 0.0
    return low_number, high_number


def compose_scatter_chart(
    props: ScatterChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Resolve a scatter (or bubble, when any point has `z`) chart.

    Args:
        props: Scatter chart props.
        gradients: Unused; points are filled with flat colors.
        theme: Active theme.

    Returns:
        ChartPayload with one `scatter` mark per series.
    """

    payload = base_payload(family="scatter", props=props, default_label="Scatter chart", margin=SCATTER_MARGIN)
    series = normalize_scatter_data(props.data, props.colors)
    bubble = has_bubble(series)
    z_domain = resolve_z_domain(series, props.z_axis) if bubble else None
    z_range = tuple(props.z_axis.range or DEFAULT_Z_RANGE)

    clickable = props.on_point_click is not None
    marks: list[Mark] = []
    items: list[LegendItem] = []
    for idx, item in enumerate(series):
        color = resolve_color(item, idx, props.colors)
        points = []
        for point in item.data:
            row: dict[str, object] = {"x": point.x, "y": point.y}
            if point.z is not None:
                row["z"] = point.z
                if z_domain is not None:
                    row["r"] = bubble_radius(point.z, z_domain, z_range)  # type: ignore[arg-type]
            if point.name is not None:
                row["name"] = point.name
            if point.category is not None:
                row["category"] = point.category
            points.append(row)
        marks.append(
            {
                "kind": "scatter",
                "key": item.name,
                "name": item.name,
                "fill": color,
                "fillOpacity": POINT_OPACITY,
                "data": points,
                "clickable": clickable,
            }
        )
        items.append({"value": item.name, "color": color, "dataKey": item.name})
    payload["marks"] = marks

    axes = [
        value_axis(props.x_axis, side="x", theme=theme),
        value_axis(props.y_axis, side="y", theme=theme),
    ]
    axes[0]["dataKey"] = "x"
    axes[1]["dataKey"] = "y"
    if bubble:
        domain = props.z_axis.domain or DEFAULT_Z_DOMAIN
        axes.append(
            {"id": "z", "side": "z", "type": "number", "dataKey": "z", "domain": list(domain), "range": list(z_range)}
        )
    payload["axes"] = axes
    payload["grid"] = grid_spec(show=props.show_grid, direction="both", theme=theme)
    payload["tooltip"] = tooltip_spec(props.tooltip)
    if props.tooltip.show:
        payload["tooltip"]["labels"] = {  # type: ignore[index]
            "x": props.x_axis.label or "X",
            "y": props.y_axis.label or "Y",
            "z": "Size" if bubble else None,
        }
    # A single series needs no legend.
    payload["legend"] = legend_spec(props.legend, items) if len(series) > 1 else None
    payload["options"] = {"bubble": bubble}
    return payload


def compose_bubble_chart(
    props: ScatterChartProps,
    *,
    gradients: GradientTable | None = None,
    theme: ThemeContext = ThemeContext(),
) -> ChartPayload:
    """Scatter chart with the default bubble size range unless one is given."""

    if props.z_axis.range is None:
        props = replace(props, z_axis=replace(props.z_axis, range=DEFAULT_Z_RANGE))
    return compose_scatter_chart(props, gradients=gradients, theme=theme)
