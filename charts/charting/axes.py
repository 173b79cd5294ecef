"""Axis, grid and reference-overlay resolution shared by cartesian composers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from . import tokens
from .primitives import AxisSpec, GridSpec, ReferenceSpec
from .schema import (
    AxisConfig,
    AxisDomain,
    BarLayout,
    DataPoint,
    GridDirection,
    ReferenceAreaConfig,
    ReferenceLineConfig,
    ThemeContext,
)
from .values import to_number

DEFAULT_CATEGORY_KEY = "name"
REFERENCE_DASH = "5 5"
REFERENCE_AREA_OPACITY = 0.1
REFERENCE_LABEL_POSITION = "insideTopRight"
ROTATED_AXIS_HEIGHT = 60
AXIS_HEIGHT = 30
LABELLED_AXIS_WIDTH = 60
AXIS_WIDTH = 50
CATEGORY_AXIS_WIDTH = 80


def resolve_domain(domain: AxisDomain | None) -> list[float | str] | None:
    """Return a renderer domain, or None to let the renderer auto-scale.

    A degenerate numeric domain (``min == max``) would collapse the scale to a
    single pixel, so it also falls back to auto-scaling.
    """

    if domain is None:
        return None
    low, high = domain
    low_number, high_number = to_number(low), to_number(high)
    if low_number is not None and high_number is not None and low_number == high_number:
        return None
    return [low, high]


def tick_style(theme: ThemeContext) -> dict[str, Any]:
    style = dict(tokens.TYPOGRAPHY["axisTick"])
    style["fontFamily"] = tokens.FONT_FAMILY
    style["fill"] = tokens.resolve_style("axis.tickColor", theme.mode)
    return style


def axis_line_style(theme: ThemeContext) -> dict[str, Any]:
    return {
        "stroke": tokens.resolve_style("axis.lineColor", theme.mode),
        "strokeOpacity": tokens.resolve_style("axis.lineOpacity", theme.mode),
    }


def _axis_label(text: str | None, *, vertical: bool) -> dict[str, Any] | None:
    if not text:
        return None
    style = dict(tokens.TYPOGRAPHY["axisLabel"])
    style["fontFamily"] = tokens.FONT_FAMILY
    if vertical:
        return {"value": text, "angle": -90, "position": "insideLeft", "style": style}
    return {"value": text, "position": "insideBottom", "offset": -10, "style": style}


def category_axis(
    config: AxisConfig,
    *,
    side: str,
    data: Sequence[DataPoint],
    theme: ThemeContext,
    data_key: str | None = None,
) -> AxisSpec:
    """Resolve a category axis.

    Tick labels are pre-formatted from the data so the payload carries them
    even after the Python tick formatter is stripped for JSON.
    """

    key = data_key or config.data_key or DEFAULT_CATEGORY_KEY
    formatter = config.tick_formatter
    labels = []
    for row in data:
        raw = row.get(key)
        labels.append(formatter(raw) if formatter else ("" if raw is None else str(raw)))

    spec: AxisSpec = {
        "id": side,
        "side": side,
        "type": "category",
        "dataKey": key,
        "hide": config.hide,
        "tickFormatter": formatter,
        "tickLabels": labels,
        "tick": tick_style(theme),
        "axisLine": axis_line_style(theme),
        "tickLine": axis_line_style(theme),
        "label": _axis_label(config.label, vertical=side == "y"),
    }
    if side == "x":
        spec["angle"] = config.angle
        spec["textAnchor"] = "end" if config.angle else "middle"
        spec["height"] = ROTATED_AXIS_HEIGHT if config.angle else AXIS_HEIGHT
    else:
        spec["width"] = CATEGORY_AXIS_WIDTH
    return spec


def value_axis(
    config: AxisConfig,
    *,
    side: str,
    theme: ThemeContext,
    axis_id: str | None = None,
    orientation: str | None = None,
    domain: AxisDomain | None = None,
) -> AxisSpec:
    """Resolve a numeric value axis. An explicit `domain` overrides the config's."""

    spec: AxisSpec = {
        "id": axis_id or side,
        "side": side,
        "type": "number",
        "dataKey": config.data_key,
        "hide": config.hide,
        "domain": resolve_domain(domain if domain is not None else config.domain),
        "tickFormatter": config.tick_formatter,
        "tickCount": config.tick_count,
        "unit": config.unit,
        "tick": tick_style(theme),
        "axisLine": axis_line_style(theme),
        "tickLine": axis_line_style(theme),
        "label": _axis_label(config.label, vertical=side == "y"),
    }
    if orientation:
        spec["orientation"] = orientation
    if side == "y":
        spec["width"] = LABELLED_AXIS_WIDTH if config.label else AXIS_WIDTH
    return spec


def cartesian_axes(
    *,
    x_axis: AxisConfig,
    y_axis: AxisConfig,
    data: Sequence[DataPoint],
    theme: ThemeContext,
    layout: BarLayout = "vertical",
    value_domain: AxisDomain | None = None,
) -> list[AxisSpec]:
    """Resolve the x/y axis pair for line, bar and area charts.

    A horizontal layout swaps roles: x becomes the value axis and y the
    category axis (keyed by the y config's data key, then the x config's).
    """

    if layout == "horizontal":
        category_key = y_axis.data_key or x_axis.data_key or DEFAULT_CATEGORY_KEY
        return [
            value_axis(x_axis, side="x", theme=theme, domain=value_domain),
            category_axis(y_axis, side="y", data=data, theme=theme, data_key=category_key),
        ]
    return [
        category_axis(x_axis, side="x", data=data, theme=theme),
        value_axis(y_axis, side="y", theme=theme, domain=value_domain),
    ]


def grid_spec(
    *,
    show: bool,
    direction: GridDirection,
    theme: ThemeContext,
    layout: BarLayout = "vertical",
) -> GridSpec | None:
    """Resolve grid lines. Horizontal layouts swap the line orientation."""

    if not show:
        return None
    horizontal = direction in ("horizontal", "both")
    vertical = direction in ("vertical", "both")
    if layout == "horizontal":
        horizontal, vertical = vertical, horizontal
    return {
        "stroke": tokens.resolve_style("grid.stroke", theme.mode),
        "strokeOpacity": tokens.resolve_style("grid.strokeOpacity", theme.mode),
        "strokeDasharray": tokens.GRID_STYLES["strokeDasharray"],
        "horizontal": horizontal,
        "vertical": vertical,
    }


def _reference_label(text: str | None, position: str = REFERENCE_LABEL_POSITION) -> dict[str, Any] | None:
    if not text:
        return None
    style = dict(tokens.TYPOGRAPHY["dataLabel"])
    style["fontFamily"] = tokens.FONT_FAMILY
    return {"value": text, "position": position, "style": style}


def reference_specs(
    lines: Sequence[ReferenceLineConfig],
    areas: Sequence[ReferenceAreaConfig] = (),
    *,
    layout: BarLayout = "vertical",
    default_color: str | None = None,
) -> list[ReferenceSpec]:
    """Resolve reference lines and areas.

    In a horizontal layout the value axis is x, so y-bound overlays move to x.
    Areas are drawn behind the data layer and lines in front of it.
    """

    color = default_color or tokens.PRIMARY[0]
    specs: list[ReferenceSpec] = []
    for area in areas:
        axis = _effective_axis(area.axis, layout)
        spec: ReferenceSpec = {
            "kind": "area",
            "fill": area.color or color,
            "fillOpacity": area.opacity if area.opacity is not None else REFERENCE_AREA_OPACITY,
            "label": _reference_label(area.label, "insideTop"),
            "layer": "back",
        }
        if axis == "x":
            spec["x1"], spec["x2"] = area.start, area.end
        else:
            spec["y1"], spec["y2"] = area.start, area.end
        specs.append(spec)

    for line in lines:
        axis = _effective_axis(line.axis, layout)
        spec = {
            "kind": "line",
            "stroke": line.color or color,
            "strokeDasharray": line.stroke_dasharray or REFERENCE_DASH,
            "label": _reference_label(line.label),
            "layer": "front",
        }
        spec[axis] = line.value
        specs.append(spec)
    return specs


def _effective_axis(axis: str, layout: BarLayout) -> str:
    if layout == "horizontal" and axis == "y":
        return "x"
    return axis


def plot_margin(margin: Mapping[str, int] | None) -> dict[str, int]:
    """Return the plot margin, defaulting to the token margin."""

    return dict(margin) if margin is not None else dict(tokens.DEFAULT_MARGIN)
