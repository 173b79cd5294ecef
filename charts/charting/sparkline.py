"""Sparkline composer: a compact, axis-less line, bar or area chart."""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from . import tokens
from .gradients import LINE_FILL_OPACITY, GradientTable, linear_gradient
from .primitives import ChartPayload, Mark, ReferenceSpec, animation_spec
from .schema import ReferenceStatistic, SparklineProps
from .values import to_number

SPARKLINE_MARGIN = {"top": 2, "right": 2, "bottom": 2, "left": 2}
SPARKLINE_STROKE_WIDTH = 1.5
HIGHLIGHT_RADIUS = 3


def reference_value(data: Sequence[float | None], reference: float | ReferenceStatistic | None) -> float | None:
    """Resolve a reference line position.

    Numbers are used as-is; "average" and "median" are computed over the
    non-missing values. Returns None when there is nothing to compute from.
    """

    if reference is None:
        return None
    if not isinstance(reference, str):
        return float(reference)
    values = [number for number in (to_number(value) for value in data) if number is not None]
    if not values:
        return None
    if reference == "average":
        return statistics.fmean(values)
    if reference == "median":
        return float(statistics.median(values))
    raise ValueError(f"Unknown reference statistic: {reference!r}")


def min_max_indices(data: Sequence[float | None]) -> tuple[int, int] | None:
    """Return the indices of the first minimum and first maximum value.

    Missing values are skipped; None when no value is present.
    """

    best: tuple[int, float, int, float] | None = None
    for idx, value in enumerate(data):
        number = to_number(value)
        if number is None:
            continue
        if best is None:
            best = (idx, number, idx, number)
            continue
        min_index, low, max_index, high = best
        if number < low:
            min_index, low = idx, number
        if number > high:
            max_index, high = idx, number
        best = (min_index, low, max_index, high)
    if best is None:
        return None
    return best[0], best[2]


def compose_sparkline(props: SparklineProps, *, gradients: GradientTable | None = None) -> ChartPayload:
    """Resolve a sparkline.

    Args:
        props: Sparkline props.
        gradients: Gradient table of the mounted instance, used by the area type.

    Returns:
        ChartPayload without axes, grid, legend or tooltip.
    """

    rows = [{"index": idx, "value": value} for idx, value in enumerate(props.data)]
    highlights = min_max_indices(props.data) if props.show_min_max else None
    point_colors: dict[int, str] = {}
    if highlights is not None:
        min_index, max_index = highlights
        point_colors[max_index] = props.max_color
        point_colors[min_index] = props.min_color

    mark: Mark = {"kind": props.type, "key": "value", "dataKey": "value"}
    defs = []
    if props.type == "bar":
        mark["radius"] = [1, 1, 0, 0]
        mark["cells"] = [{"fill": point_colors.get(idx, props.color)} for idx in range(len(rows))]
    else:
        mark.update({"curve": "monotone", "stroke": props.color, "strokeWidth": SPARKLINE_STROKE_WIDTH})
        mark["dot"] = (
            {
                "points": [
                    {"index": idx, "r": HIGHLIGHT_RADIUS, "fill": fill, "stroke": "#FFFFFF", "strokeWidth": 1}
                    for idx, fill in sorted(point_colors.items())
                ]
            }
            if point_colors
            else False
        )
        if props.type == "area":
            table = gradients if gradients is not None else GradientTable("sparkline-gradient")
            gradient_id = table.id_for(0)
            near, far = LINE_FILL_OPACITY
            defs.append(linear_gradient(gradient_id, props.color, near, far))
            mark["fill"] = f"url(#{gradient_id})"
            mark["gradientId"] = gradient_id

    references: list[ReferenceSpec] = []
    position = reference_value(props.data, props.reference_line)
    if position is not None:
        references.append(
            {
                "kind": "line",
                "y": position,
                "stroke": props.reference_line_color,
                "strokeDasharray": "2 2",
                "strokeWidth": 1,
                "layer": "front",
            }
        )

    return {
        "family": "sparkline",
        "layout": "horizontal",
        "data": rows,
        "margin": dict(SPARKLINE_MARGIN),
        "width": props.width,
        "height": props.height,
        "marks": [mark],
        "axes": [],
        "grid": None,
        "legend": None,
        "tooltip": None,
        "defs": defs,
        "references": references,
        "animation": animation_spec(props.animate, tokens.ANIMATION_DURATION),
        "ariaLabel": "Sparkline",
        "options": {"highlights": {"min": highlights[0], "max": highlights[1]} if highlights else None},
    }
