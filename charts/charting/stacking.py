"""Stacking and grouping resolution for bar and area charts.

Three bar variants are supported:

- ``grouped``: independent bars side by side, every bar fully rounded.
- ``stacked``: series sharing a stack id are summed per category.
- ``stacked-percent``: stacked, with each value expressed as its share of the
  category's stack total.

In stacked variants only the last series in render order (the outermost
segment) receives rounded corners; interior seams stay square.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .schema import BarLayout, BarRadius, BarVariant, DataPoint, SeriesConfig
from .values import to_number

DEFAULT_STACK_ID = "stack"


def is_stacked(variant: BarVariant) -> bool:
    """Return True for the stacked variants."""

    return variant in ("stacked", "stacked-percent")


def stack_id_for(series: SeriesConfig, variant: BarVariant) -> str | None:
    """Return the stack group a series renders into, or None when grouped."""

    if not is_stacked(variant):
        return None
    return series.stack_id or DEFAULT_STACK_ID


def bar_radius(
    index: int,
    count: int,
    *,
    variant: BarVariant,
    layout: BarLayout,
    radius: BarRadius,
) -> int | list[int]:
    """Return corner radii for the bar series at `index`.

    Args:
        index: Series position in render order.
        count: Number of bar series in the chart.
        variant: Grouping variant.
        layout: "vertical" rounds the top corners; "horizontal" the trailing ones.
        radius: Configured radius (uniform or explicit per-corner).

    Returns:
        Either a uniform radius or `[top_left, top_right, bottom_right, bottom_left]`.
    """

    if not is_stacked(variant) or count == 1:
        return list(radius) if isinstance(radius, tuple) else radius
    if index != count - 1:
        return 0
    if isinstance(radius, tuple):
        return list(radius)
    if layout == "horizontal":
        return [0, radius, radius, 0]
    return [radius, radius, 0, 0]


def stack_totals(data: Sequence[DataPoint], series: Sequence[SeriesConfig]) -> list[float]:
    """Return the per-category sum of the given series.

    Missing, None and non-numeric values are skipped, so a gap never turns a
    total into NaN.
    """

    totals: list[float] = []
    for row in data:
        total = 0.0
        for item in series:
            number = to_number(row.get(item.data_key))
            if number is not None:
                total += number
        totals.append(total)
    return totals


def stack_groups(series: Sequence[SeriesConfig], variant: BarVariant) -> dict[str, list[SeriesConfig]]:
    """Group series by their effective stack id, preserving series order."""

    groups: dict[str, list[SeriesConfig]] = {}
    for item in series:
        stack_id = stack_id_for(item, variant)
        if stack_id is None:
            continue
        groups.setdefault(stack_id, []).append(item)
    return groups


def stack_group_totals(
    data: Sequence[DataPoint],
    series: Sequence[SeriesConfig],
    variant: BarVariant,
) -> list[dict[str, float]]:
    """Return per-category totals keyed by stack id."""

    groups = stack_groups(series, variant)
    per_group = {stack_id: stack_totals(data, members) for stack_id, members in groups.items()}
    return [{stack_id: totals[idx] for stack_id, totals in per_group.items()} for idx in range(len(data))]


def percent_normalize(
    data: Sequence[DataPoint],
    series: Sequence[SeriesConfig],
    variant: BarVariant = "stacked-percent",
) -> list[dict[str, Any]]:
    """Return copies of `data` with stacked values as percentages of their stack.

    Each numeric value is replaced by ``value / stack_total * 100``.
    Categories whose stack total is zero get ``0.0``. Missing
    values stay missing and non-stacked fields are copied unchanged.
    """

    groups = stack_groups(series, variant)
    totals = stack_group_totals(data, series, variant)
    normalized: list[dict[str, Any]] = []
    for row, row_totals in zip(data, totals):
        out = dict(row)
        for stack_id, members in groups.items():
            total = row_totals[stack_id]
            for item in members:
                number = to_number(row.get(item.data_key))
                if number is None:
                    continue
                out[item.data_key] = number / total * 100 if total else 0.0
        normalized.append(out)
    return normalized
