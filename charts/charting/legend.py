"""Legend resolution: entries, visibility toggling and placement."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypedDict

from . import tokens
from .primitives import LegendSpec
from .schema import LabelFormatter, LegendConfig, PieDataPoint, SeriesConfig, ValueFormatter
from .tooltip import pie_percentage
from .values import format_with

DISABLED_OPACITY = 0.4
HIDDEN_SWATCH = tokens.GRAY[300]
HIDDEN_TEXT = tokens.GRAY[400]


class LegendItem(TypedDict, total=False):
    """One legend payload entry as produced by a composer."""

    value: str
    color: str
    dataKey: str


def _key_of(item: LegendItem) -> str:
    return item.get("dataKey") or item.get("value") or ""


def legend_entries(
    payload: Sequence[LegendItem] | None,
    *,
    formatter: LabelFormatter | None = None,
    disabled_keys: Iterable[str] = (),
) -> list[dict[str, Any]]:
    """Resolve legend entries, dimming disabled ones.

    Args:
        payload: Legend items in series order.
        formatter: Optional label formatter.
        disabled_keys: Data keys rendered dimmed and struck through.

    Returns:
        One entry per item with `key`, `label`, `color`, `opacity` and `strikethrough`.
    """

    if not payload:
        return []
    disabled = set(disabled_keys)
    entries: list[dict[str, Any]] = []
    for item in payload:
        key = _key_of(item)
        is_disabled = key in disabled
        value = item.get("value") or key
        entries.append(
            {
                "key": key,
                "label": formatter(value) if formatter else value,
                "color": item.get("color"),
                "opacity": DISABLED_OPACITY if is_disabled else 1,
                "strikethrough": is_disabled,
            }
        )
    return entries


def interactive_legend_entries(
    payload: Sequence[LegendItem] | None,
    *,
    hidden_keys: Iterable[str] = (),
    formatter: LabelFormatter | None = None,
) -> list[dict[str, Any]]:
    """Resolve toggle-legend entries from a caller-owned hidden-key set.

    Visual state depends only on membership in `hidden_keys`; this function
    keeps no state of its own.
    """

    if not payload:
        return []
    hidden = set(hidden_keys)
    entries: list[dict[str, Any]] = []
    for item in payload:
        key = _key_of(item)
        is_hidden = key in hidden
        value = item.get("value") or key
        entries.append(
            {
                "key": key,
                "label": formatter(value) if formatter else value,
                "color": HIDDEN_SWATCH if is_hidden else item.get("color"),
                "textColor": HIDDEN_TEXT if is_hidden else tokens.TYPOGRAPHY["legend"]["fill"],
                "opacity": DISABLED_OPACITY if is_hidden else 1,
                "strikethrough": is_hidden,
                "hidden": is_hidden,
            }
        )
    return entries


def toggle_hidden(hidden_keys: Iterable[str], key: str) -> frozenset[str]:
    """Return a new hidden-key set with `key` toggled."""

    current = frozenset(hidden_keys)
    if key in current:
        return current - {key}
    return current | {key}


def pie_legend_entries(
    payload: Sequence[LegendItem] | None,
    data: Sequence[PieDataPoint],
    *,
    show_values: bool = True,
    show_percent: bool = True,
    value_formatter: ValueFormatter | None = None,
) -> list[dict[str, Any]]:
    """Resolve pie legend entries with per-segment value and percentage.

    Items are matched to `data` by name; unmatched items count as 0.
    """

    if not payload:
        return []
    total = sum(point.value for point in data)
    by_name = {}
    for point in data:
        by_name.setdefault(point.name, point.value)

    entries: list[dict[str, Any]] = []
    for item in payload:
        name = item.get("value") or ""
        value = by_name.get(name, 0)
        parts = []
        if show_values:
            parts.append(format_with(value_formatter, value))
        if show_percent:
            parts.append(f"{pie_percentage(value, total):.1f}%")
        entries.append(
            {
                "key": name,
                "label": name,
                "color": item.get("color"),
                "value": value,
                "percent": pie_percentage(value, total),
                "detail": " • ".join(parts) if parts else None,
            }
        )
    return entries


def legend_placement(config: LegendConfig) -> dict[str, str]:
    """Map a legend position/align to renderer placement parameters.

    Top and bottom legends lay out horizontally; left and right legends lay
    out vertically, centered on the chart's middle.
    """

    if config.position in ("left", "right"):
        return {"layout": "vertical", "verticalAlign": "middle", "align": config.position}
    return {"layout": "horizontal", "verticalAlign": config.position, "align": config.align}


def legend_spec(
    config: LegendConfig,
    items: Sequence[LegendItem],
    *,
    hidden_keys: Iterable[str] = (),
) -> LegendSpec | None:
    """Resolve the legend block of a payload, or None when hidden or empty."""

    if not config.show or not items:
        return None
    spec: LegendSpec = {
        **legend_placement(config),  # type: ignore[typeddict-item]
        "entries": legend_entries(items, formatter=config.formatter, disabled_keys=hidden_keys),
        "formatter": config.formatter,
    }
    return spec


def series_legend_items(series: Sequence[SeriesConfig], colors: Sequence[str]) -> list[LegendItem]:
    """Return legend items for a series list and its resolved colors."""

    return [
        {"value": item.display_name, "color": color, "dataKey": item.data_key} for item, color in zip(series, colors)
    ]
