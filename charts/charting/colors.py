"""Deterministic color assignment for chart series."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from . import tokens


class _HasColor(Protocol):
    @property
    def color(self) -> str | None: ...


def resolve_color(series: _HasColor | None, index: int, palette: Sequence[str] | None = None) -> str:
    """Return the effective color for the series at `index`.

    An explicit `series.color` wins. Otherwise the color is
    `palette[index % len(palette)]`, with the primary palette as default.
    This never raises for large (or negative) indices.

    Args:
        series: Any config object exposing an optional `color`.
        index: Position of the series within its chart.
        palette: Optional palette override. Empty overrides fall back to the default.

    Returns:
        A color string.
    """

    explicit = getattr(series, "color", None) if series is not None else None
    if explicit:
        return explicit
    active = palette if palette else tokens.PRIMARY
    return active[index % len(active)]


def resolve_colors(series: Iterable[_HasColor], palette: Sequence[str] | None = None) -> list[str]:
    """Resolve colors for a whole series list, preserving order."""

    return [resolve_color(item, idx, palette) for idx, item in enumerate(series)]


def palette_for(name: str) -> tuple[str, ...]:
    """Return a built-in palette by name.

    Raises:
        KeyError: When `name` is not one of the built-in palettes.
    """

    try:
        return tokens.PALETTES[name]
    except KeyError:
        raise KeyError(f"Unknown palette {name!r}; expected one of {sorted(tokens.PALETTES)}.") from None
