"""Tests for design tokens and deterministic color assignment."""

from __future__ import annotations

import pytest

from charts.charting import tokens
from charts.charting.colors import palette_for, resolve_color, resolve_colors
from charts.charting.schema import SeriesConfig

pytestmark = pytest.mark.unit


def test_color_wraps_for_any_index() -> None:
    """Palette lookup is total: large and negative indices wrap around."""

    size = len(tokens.PRIMARY)
    assert tokens.color(0) == tokens.PRIMARY[0]
    assert tokens.color(size) == tokens.PRIMARY[0]
    assert tokens.color(size * 7 + 3) == tokens.PRIMARY[3]
    assert tokens.color(-1) == tokens.PRIMARY[-1]


def test_colors_returns_consecutive_palette_entries() -> None:
    assert tokens.colors(3) == list(tokens.PRIMARY[:3])
    assert tokens.colors(0) == []
    assert tokens.colors(-2) == []


def test_resolve_style_reads_theme_and_mode_specific_tokens() -> None:
    """Dotted keys resolve against the grid/axis styles first, then the theme."""

    assert tokens.resolve_style("grid.stroke", "light") == tokens.GRAY[200]
    assert tokens.resolve_style("grid.stroke", "dark") == tokens.GRAY[700]
    assert tokens.resolve_style("axis.tickColor", "dark") == tokens.GRAY[400]
    assert tokens.resolve_style("tooltip.background", "dark") == tokens.DARK_PAPER
    assert tokens.resolve_style("text") == tokens.GRAY[900]


def test_resolve_style_rejects_unknown_keys_and_modes() -> None:
    with pytest.raises(KeyError):
        tokens.resolve_style("tooltip.missing")
    with pytest.raises(KeyError):
        tokens.resolve_style("text", "sepia")  # type: ignore[arg-type]


def test_explicit_series_color_wins_over_palette() -> None:
    series = SeriesConfig(data_key="a", color="#123456")
    assert resolve_color(series, 5) == "#123456"
    assert resolve_color(series, 5, ["#000000"]) == "#123456"


def test_resolve_color_is_deterministic_and_honors_palette_override() -> None:
    series = [SeriesConfig(data_key=key) for key in ("a", "b", "c")]
    palette = ["#111111", "#222222"]

    first = resolve_colors(series, palette)
    second = resolve_colors(series, palette)

    assert first == second == ["#111111", "#222222", "#111111"]
    assert resolve_color(None, 10_000) == tokens.PRIMARY[10_000 % len(tokens.PRIMARY)]


def test_empty_palette_override_falls_back_to_primary() -> None:
    assert resolve_color(SeriesConfig(data_key="a"), 1, []) == tokens.PRIMARY[1]


def test_palette_for_returns_named_palettes() -> None:
    assert palette_for("status") == tokens.STATUS
    with pytest.raises(KeyError, match="Unknown palette"):
        palette_for("neon")
