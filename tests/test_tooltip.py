"""Tests for tooltip content aggregation."""

from __future__ import annotations

import pytest

from charts.charting.schema import PieDataPoint, ScatterDataPoint, TooltipConfig
from charts.charting.tooltip import (
    build_pie_tooltip,
    build_scatter_tooltip,
    build_simple_tooltip,
    build_tooltip,
    pie_percentage,
    tooltip_spec,
)

pytestmark = pytest.mark.unit


def test_build_tooltip_formats_rows_and_total() -> None:
    content = build_tooltip(
        [
            {"name": "Organic", "value": 10, "color": "#111111", "dataKey": "organic"},
            {"name": "Paid", "value": 20, "color": "#222222", "dataKey": "paid"},
        ],
        label="Jan",
        show_total=True,
    )

    assert content is not None
    assert content["label"] == "Jan"
    assert [row["value"] for row in content["rows"]] == ["10", "20"]
    assert content["total"] == {"name": "Total", "value": "30", "color": None}


def test_total_skips_missing_values() -> None:
    content = build_tooltip(
        [{"name": "a", "value": 1234.5}, {"name": "b", "value": None}],
        show_total=True,
        unit=" pts",
    )

    assert content["rows"][0]["value"] == "1,234.5 pts"
    assert content["rows"][1]["value"] == " pts"
    assert content["total"]["value"] == "1,234.5 pts"


def test_series_formatters_override_the_shared_formatter() -> None:
    content = build_tooltip(
        [{"name": "Orders", "value": 5, "dataKey": "orders"}, {"name": "Rate", "value": 2.5, "dataKey": "rate"}],
        label="feb",
        value_formatter=lambda value: f"{value:.0f} units",
        label_formatter=str.upper,
        series_formatters={"rate": lambda value: f"{value}%"},
    )

    assert content["label"] == "FEB"
    assert [row["value"] for row in content["rows"]] == ["5 units", "2.5%"]
    assert content["total"] is None


def test_empty_payload_produces_no_tooltip() -> None:
    assert build_tooltip([]) is None
    assert build_tooltip(None) is None
    assert build_simple_tooltip(None) is None


def test_simple_tooltip_applies_unit() -> None:
    assert build_simple_tooltip({"name": "CPU", "value": 72, "color": "#F59E0B"}, unit="%") == {
        "name": "CPU",
        "value": "72%",
        "color": "#F59E0B",
    }


def test_pie_percentage_handles_zero_total() -> None:
    assert pie_percentage(1, 3) == 33.3
    assert pie_percentage(5, 0) == 0.0


def test_pie_tooltip_recomputes_total_from_current_data() -> None:
    data = [PieDataPoint("A", 1), PieDataPoint("B", 1), PieDataPoint("C", 1)]

    tooltip = build_pie_tooltip(data[0], data, color="#7841C9")
    assert tooltip == {"name": "A", "value": "1", "percent": "33.3%", "color": "#7841C9"}

    grown = [*data, PieDataPoint("D", 1)]
    assert build_pie_tooltip(grown[0], grown)["percent"] == "25.0%"
    assert build_pie_tooltip(None, data) is None


def test_scatter_tooltip_adds_size_row_for_bubbles() -> None:
    point = ScatterDataPoint(x=1, y=2, z=30, name="Retail")

    plain = build_scatter_tooltip(point, x_label="Growth")
    bubble = build_scatter_tooltip(point, has_bubble=True)

    assert plain == {"name": "Retail", "rows": [{"name": "Growth", "value": "1"}, {"name": "Y", "value": "2"}]}
    assert bubble["rows"][-1] == {"name": "Size", "value": "30"}


def test_tooltip_spec_is_none_when_hidden() -> None:
    assert tooltip_spec(TooltipConfig(show=False)) is None
    spec = tooltip_spec(TooltipConfig(), show_total=True, series_formatters={"a": str})
    assert spec["showTotal"] is True
    assert spec["seriesFormatters"] == {"a": str}
