"""Tests for radial bar and gauge composition."""

from __future__ import annotations

import pytest

from charts.charting import tokens
from charts.charting.radial import (
    compose_gauge_chart,
    compose_radial_bar_chart,
    gauge_percentage,
    threshold_color,
)
from charts.charting.schema import GaugeChartProps, LegendConfig, RadialBarChartProps, RadialDataPoint, Threshold

pytestmark = pytest.mark.unit

GREEN, YELLOW, RED = "#24A148", "#F59E0B", "#DA1E28"
THRESHOLDS = (Threshold(80, YELLOW), Threshold(50, GREEN), Threshold(100, RED))


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, GREEN), (50, GREEN), (50.0001, YELLOW), (80, YELLOW), (99, RED), (200, RED)],
)
def test_threshold_boundaries_are_inclusive(value, expected) -> None:
    assert threshold_color(value, THRESHOLDS, "#000000") == expected


def test_threshold_color_defaults_without_thresholds() -> None:
    assert threshold_color(42, (), "#000000") == "#000000"


def test_gauge_percentage_clamps_and_handles_empty_range() -> None:
    assert gauge_percentage(50, 0, 200) == 25.0
    assert gauge_percentage(-10, 0, 100) == 0.0
    assert gauge_percentage(500, 0, 100) == 100.0
    assert gauge_percentage(5, 10, 10) == 0.0
    assert gauge_percentage(5, 10, 0) == 0.0


def test_gauge_payload_uses_threshold_color_and_half_circle() -> None:
    chart = compose_gauge_chart(GaugeChartProps(value=72, unit="%", thresholds=THRESHOLDS, value_label="CPU"))

    assert chart["data"] == [{"name": "Value", "value": 72.0, "fill": YELLOW}]
    assert (chart["options"]["startAngle"], chart["options"]["endAngle"]) == (180, 0)
    assert chart["options"]["center"]["value"] == "72"
    assert chart["options"]["center"]["unit"] == "%"
    assert chart["options"]["center"]["fontSize"] == pytest.approx(200 / 6)
    assert (chart["options"]["minLabel"], chart["options"]["maxLabel"]) == ("0", "100")
    assert chart["ariaLabel"] == "Gauge showing 72%"


def test_gauge_value_formatter_and_hidden_value() -> None:
    formatted = compose_gauge_chart(GaugeChartProps(value=0.5, value_formatter=lambda value: f"{value:.2f}"))
    hidden = compose_gauge_chart(GaugeChartProps(value=10, show_value=False))

    assert formatted["options"]["center"]["value"] == "0.50"
    assert hidden["options"]["center"] is None


def test_radial_bar_rows_use_palette_and_legend_shows_values() -> None:
    props = RadialBarChartProps(data=(RadialDataPoint("Sales", 80), RadialDataPoint("Leads", 1500)))

    chart = compose_radial_bar_chart(props)

    assert [row["fill"] for row in chart["data"]] == [tokens.PRIMARY[0], tokens.PRIMARY[1]]
    assert chart["marks"][0]["background"] == {"fill": tokens.GRAY[100]}
    assert chart["marks"][0]["label"]["position"] == "insideStart"
    assert [entry["detail"] for entry in chart["legend"]["entries"]] == ["80", "1,500"]
    hidden = compose_radial_bar_chart(
        RadialBarChartProps(data=props.data, show_labels=False, legend=LegendConfig(show=False))
    )
    assert hidden["marks"][0]["label"] is False
    assert hidden["legend"] is None
