"""Tests for sparkline composition."""

from __future__ import annotations

import pytest

from charts.charting.gradients import GradientTable
from charts.charting.schema import SparklineProps
from charts.charting.sparkline import compose_sparkline, min_max_indices, reference_value

pytestmark = pytest.mark.unit


def test_reference_value_statistics_ignore_missing_values() -> None:
    data = [1, None, 3, 8]

    assert reference_value(data, "average") == pytest.approx(4.0)
    assert reference_value(data, "median") == 3.0
    assert reference_value(data, 2) == 2.0
    assert reference_value(data, None) is None
    assert reference_value([None], "average") is None


def test_min_max_indices_pick_first_occurrence() -> None:
    assert min_max_indices([3, 1, 5, 1, 5]) == (1, 2)
    assert min_max_indices([None, None]) is None
    assert min_max_indices([4]) == (0, 0)


def test_line_sparkline_highlights_min_and_max() -> None:
    chart = compose_sparkline(SparklineProps(data=(3, 1, 5), show_min_max=True))
    points = chart["marks"][0]["dot"]["points"]

    assert [(point["index"], point["fill"]) for point in points] == [(1, "#DA1E28"), (2, "#24A148")]
    assert chart["axes"] == []
    assert chart["tooltip"] is None
    assert chart["options"]["highlights"] == {"min": 1, "max": 2}
    assert chart["margin"] == {"top": 2, "right": 2, "bottom": 2, "left": 2}


def test_constant_series_highlights_min_color() -> None:
    chart = compose_sparkline(SparklineProps(data=(2, 2), type="bar", show_min_max=True))
    cells = chart["marks"][0]["cells"]

    assert cells[0]["fill"] == "#DA1E28"
    assert cells[1]["fill"] == SparklineProps().color
    assert chart["marks"][0]["radius"] == [1, 1, 0, 0]


def test_area_sparkline_gradient_comes_from_instance_table() -> None:
    chart = compose_sparkline(
        SparklineProps(data=(1, 2, 3), type="area", reference_line="median"),
        gradients=GradientTable("sparkline-gradient", token=9),
    )

    assert chart["defs"][0]["id"] == "sparkline-gradient-9-0"
    assert chart["marks"][0]["fill"] == "url(#sparkline-gradient-9-0)"
    assert chart["marks"][0]["dot"] is False
    (reference,) = chart["references"]
    assert reference["y"] == 2.0
    assert reference["strokeDasharray"] == "2 2"
