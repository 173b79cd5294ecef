"""Tests for ChartDefinition validation."""

from __future__ import annotations

import pytest

from charts.charting.schema import (
    AxisConfig,
    BarChartProps,
    ChartDefinition,
    ComposedChartProps,
    ComposedSeriesConfig,
    GaugeChartProps,
    LineChartProps,
    PieChartProps,
    PieDataPoint,
    SeriesConfig,
    SparklineProps,
)
from charts.charting.validator import validate_chart_definition, validate_chart_definitions

pytestmark = pytest.mark.unit

DATA = ({"month": "Jan", "a": 1, "b": 2},)


def _line(slug: str = "revenue", **overrides) -> ChartDefinition:
    props = LineChartProps(data=DATA, series=(SeriesConfig(data_key="a"),), **overrides)
    return ChartDefinition(slug=slug, family="line", props=props)


def test_valid_definition_passes() -> None:
    result = validate_chart_definition(_line())
    assert result.is_valid
    assert result.errors == ()
    assert result.warnings == ()


def test_rejects_bad_slug_and_unknown_family() -> None:
    assert "slug must be lowercase" in validate_chart_definition(_line("Bad Slug")).errors[0]

    result = validate_chart_definition(ChartDefinition(slug="x", family="heatmap", props=LineChartProps()))
    assert not result.is_valid
    assert "family is not a supported value" in result.errors[0]


def test_rejects_props_of_another_family() -> None:
    result = validate_chart_definition(ChartDefinition(slug="x", family="bar", props=LineChartProps()))
    assert not result.is_valid
    assert "must be BarChartProps" in result.errors[0]


def test_series_must_be_present_and_unique() -> None:
    empty = validate_chart_definition(ChartDefinition(slug="x", family="line", props=LineChartProps(data=DATA)))
    duplicate = validate_chart_definition(
        ChartDefinition(
            slug="x",
            family="line",
            props=LineChartProps(data=DATA, series=(SeriesConfig(data_key="a"), SeriesConfig(data_key="a"))),
        )
    )

    assert "must contain at least one entry" in empty.errors[0]
    assert "duplicate data_key" in duplicate.errors[0]


def test_missing_series_key_is_a_warning() -> None:
    definition = ChartDefinition(
        slug="x",
        family="line",
        props=LineChartProps(data=DATA, series=(SeriesConfig(data_key="missing"),)),
    )

    result = validate_chart_definition(definition)

    assert result.is_valid
    assert "missing from every row" in result.warnings[0]


def test_rejects_unsupported_literal_values_and_bad_domains() -> None:
    result = validate_chart_definition(
        _line(curve_type="spline", y_axis=AxisConfig(domain=(0, "max")), colors=("not a color!",))
    )

    assert not result.is_valid
    joined = "\n".join(result.errors)
    assert "curve_type is not a supported value" in joined
    assert "domain ends must be numbers or 'auto'" in joined
    assert "colors[0] is not a color" in joined


def test_grouped_bar_with_stack_ids_warns() -> None:
    props = BarChartProps(data=DATA, series=(SeriesConfig(data_key="a", stack_id="s"),))
    result = validate_chart_definition(ChartDefinition(slug="bars", family="bar", props=props))

    assert result.is_valid
    assert "stack_id is ignored" in result.warnings[0]


def test_composed_right_series_without_right_axis_warns() -> None:
    props = ComposedChartProps(
        data=DATA,
        x_axis_key="month",
        series=(ComposedSeriesConfig(data_key="a", type="bar"), ComposedSeriesConfig(data_key="b", y_axis_id="right")),
    )
    result = validate_chart_definition(ChartDefinition(slug="combo", family="composed", props=props))

    assert result.is_valid
    assert "default axis is used" in result.warnings[0]


def test_pie_rejects_negative_values_and_warns_on_duplicate_names() -> None:
    props = PieChartProps(data=(PieDataPoint("A", -1), PieDataPoint("A", 2)))
    result = validate_chart_definition(ChartDefinition(slug="pie", family="pie", props=props))

    assert not result.is_valid
    assert "must be non-negative" in result.errors[0]
    assert "duplicate segment names" in result.warnings[0]


def test_gauge_range_must_be_increasing() -> None:
    result = validate_chart_definition(
        ChartDefinition(slug="gauge", family="gauge", props=GaugeChartProps(min=10, max=10))
    )
    assert "max must be greater than min" in result.errors[0]


def test_sparkline_reference_statistic_must_be_known() -> None:
    bad = ChartDefinition(slug="spark", family="sparkline", props=SparklineProps(data=(1,), reference_line="mode"))
    good = ChartDefinition(slug="spark", family="sparkline", props=SparklineProps(data=(1,), reference_line=3))

    assert "reference_line is not a supported value" in validate_chart_definition(bad).errors[0]
    assert validate_chart_definition(good).is_valid


def test_collection_validation_reports_duplicate_slugs() -> None:
    result = validate_chart_definitions([_line("dup"), _line("dup"), _line("Bad Slug")])

    assert not result.is_valid
    assert result.errors[0] == "Duplicate ChartDefinition.slug: 'dup' appears 2 times."
    assert any("ChartDefinition[Bad Slug]" in error for error in result.errors)
