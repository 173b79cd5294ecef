"""Tests for chart definition encoding/decoding."""

from __future__ import annotations

import pytest

from charts.charting.definition_codec import FORMATTERS, decode_chart_definition, encode_chart_definition
from charts.charting.schema import (
    AxisConfig,
    BarChartProps,
    ChartDefinition,
    ComposedChartProps,
    ComposedSeriesConfig,
    GaugeChartProps,
    LegendConfig,
    LineChartProps,
    PieChartProps,
    PieDataPoint,
    ScatterChartProps,
    ScatterDataPoint,
    ScatterSeries,
    SeriesConfig,
    SparklineProps,
    Threshold,
    ZAxisConfig,
)

pytestmark = pytest.mark.unit


def test_decode_builds_typed_props() -> None:
    definition = decode_chart_definition(
        {
            "slug": "sales",
            "family": "bar",
            "description": "Stacked sales",
            "props": {
                "data": [{"month": "Jan", "a": 10}],
                "series": [{"data_key": "a", "name": "A"}],
                "x_axis": {"data_key": "month", "domain": [0, "auto"]},
                "y_axis": {"tick_formatter": "percent"},
                "variant": "stacked",
                "bar_radius": [2, 2, 0, 0],
                "legend": {"position": "top"},
            },
        }
    )

    props = definition.props
    assert isinstance(props, BarChartProps)
    assert definition.description == "Stacked sales"
    assert props.series == (SeriesConfig(data_key="a", name="A"),)
    assert props.data == ({"month": "Jan", "a": 10},)
    assert props.x_axis.domain == (0, "auto")
    assert props.y_axis.tick_formatter is FORMATTERS["percent"]
    assert props.bar_radius == (2, 2, 0, 0)
    assert props.legend == LegendConfig(position="top")


def test_decode_family_specific_data_types() -> None:
    pie = decode_chart_definition({"slug": "p", "family": "donut", "props": {"data": [{"name": "A", "value": 1}]}})
    composed = decode_chart_definition(
        {"slug": "c", "family": "composed", "props": {"series": [{"data_key": "a", "type": "bar"}]}}
    )
    grouped = decode_chart_definition(
        {"slug": "s", "family": "scatter", "props": {"data": [{"name": "G", "data": [{"x": 1, "y": 2}]}]}}
    )
    spark = decode_chart_definition({"slug": "k", "family": "sparkline", "props": {"data": [1, None, 3]}})

    assert pie.props.data == (PieDataPoint("A", 1),)
    assert composed.props.series == (ComposedSeriesConfig(data_key="a", type="bar"),)
    assert grouped.props.data == (ScatterSeries("G", (ScatterDataPoint(1, 2),)),)
    assert spark.props.data == (1, None, 3)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"family": "line"}, "missing a slug"),
        ({"slug": "x", "family": "heatmap"}, "Unknown chart family"),
        ({"slug": "x", "family": "line", "props": []}, "props must be a mapping"),
        ({"slug": "x", "family": "line", "props": {"colour": "red"}}, "unknown line props"),
        ({"slug": "x", "family": "line", "props": {"series": {"data_key": "a"}}}, "series must be a list"),
        ({"slug": "x", "family": "line", "props": {"series": [{"key": "a"}]}}, "unknown SeriesConfig fields"),
        ({"slug": "x", "family": "line", "props": {"series": [{}]}}, "invalid SeriesConfig"),
        ({"slug": "x", "family": "line", "props": {"data": [1, 2]}}, "data rows must be mappings"),
        ({"slug": "x", "family": "line", "props": {"tooltip": {"formatter": "roman"}}}, "unknown formatter"),
        ({"slug": "x", "family": "bar", "props": {"on_data_point_click": "print"}}, "callbacks cannot be stored"),
    ],
)
def test_decode_rejects_malformed_payloads(payload, message) -> None:
    with pytest.raises(ValueError, match=message):
        decode_chart_definition(payload)


def test_decode_rejects_non_mapping_payload() -> None:
    with pytest.raises(ValueError, match="must be a mapping"):
        decode_chart_definition(["line"])  # type: ignore[arg-type]


def test_encode_omits_defaults_and_names_formatters() -> None:
    definition = ChartDefinition(
        slug="cpu",
        family="gauge",
        props=GaugeChartProps(value=72, thresholds=(Threshold(50, "#24A148"),), value_formatter=FORMATTERS["percent"]),
    )

    assert encode_chart_definition(definition) == {
        "slug": "cpu",
        "family": "gauge",
        "props": {
            "value": 72,
            "thresholds": [{"value": 50, "color": "#24A148"}],
            "value_formatter": "percent",
        },
    }


def test_encode_drops_unregistered_formatters_and_callbacks() -> None:
    props = BarChartProps(
        data=({"name": "a", "v": 1},),
        series=(SeriesConfig(data_key="v"),),
        y_axis=AxisConfig(tick_formatter=lambda value: str(value)),
        on_data_point_click=lambda point, idx: None,
    )

    encoded = encode_chart_definition(ChartDefinition(slug="b", family="bar", props=props))

    assert "on_data_point_click" not in encoded["props"]
    assert encoded["props"]["y_axis"] == {}


@pytest.mark.parametrize(
    "definition",
    [
        ChartDefinition(
            slug="combo",
            family="composed",
            props=ComposedChartProps(
                data=({"m": "Jan", "a": 1},),
                x_axis_key="m",
                series=(ComposedSeriesConfig(data_key="a", type="area", y_axis_id="right"),),
                y_axis_right=AxisConfig(tick_formatter=FORMATTERS["compact"]),
            ),
            description="Composed",
        ),
        ChartDefinition(
            slug="bubbles",
            family="bubble",
            props=ScatterChartProps(data=(ScatterDataPoint(1, 2, z=3),), z_axis=ZAxisConfig(range=(10.0, 20.0))),
        ),
        ChartDefinition(slug="share", family="pie", props=PieChartProps(data=(PieDataPoint("A", 1, "#000000"),))),
        ChartDefinition(slug="spark", family="sparkline", props=SparklineProps(data=(1, 2), reference_line="median")),
    ],
)
def test_decoding_an_encoded_definition_restores_it(definition) -> None:
    assert decode_chart_definition(encode_chart_definition(definition)) == definition


def test_compact_formatter() -> None:
    compact = FORMATTERS["compact"]
    assert compact(1_250_000) == "1.2M"
    assert compact(950) == "950"
    assert compact(12_000) == "12K"


def test_null_right_axis_stays_unset_while_other_nulls_take_defaults() -> None:
    definition = decode_chart_definition(
        {"slug": "c", "family": "composed", "props": {"y_axis_right": None, "legend": None, "grid": None}}
    )

    assert definition.props.y_axis_right is None
    assert definition.props.legend == ComposedChartProps().legend
    assert definition.props.grid == ComposedChartProps().grid


def test_data_columns_named_like_formatters_are_stored_verbatim() -> None:
    definition = ChartDefinition(
        slug="columns",
        family="line",
        props=LineChartProps(
            data=({"name": "Jan", "formatter": 5, "tick_formatter": "x"},),
            series=(SeriesConfig(data_key="formatter"),),
        ),
    )

    encoded = encode_chart_definition(definition)

    assert encoded["props"]["data"] == [{"name": "Jan", "formatter": 5, "tick_formatter": "x"}]
    assert decode_chart_definition(encoded) == definition
