"""Tests for gradient id stability and uniqueness."""

from __future__ import annotations

import pytest

from charts.charting.area import compose_area_chart
from charts.charting.gradients import GradientTable, linear_gradient, next_instance_token
from charts.charting.instance import ChartInstance
from charts.charting.schema import AreaChartProps, LineChartProps, SeriesConfig

pytestmark = pytest.mark.unit

DATA = ({"name": "Mon", "a": 1, "b": 2}, {"name": "Tue", "a": 3, "b": 4})


def test_instance_tokens_increase_monotonically() -> None:
    first = next_instance_token()
    second = next_instance_token()
    assert second > first


def test_table_ids_are_stable_and_extend_by_position() -> None:
    table = GradientTable("area-gradient", token=7)

    assert table.ids_for(2) == ["area-gradient-7-0", "area-gradient-7-1"]
    assert table.id_for(0) == "area-gradient-7-0"
    assert table.ids_for(3)[:2] == ["area-gradient-7-0", "area-gradient-7-1"]
    assert len(table) == 3


def test_empty_table_is_still_a_table() -> None:
    """An unused table has length zero but must still be reused by composers."""

    table = GradientTable("area-gradient", token=3)
    chart = compose_area_chart(AreaChartProps(data=DATA, series=(SeriesConfig(data_key="a"),)), gradients=table)

    assert chart["defs"][0]["id"] == "area-gradient-3-0"


def test_negative_index_is_rejected() -> None:
    with pytest.raises(ValueError):
        GradientTable().id_for(-1)


def test_linear_gradient_runs_top_to_bottom() -> None:
    definition = linear_gradient("g-1-0", "#7841C9", 0.4, 0.05)

    assert (definition["x1"], definition["y1"], definition["x2"], definition["y2"]) == ("0", "0", "0", "1")
    assert [stop["opacity"] for stop in definition["stops"]] == [0.4, 0.05]
    assert [stop["offset"] for stop in definition["stops"]] == ["5%", "95%"]


def test_gradient_ids_are_stable_across_rerender_and_fresh_across_remount() -> None:
    props = AreaChartProps(data=DATA, series=(SeriesConfig(data_key="a"), SeriesConfig(data_key="b")))

    instance = ChartInstance("area")
    first = [item["id"] for item in instance.render(props).chart["defs"]]
    second = [item["id"] for item in instance.render(props).chart["defs"]]
    remounted = [item["id"] for item in ChartInstance("area").render(props).chart["defs"]]

    assert first == second
    assert len(set(first)) == 2
    assert set(first).isdisjoint(remounted)


def test_two_mounted_charts_never_share_gradient_ids() -> None:
    props = LineChartProps(data=DATA, series=(SeriesConfig(data_key="a"),), show_area=True)

    left = ChartInstance("line").render(props).chart
    right = ChartInstance("line").render(props).chart

    assert left["defs"][0]["id"] != right["defs"][0]["id"]
    assert left["marks"][0]["fill"] == f"url(#{left['defs'][0]['id']})"


def test_gradient_ids_survive_changed_props_on_the_same_instance() -> None:
    instance = ChartInstance("area")
    before = [
        item["id"]
        for item in instance.render(
            AreaChartProps(data=DATA, series=(SeriesConfig(data_key="a"), SeriesConfig(data_key="b")))
        ).chart["defs"]
    ]

    changed = AreaChartProps(
        data=({"name": "Wed", "a": 9, "b": 1, "c": 5},),
        series=(
            SeriesConfig(data_key="a", color="#DA1E28"),
            SeriesConfig(data_key="b", color="#24A148"),
            SeriesConfig(data_key="c"),
        ),
    )
    after = instance.render(changed).chart["defs"]

    assert [item["id"] for item in after[:2]] == before
    assert after[0]["stops"][0]["color"] == "#DA1E28"
    assert len({item["id"] for item in after}) == 3
