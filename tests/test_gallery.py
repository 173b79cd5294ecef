"""Tests for the YAML chart gallery loader."""

from __future__ import annotations

import logging

import pytest
from django.test import override_settings

from charts.charting.instance import FAMILIES, ChartInstance
from charts.charting.schema import AxisConfig, LegendConfig, TooltipConfig
from charts.gallery import DEFAULT_GALLERY_PATH, get_definition, get_gallery, load_gallery

pytestmark = pytest.mark.integration


def test_built_in_gallery_loads_and_covers_every_family() -> None:
    definitions = load_gallery(DEFAULT_GALLERY_PATH)

    assert {definition.family for definition in definitions} == set(FAMILIES)
    assert len({definition.slug for definition in definitions}) == len(definitions)


def test_every_built_in_chart_renders_ready() -> None:
    for definition in load_gallery(DEFAULT_GALLERY_PATH):
        container = ChartInstance(definition.family).render(definition.props)
        assert container.state == "ready", definition.slug


def test_stacked_gallery_entry_totals() -> None:
    instance = ChartInstance("bar")
    definition = next(item for item in load_gallery(DEFAULT_GALLERY_PATH) if item.slug == "stacked-channels")
    instance.render(definition.props)

    assert instance.handle_hover(0)["total"]["value"] == "30"
    assert instance.handle_hover(1)["total"]["value"] == "20"


def test_invalid_gallery_lists_every_error(write_gallery) -> None:
    path = write_gallery(
        """
charts:
  - slug: dup
    family: line
    props: {data: [{a: 1}], series: [{data_key: a}]}
  - slug: dup
    family: line
    props: {data: [{a: 1}], series: [{data_key: a}]}
  - slug: broken
    family: heatmap
"""
    )

    with pytest.raises(ValueError) as excinfo:
        load_gallery(path)

    message = str(excinfo.value)
    assert "charts[2]: Unknown chart family 'heatmap'" in message
    assert "Duplicate ChartDefinition.slug: 'dup'" in message


def test_malformed_gallery_file_is_rejected(write_gallery) -> None:
    with pytest.raises(ValueError, match="expected a mapping with a `charts` list"):
        load_gallery(write_gallery("- just\n- a list\n"))


def test_validation_warnings_are_logged(write_gallery, caplog) -> None:
    path = write_gallery(
        """
charts:
  - slug: ghost
    family: line
    props: {data: [{a: 1}], series: [{data_key: b}]}
"""
    )

    with caplog.at_level(logging.WARNING, logger="charts.gallery"):
        definitions = load_gallery(path)

    assert [definition.slug for definition in definitions] == ["ghost"]
    assert "missing from every row" in caplog.text


def test_configured_gallery_path_is_used(write_gallery) -> None:
    path = write_gallery(
        """
charts:
  - slug: only-one
    family: sparkline
    props: {data: [1, 2, 3]}
"""
    )

    with override_settings(CHARTDECK_GALLERY_PATH=str(path)):
        assert [definition.slug for definition in get_gallery()] == ["only-one"]
        assert get_definition("only-one") is not None
        assert get_definition("monthly-revenue") is None


def test_null_nested_configs_load_as_defaults(write_gallery) -> None:
    path = write_gallery(
        """
charts:
  - slug: bare-line
    family: line
    props:
      data: [{month: Jan, a: 1}]
      series: [{data_key: a}]
      legend: null
      tooltip: null
      x_axis: null
      y_axis: null
"""
    )

    (definition,) = load_gallery(path)

    assert definition.props.legend == LegendConfig()
    assert definition.props.tooltip == TooltipConfig()
    assert definition.props.x_axis == definition.props.y_axis == AxisConfig()
    assert ChartInstance("line").render(definition.props).state == "ready"
