"""Tests for the chart container shell."""

from __future__ import annotations

import pytest

from charts.charting.container import (
    DEFAULT_EMPTY_MESSAGE,
    ERROR_HEADING,
    build_container,
    resolve_container_state,
    variant_style,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("loading", "error", "empty", "expected"),
    [
        (True, "boom", True, "loading"),
        (False, "boom", True, "error"),
        (False, None, True, "empty"),
        (False, "", True, "empty"),
        (False, None, False, "ready"),
    ],
)
def test_state_precedence(loading, error, empty, expected) -> None:
    assert resolve_container_state(loading=loading, error=error, empty=empty) == expected


def test_chart_is_attached_only_when_ready() -> None:
    chart = {"family": "line"}

    ready = build_container(state="ready", height=300, chart=chart)  # type: ignore[arg-type]
    empty = build_container(state="empty", height=300, chart=chart)  # type: ignore[arg-type]

    assert ready.is_ready
    assert ready.chart == chart
    assert empty.chart is None
    assert empty.empty_message == DEFAULT_EMPTY_MESSAGE


def test_error_container_carries_message_and_heading() -> None:
    container = build_container(state="error", height=200, error="Upstream timeout", title="CPU")

    assert container.error == "Upstream timeout"
    assert container.error_heading == ERROR_HEADING
    assert container.to_dict()["error"] == "Upstream timeout"
    assert container.to_dict()["chart"] is None


def test_to_dict_strips_callables_from_chart() -> None:
    container = build_container(
        state="ready",
        height=120,
        chart={"axes": [{"id": "x", "tickFormatter": str, "tickLabels": ("a", "b")}]},  # type: ignore[arg-type]
    )

    assert container.to_dict()["chart"] == {"axes": [{"id": "x", "tickLabels": ["a", "b"]}]}


def test_variant_styles() -> None:
    assert variant_style("default") == "width: 100%"
    assert "border: 1px solid" in variant_style("outlined")
    assert "box-shadow" in variant_style("elevated")
    with pytest.raises(ValueError):
        variant_style("glass")  # type: ignore[arg-type]
