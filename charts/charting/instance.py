"""Mounted chart instances and the hover/click event channel.

A `ChartInstance` is what a page holds for one chart slot. It owns the
gradient table (the only per-instance state), renders props through the
container shell and the family composer, and routes renderer events back to
caller callbacks. Event handlers recompute from the last rendered props; no
state is carried from one event to the next.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .area import compose_area_chart
from .bar import compose_bar_chart
from .composed import compose_composed_chart
from .container import ChartContainer, build_container, resolve_container_state
from .gradients import GradientTable
from .line import compose_line_chart
from .pie import compose_donut_chart, compose_pie_chart
from .primitives import ChartPayload
from .radial import compose_gauge_chart, compose_radial_bar_chart
from .scatter import compose_bubble_chart, compose_scatter_chart, normalize_scatter_data
from .schema import (
    AreaChartProps,
    BarChartProps,
    CartesianChartProps,
    ComposedChartProps,
    GaugeChartProps,
    LineChartProps,
    PieChartProps,
    RadialBarChartProps,
    ScatterChartProps,
    SparklineProps,
    ThemeContext,
)
from .sparkline import compose_sparkline
from .tooltip import (
    TooltipEntry,
    build_pie_tooltip,
    build_scatter_tooltip,
    build_simple_tooltip,
    build_tooltip,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChartFamily:
    """Registry entry binding a family name to its props type and composer."""

    name: str
    props_type: type
    composer: Callable[..., ChartPayload]
    label: str


FAMILIES: dict[str, ChartFamily] = {
    family.name: family
    for family in (
        ChartFamily("line", LineChartProps, compose_line_chart, "Line chart"),
        ChartFamily("bar", BarChartProps, compose_bar_chart, "Bar chart"),
        ChartFamily("area", AreaChartProps, compose_area_chart, "Area chart"),
        ChartFamily("pie", PieChartProps, compose_pie_chart, "Pie chart"),
        ChartFamily("donut", PieChartProps, compose_donut_chart, "Donut chart"),
        ChartFamily("scatter", ScatterChartProps, compose_scatter_chart, "Scatter chart"),
        ChartFamily("bubble", ScatterChartProps, compose_bubble_chart, "Bubble chart"),
        ChartFamily("composed", ComposedChartProps, compose_composed_chart, "Composed chart"),
        ChartFamily("radial", RadialBarChartProps, compose_radial_bar_chart, "Radial bar chart"),
        ChartFamily("gauge", GaugeChartProps, compose_gauge_chart, "Gauge"),
        ChartFamily("sparkline", SparklineProps, compose_sparkline, "Sparkline"),
    )
}


def get_family(name: str) -> ChartFamily:
    """Return the registry entry for `name`.

    Raises:
        ValueError: When the family is unknown.
    """

    try:
        return FAMILIES[name]
    except KeyError:
        raise ValueError(f"Unknown chart family {name!r}; expected one of {sorted(FAMILIES)}.") from None


def is_empty(props: Any) -> bool:
    """Return True when the props carry no data to draw."""

    if isinstance(props, GaugeChartProps):
        return False
    if isinstance(props, ScatterChartProps):
        return all(not series.data for series in normalize_scatter_data(props.data))
    return len(props.data) == 0


class ChartInstance:
    """One mounted chart.

    Args:
        family: Chart family name (see `FAMILIES`).
    """

    def __init__(self, family: str) -> None:
        self.family = get_family(family)
        self.gradients: GradientTable | None = GradientTable(f"{self.family.name}-gradient")
        self._props: Any = None
        self._chart: ChartPayload | None = None

    @property
    def is_mounted(self) -> bool:
        return self.gradients is not None

    @property
    def chart(self) -> ChartPayload | None:
        """Payload from the last ready render."""

        return self._chart

    def render(self, props: Any, theme: ThemeContext = ThemeContext()) -> ChartContainer:
        """Render `props` through the container shell.

        Args:
            props: Props of this instance's family.
            theme: Active theme.

        Returns:
            ChartContainer; the composed chart is attached only when ready.

        Raises:
            RuntimeError: When the instance has been unmounted.
            TypeError: When `props` do not belong to this family.
        """

        if self.gradients is None:
            raise RuntimeError("Cannot render an unmounted chart instance.")
        if not isinstance(props, self.family.props_type):
            raise TypeError(
                f"{self.family.name} charts take {self.family.props_type.__name__}, got {type(props).__name__}."
            )

        self._props = props
        state = resolve_container_state(
            loading=getattr(props, "loading", False),
            error=getattr(props, "error", None),
            empty=is_empty(props),
        )
        chart = None
        if state == "ready":
            if isinstance(props, SparklineProps):
                chart = compose_sparkline(props, gradients=self.gradients)
            else:
                chart = self.family.composer(props, gradients=self.gradients, theme=theme)
        else:
            logger.debug("Chart %s rendered in %s state", self.family.name, state)
        self._chart = chart

        return build_container(
            state=state,
            height=props.height,
            variant=getattr(props, "container_variant", "default"),
            title=getattr(props, "title", None),
            subtitle=getattr(props, "subtitle", None),
            empty_message=getattr(props, "empty_message", None),
            error=getattr(props, "error", None),
            chart=chart,
        )

    def unmount(self) -> None:
        """Discard the gradient table; a remount needs a new instance."""

        self.gradients = None
        self._props = None
        self._chart = None

    def handle_click(self, mark_index: int, point_index: int) -> Any:
        """Route a click on `point_index` of mark `mark_index` to the caller callback.

        The callback receives `(data_point, point_index)`. Clicks on
        positions that do not exist, or on charts without a callback, are
        ignored.

        Returns:
            The clicked data point, or None when the click was ignored.
        """

        props = self._props
        if props is None or self._chart is None:
            return None

        callback = None
        point = None
        if isinstance(props, (CartesianChartProps, ComposedChartProps)):
            callback = props.on_data_point_click
            point = _at(props.data, point_index)
        elif isinstance(props, PieChartProps):
            callback = props.on_segment_click
            point = _at(props.data, point_index)
        elif isinstance(props, ScatterChartProps):
            callback = props.on_point_click
            series = _at(normalize_scatter_data(props.data, props.colors), mark_index)
            point = _at(series.data, point_index) if series is not None else None

        if callback is None or point is None:
            return None
        callback(point, point_index)
        return point

    def handle_hover(self, category_index: int, mark_index: int = 0) -> Any:
        """Return tooltip content for the hovered position.

        Cartesian families hover a whole category (every series at that row);
        pie and radial charts hover one segment; scatter charts hover one point
        of mark `mark_index`.

        Returns:
            Tooltip content, or None when nothing is hovered or tooltips are off.
        """

        props = self._props
        chart = self._chart
        if props is None or chart is None:
            return None
        if isinstance(props, SparklineProps):
            value = _at(props.data, category_index)
            return build_simple_tooltip({"name": str(category_index), "value": value, "color": props.color})
        if chart.get("tooltip") is None:
            return None

        if isinstance(props, (CartesianChartProps, ComposedChartProps)):
            return self._cartesian_tooltip(props, chart, category_index)
        if isinstance(props, PieChartProps):
            entry = _at(props.data, category_index)
            cells = chart["marks"][0].get("cells", [])
            color = cells[category_index]["fill"] if entry is not None else None
            return build_pie_tooltip(entry, props.data, value_formatter=props.tooltip.formatter, color=color)
        if isinstance(props, ScatterChartProps):
            series = _at(normalize_scatter_data(props.data, props.colors), mark_index)
            point = _at(series.data, category_index) if series is not None else None
            return build_scatter_tooltip(
                point,
                x_label=props.x_axis.label,
                y_label=props.y_axis.label,
                has_bubble=chart["options"].get("bubble", False),
            )
        if isinstance(props, RadialBarChartProps):
            row = _at(chart["data"], category_index)
            if row is None:
                return None
            return build_simple_tooltip(row, value_formatter=props.tooltip.formatter)  # type: ignore[arg-type]
        return None

    def _cartesian_tooltip(self, props: Any, chart: ChartPayload, category_index: int) -> Any:
        # Stacked-percent bars plot normalized rows; hover shows source values.
        rows = chart["options"].get("rawData") or chart["data"]
        row = _at(rows, category_index)
        if row is None:
            return None
        category_axis = next((axis for axis in chart["axes"] if axis.get("type") == "category"), None)
        label = row.get(category_axis["dataKey"]) if category_axis else None
        entries: list[TooltipEntry] = []
        for mark in chart["marks"]:
            if "name" not in mark or mark.get("kind") not in ("line", "bar", "area"):
                continue
            entries.append(
                {
                    "name": mark["name"],
                    "value": row.get(mark["dataKey"]),
                    "color": mark.get("stroke") if mark.get("kind") != "bar" else mark.get("fill"),
                    "dataKey": mark["dataKey"],
                }
            )
        spec = chart["tooltip"] or {}
        return build_tooltip(
            entries,
            label=label,
            value_formatter=props.tooltip.formatter,
            label_formatter=props.tooltip.label_formatter,
            show_total=spec.get("showTotal", False),
            series_formatters=spec.get("seriesFormatters"),
        )


def _at(items: Any, index: int) -> Any:
    if index < 0 or index >= len(items):
        return None
    return items[index]
