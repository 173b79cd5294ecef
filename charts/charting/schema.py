"""Schema types for declarative chart configuration.

Charts are driven by configuration objects instead of hand-written drawing
code. Every chart family accepts a props object built from the shared
vocabulary below (series, axis, legend, tooltip, reference overlays) and the
composers resolve it into renderer parameters.

All config objects are frozen: they are constructed fresh for each render and
never mutated in place.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from . import tokens

DataValue = str | int | float | None
DataPoint = Mapping[str, DataValue]

CurveType = Literal["linear", "monotone", "step", "natural"]
LegendPosition = Literal["top", "bottom", "left", "right"]
LegendAlign = Literal["left", "center", "right"]
GridDirection = Literal["horizontal", "vertical", "both"]
AxisType = Literal["number", "category"]
AxisSide = Literal["x", "y"]
BarLayout = Literal["vertical", "horizontal"]
BarVariant = Literal["grouped", "stacked", "stacked-percent"]
SeriesType = Literal["line", "bar", "area"]
YAxisId = Literal["left", "right"]
PieLabelType = Literal["value", "percent", "name"]
ContainerVariant = Literal["default", "outlined", "elevated"]
SparklineType = Literal["line", "bar", "area"]
ReferenceStatistic = Literal["average", "median"]

ValueFormatter = Callable[[float], str]
TickFormatter = Callable[[Any], str]
LabelFormatter = Callable[[str], str]
ClickHandler = Callable[[Any, int], None]

BarRadius = int | tuple[int, int, int, int]
AxisDomain = tuple[float | str, float | str]


@dataclass(frozen=True, slots=True)
class SeriesConfig:
    """A single value-producing field across the dataset.

    Args:
        data_key: Field name read from each DataPoint. Unique within a chart.
        name: Display name for legend/tooltip (defaults to `data_key`).
        color: Explicit color; wins over palette assignment.
        stack_id: Stack group identifier; absent means ungrouped.
        show_dots: Whether line/area marks draw point dots.
        stroke_dasharray: Optional dash pattern for the stroke.
        fill_opacity: Optional fill opacity override for areas.
    """

    data_key: str
    name: str | None = None
    color: str | None = None
    stack_id: str | None = None
    show_dots: bool = True
    stroke_dasharray: str | None = None
    fill_opacity: float | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.data_key


@dataclass(frozen=True, slots=True)
class ComposedSeriesConfig(SeriesConfig):
    """Series config for composed charts, mixing render types and axes.

    Args:
        type: Render type for this series.
        y_axis_id: Which y axis ("left" or "right") scales this series.
        curve: Curve type for line/area series.
        stroke_width: Stroke width for line/area series.
        max_bar_size: Maximum bar thickness for bar series.
    """

    type: SeriesType = "line"
    y_axis_id: YAxisId = "left"
    curve: CurveType | None = None
    stroke_width: int | None = None
    max_bar_size: int | None = None


@dataclass(frozen=True, slots=True)
class AxisConfig:
    """Axis configuration.

    Args:
        data_key: Field bound to the axis (category axes).
        label: Axis title.
        domain: `(min, max)`; either end may be "auto". None means auto-scale.
        tick_formatter: Callable applied to tick values.
        tick_count: Preferred number of ticks.
        hide: Hide the axis entirely.
        type: Explicit axis type.
        angle: Tick label rotation in degrees.
        unit: Unit suffix for tick values.
    """

    data_key: str | None = None
    label: str | None = None
    domain: AxisDomain | None = None
    tick_formatter: TickFormatter | None = None
    tick_count: int | None = None
    hide: bool = False
    type: AxisType | None = None
    angle: int | None = None
    unit: str | None = None


@dataclass(frozen=True, slots=True)
class ZAxisConfig:
    """Size-encoding axis for bubble charts."""

    domain: AxisDomain | None = None
    range: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class LegendConfig:
    """Legend placement and formatting."""

    show: bool = True
    position: LegendPosition = "bottom"
    align: LegendAlign = "center"
    formatter: LabelFormatter | None = None


@dataclass(frozen=True, slots=True)
class TooltipConfig:
    """Tooltip behavior.

    Args:
        show: Show/hide tooltip.
        formatter: Value formatter applied to every tooltip value.
        label_formatter: Formatter applied to the hovered category label.
    """

    show: bool = True
    formatter: ValueFormatter | None = None
    label_formatter: LabelFormatter | None = None


@dataclass(frozen=True, slots=True)
class GridConfig:
    """Grid toggles used by composed charts."""

    show: bool = True
    horizontal: bool = True
    vertical: bool = True


@dataclass(frozen=True, slots=True)
class ReferenceLineConfig:
    """A marker line bound to an axis value."""

    value: float | str
    axis: AxisSide = "y"
    label: str | None = None
    color: str | None = None
    stroke_dasharray: str | None = None


@dataclass(frozen=True, slots=True)
class ReferenceAreaConfig:
    """A shaded band between two axis values."""

    start: float | str
    end: float | str
    axis: AxisSide = "x"
    label: str | None = None
    color: str | None = None
    opacity: float | None = None


@dataclass(frozen=True, slots=True)
class ComposedReferenceLineConfig:
    """Reference line for composed charts, bound to a specific y axis."""

    x: float | str | None = None
    y: float | None = None
    color: str | None = None
    stroke_dasharray: str | None = None
    stroke_width: int | None = None
    label: str | None = None
    label_position: str | None = None
    y_axis_id: YAxisId = "left"


@dataclass(frozen=True, slots=True)
class PieDataPoint:
    """One pie/donut segment. `value` must be non-negative."""

    name: str
    value: float
    color: str | None = None


@dataclass(frozen=True, slots=True)
class ScatterDataPoint:
    """One scatter point; `z` drives bubble size."""

    x: float
    y: float
    z: float | None = None
    name: str | None = None
    category: str | None = None


@dataclass(frozen=True, slots=True)
class ScatterSeries:
    """A named group of scatter points."""

    name: str
    data: Sequence[ScatterDataPoint]
    color: str | None = None


@dataclass(frozen=True, slots=True)
class RadialDataPoint:
    """One concentric arc of a radial bar chart."""

    name: str
    value: float


@dataclass(frozen=True, slots=True)
class Threshold:
    """Gauge color cutoff."""

    value: float
    color: str


@dataclass(frozen=True, slots=True)
class ThemeContext:
    """Resolved theme passed explicitly to composers."""

    mode: tokens.ThemeMode = "light"

    @property
    def is_dark(self) -> bool:
        return self.mode == "dark"


# Props ------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ChartShellProps:
    """Props shared by every chart family (container + presentation).

    Args:
        height: Chart height in pixels.
        width: Chart width (pixels or CSS length, responsive by default).
        title: Optional title rendered by the container shell.
        subtitle: Optional subtitle rendered under the title.
        colors: Palette override; series without explicit colors cycle through it.
        legend: Legend configuration.
        tooltip: Tooltip configuration.
        animate: Enable entrance/transition animations.
        animation_duration: Animation duration in milliseconds.
        loading: Loading state flag.
        empty_message: Message shown in the empty state.
        error: External error message; shown instead of the chart when set.
        aria_label: Accessibility label.
        container_variant: Container chrome variant.
    """

    height: int = tokens.DEFAULT_HEIGHT
    width: int | str = "100%"
    title: str | None = None
    subtitle: str | None = None
    colors: Sequence[str] | None = None
    legend: LegendConfig = LegendConfig()
    tooltip: TooltipConfig = TooltipConfig()
    animate: bool = True
    animation_duration: int = tokens.ANIMATION_DURATION
    loading: bool = False
    empty_message: str | None = None
    error: str | None = None
    aria_label: str | None = None
    container_variant: ContainerVariant = "default"


@dataclass(frozen=True, slots=True, kw_only=True)
class CartesianChartProps(ChartShellProps):
    """Props shared by line, bar and area charts."""

    data: Sequence[DataPoint] = ()
    series: Sequence[SeriesConfig] = ()
    margin: Mapping[str, int] | None = None
    show_grid: bool = True
    grid_direction: GridDirection = "horizontal"
    x_axis: AxisConfig = AxisConfig()
    y_axis: AxisConfig = AxisConfig()
    reference_lines: Sequence[ReferenceLineConfig] = ()
    reference_areas: Sequence[ReferenceAreaConfig] = ()
    on_data_point_click: ClickHandler | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LineChartProps(CartesianChartProps):
    """Line chart props."""

    curve_type: CurveType = "monotone"
    show_area: bool = False
    connect_nulls: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class BarChartProps(CartesianChartProps):
    """Bar chart props.

    Args:
        layout: "vertical" bars grow upward; "horizontal" bars grow rightward.
        variant: Grouping variant.
        bar_radius: Corner radius, or explicit per-corner radii.
        max_bar_width: Maximum bar thickness.
        bar_gap: Gap between bars in a group.
        bar_category_gap: Gap between categories.
    """

    layout: BarLayout = "vertical"
    variant: BarVariant = "grouped"
    bar_radius: BarRadius = tokens.BAR_RADIUS
    max_bar_width: int = tokens.BAR_MAX_WIDTH
    bar_gap: int | None = None
    bar_category_gap: int | str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AreaChartProps(CartesianChartProps):
    """Area chart props."""

    curve_type: CurveType = "monotone"
    gradient: bool = True
    stacked: bool = False
    connect_nulls: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class PieChartProps(ChartShellProps):
    """Pie/donut props.

    Args:
        data: Segments.
        inner_radius: Inner radius ratio (0-1). Values > 0 produce a donut.
        padding_angle: Angle between segments.
        corner_radius: Segment corner radius.
        start_angle: Start angle in degrees.
        end_angle: End angle in degrees.
        show_labels: Render segment labels.
        label_type: Label strategy.
        center_content: Text shown in the donut hole.
        active_index: Hovered segment index, highlighted when set.
        on_segment_click: Callback receiving `(segment, index)`.
    """

    data: Sequence[PieDataPoint] = ()
    legend: LegendConfig = LegendConfig(position="right")
    inner_radius: float = 0.0
    padding_angle: float = 2
    corner_radius: int = 4
    start_angle: float = 90
    end_angle: float = -270
    show_labels: bool = False
    label_type: PieLabelType = "percent"
    center_content: str | None = None
    active_index: int | None = None
    on_segment_click: ClickHandler | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ScatterChartProps(ChartShellProps):
    """Scatter/bubble props. `data` is either flat points or named series."""

    data: Sequence[ScatterDataPoint] | Sequence[ScatterSeries] = ()
    x_axis: AxisConfig = AxisConfig()
    y_axis: AxisConfig = AxisConfig()
    z_axis: ZAxisConfig = ZAxisConfig()
    show_grid: bool = True
    on_point_click: ClickHandler | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ComposedChartProps(ChartShellProps):
    """Composed (multi-type, dual axis) chart props."""

    data: Sequence[DataPoint] = ()
    x_axis_key: str = "name"
    series: Sequence[ComposedSeriesConfig] = ()
    height: int = 400
    x_axis: AxisConfig = AxisConfig()
    y_axis: AxisConfig = AxisConfig()
    y_axis_right: AxisConfig | None = None
    grid: GridConfig = GridConfig()
    reference_lines: Sequence[ComposedReferenceLineConfig] = ()
    bar_gap: int = 4
    bar_category_gap: int | str = "20%"
    on_data_point_click: ClickHandler | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RadialBarChartProps(ChartShellProps):
    """Radial bar props."""

    data: Sequence[RadialDataPoint] = ()
    legend: LegendConfig = LegendConfig(position="right")
    inner_radius: float | str = "30%"
    outer_radius: float | str = "90%"
    start_angle: float = 90
    end_angle: float = -270
    show_labels: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class GaugeChartProps(ChartShellProps):
    """Single-value gauge props."""

    value: float = 0.0
    min: float = 0.0
    max: float = 100.0
    height: int = 200
    value_label: str | None = None
    unit: str = ""
    thresholds: Sequence[Threshold] = ()
    color: str = tokens.PRIMARY[0]
    show_value: bool = True
    value_formatter: ValueFormatter | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SparklineProps:
    """Compact inline chart props."""

    data: Sequence[float | None] = ()
    type: SparklineType = "line"
    width: int = 100
    height: int = 32
    color: str = tokens.PRIMARY[0]
    reference_line: float | ReferenceStatistic | None = None
    reference_line_color: str = tokens.STATUS_MAP["neutral"]
    show_min_max: bool = False
    min_color: str = tokens.STATUS_MAP["error"]
    max_color: str = tokens.STATUS_MAP["success"]
    animate: bool = True


@dataclass(frozen=True, slots=True)
class ChartDefinition:
    """A named, storable chart: a family plus the props to render it with.

    Args:
        slug: URL-safe identifier.
        family: Chart family name ("line", "bar", "donut", ...).
        props: Props dataclass of that family.
        description: Optional human-readable description.
    """

    slug: str
    family: str
    props: Any
    description: str = ""
