"""Renderer payload types emitted by the chart composers.

Composers never draw. They emit these declarative primitives, which the
external 2D charting renderer consumes. Everything here is a plain dict so a
payload can be serialized to JSON (after `payload_to_json` strips the Python
callables such as tick formatters).
"""

from __future__ import annotations

from typing import Any, TypedDict

from . import tokens


class AnimationSpec(TypedDict):
    """Declarative animation parameters; the renderer schedules frames."""

    active: bool
    duration: int
    easing: str


class GradientStop(TypedDict):
    """A single gradient stop."""

    offset: str
    color: str
    opacity: float


class GradientDef(TypedDict):
    """A vertical linear gradient definition referenced by id."""

    id: str
    x1: str
    y1: str
    x2: str
    y2: str
    stops: list[GradientStop]


class AxisSpec(TypedDict, total=False):
    """A resolved axis."""

    id: str
    side: str
    type: str
    dataKey: str | None
    label: dict[str, Any] | None
    domain: list[Any] | None
    tickCount: int | None
    tickFormatter: Any
    tickLabels: list[str]
    hide: bool
    angle: int | None
    textAnchor: str
    height: int
    width: int
    unit: str | None
    orientation: str
    tick: dict[str, Any]
    axisLine: dict[str, Any]
    tickLine: dict[str, Any] | bool
    range: list[float]


class GridSpec(TypedDict, total=False):
    """Cartesian grid lines."""

    stroke: str
    strokeDasharray: str
    strokeOpacity: float
    horizontal: bool
    vertical: bool


class LegendSpec(TypedDict, total=False):
    """Legend placement plus resolved entries."""

    verticalAlign: str
    align: str
    layout: str
    entries: list[dict[str, Any]]
    formatter: Any


class TooltipSpec(TypedDict, total=False):
    """Tooltip behavior; hover content is computed per event."""

    show: bool
    showTotal: bool
    cursor: dict[str, Any] | bool
    valueFormatter: Any
    labelFormatter: Any
    seriesFormatters: dict[str, Any]
    labels: dict[str, Any]


class ReferenceSpec(TypedDict, total=False):
    """A reference line or area overlay."""

    kind: str
    x: Any
    y: Any
    x1: Any
    x2: Any
    y1: Any
    y2: Any
    yAxisId: str
    stroke: str
    strokeDasharray: str
    strokeWidth: int
    fill: str
    fillOpacity: float
    label: dict[str, Any] | None
    layer: str


class Mark(TypedDict, total=False):
    """One data-layer primitive (line, bar, area, sector, scatter, radial bar)."""

    kind: str
    key: str
    dataKey: str
    name: str
    stroke: str
    strokeWidth: float
    strokeDasharray: str | None
    fill: str
    fillOpacity: float
    gradientId: str | None
    stackId: str | None
    radius: int | list[int]
    maxBarSize: int
    curve: str
    connectNulls: bool
    dot: dict[str, Any] | bool
    activeDot: dict[str, Any] | None
    yAxisId: str
    data: list[Any]
    cells: list[dict[str, Any]]
    label: dict[str, Any] | bool
    labelLine: dict[str, Any] | bool
    background: dict[str, Any]
    cornerRadius: int
    clickable: bool
    hidden: bool


class ChartPayload(TypedDict, total=False):
    """The full renderer payload for one chart."""

    family: str
    layout: str
    data: list[dict[str, Any]]
    margin: dict[str, int]
    width: int | str
    height: int
    marks: list[Mark]
    axes: list[AxisSpec]
    grid: GridSpec | None
    legend: LegendSpec | None
    tooltip: TooltipSpec | None
    defs: list[GradientDef]
    references: list[ReferenceSpec]
    animation: AnimationSpec
    ariaLabel: str
    options: dict[str, Any]


def payload_to_json(value: Any) -> Any:
    """Return a JSON-serializable copy of a payload, dropping callables.

    Args:
        value: A payload (or any nested part of one).

    Returns:
        The same structure with dict entries holding callables removed and
        tuples converted to lists.
    """

    if isinstance(value, dict):
        return {key: payload_to_json(item) for key, item in value.items() if not callable(item)}
    if isinstance(value, (list, tuple)):
        return [payload_to_json(item) for item in value if not callable(item)]
    return value


def animation_spec(active: bool, duration: int, easing: str = tokens.ANIMATION_EASING) -> AnimationSpec:
    """Return the declarative animation block for a payload."""

    return {"active": bool(active), "duration": int(duration), "easing": easing}


def base_payload(
    *,
    family: str,
    props: Any,
    default_label: str,
    layout: str = "horizontal",
    margin: dict[str, int] | None = None,
) -> ChartPayload:
    """Return the payload fields every family shares.

    Args:
        family: Chart family name.
        props: Family props; read for size, animation and accessibility fields.
        default_label: Accessibility label used when neither `aria_label` nor `title` is set.
        layout: Renderer layout.
        margin: Plot margin, when the family uses one.

    Returns:
        A partially filled ChartPayload with empty marks, axes, defs and references.
    """

    payload: ChartPayload = {
        "family": family,
        "layout": layout,
        "width": props.width,
        "height": props.height,
        "marks": [],
        "axes": [],
        "grid": None,
        "legend": None,
        "tooltip": None,
        "defs": [],
        "references": [],
        "animation": animation_spec(props.animate, props.animation_duration),
        "ariaLabel": props.aria_label or props.title or default_label,
        "options": {},
    }
    if margin is not None:
        payload["margin"] = dict(margin)
    return payload
