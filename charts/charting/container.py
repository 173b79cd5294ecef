"""Chart container shell: loading, error and empty states around a chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from . import tokens
from .primitives import ChartPayload, payload_to_json
from .schema import ContainerVariant

ContainerState = Literal["loading", "error", "empty", "ready"]

DEFAULT_EMPTY_MESSAGE = "No data available"
ERROR_HEADING = "Error loading chart"

VARIANT_STYLES: dict[str, dict[str, str]] = {
    "default": {"width": "100%"},
    "outlined": {"width": "100%", "border": f"1px solid {tokens.GRAY[200]}", "border-radius": "8px", "padding": "16px"},
    "elevated": {
        "width": "100%",
        "box-shadow": "0 1px 3px rgba(0, 0, 0, 0.1)",
        "border-radius": "8px",
        "padding": "16px",
        "background-color": "#FFFFFF",
    },
}


def resolve_container_state(*, loading: bool, error: str | None, empty: bool) -> ContainerState:
    """Return the container state.

    Precedence is loading, then error, then empty; only a chart that is none
    of these is `ready`.
    """

    if loading:
        return "loading"
    if error:
        return "error"
    if empty:
        return "empty"
    return "ready"


def variant_style(variant: ContainerVariant) -> str:
    """Return the inline CSS for a container variant."""

    try:
        rules = VARIANT_STYLES[variant]
    except KeyError:
        raise ValueError(f"Unknown container variant: {variant!r}") from None
    return "; ".join(f"{name}: {value}" for name, value in rules.items())


@dataclass(frozen=True, slots=True)
class ChartContainer:
    """A resolved container shell.

    `chart` is only set in the `ready` state; the other states render a
    placeholder of the same height instead.
    """

    state: ContainerState
    height: int
    variant: ContainerVariant = "default"
    title: str | None = None
    subtitle: str | None = None
    empty_message: str = DEFAULT_EMPTY_MESSAGE
    error: str | None = None
    chart: ChartPayload | None = None

    @property
    def is_ready(self) -> bool:
        return self.state == "ready"

    @property
    def style(self) -> str:
        return variant_style(self.variant)

    @property
    def error_heading(self) -> str:
        return ERROR_HEADING

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation (chart payload included)."""

        return {
            "state": self.state,
            "height": self.height,
            "variant": self.variant,
            "title": self.title,
            "subtitle": self.subtitle,
            "emptyMessage": self.empty_message,
            "error": self.error,
            "chart": payload_to_json(self.chart) if self.chart is not None else None,
        }


def build_container(
    *,
    state: ContainerState,
    height: int,
    variant: ContainerVariant = "default",
    title: str | None = None,
    subtitle: str | None = None,
    empty_message: str | None = None,
    error: str | None = None,
    chart: ChartPayload | None = None,
) -> ChartContainer:
    """Build a ChartContainer, dropping the chart unless the state is `ready`."""

    return ChartContainer(
        state=state,
        height=height,
        variant=variant,
        title=title,
        subtitle=subtitle,
        empty_message=empty_message or DEFAULT_EMPTY_MESSAGE,
        error=error if state == "error" else None,
        chart=chart if state == "ready" else None,
    )
