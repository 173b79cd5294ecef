"""Design tokens for chart rendering.

Every composer reads its palettes, typography, sizing and theme colors from
this module so that charts stay visually consistent. Tokens are immutable;
callers override colors per chart through `colors=` props instead of mutating
these values.
"""

from __future__ import annotations

from typing import Final, Literal, Mapping

ThemeMode = Literal["light", "dark"]

BRAND_NAVY: Final[str] = "#050742"
BRAND_PURPLE: Final[str] = "#7841C9"
BRAND_CORAL: Final[str] = "#FF6150"

GRAY: Final[Mapping[int, str]] = {
    0: "#FFFFFF",
    50: "#FAFAFA",
    100: "#F4F4F5",
    200: "#E5E7EB",
    300: "#D4D4D8",
    400: "#9CA3AF",
    500: "#6B7280",
    600: "#374151",
    700: "#27272A",
    800: "#18181B",
    900: "#09090B",
}

INDIGO: Final[Mapping[int, str]] = {
    50: "#EDE7FD",
    100: "#D2C3FA",
    200: "#B49CF6",
    300: "#9574F2",
    400: "#7E57F0",
    500: "#6739ED",
    600: "#5F33EB",
    700: "#542CE8",
    800: "#4A24E5",
    900: "#3816A0",
}

DARK_PAPER: Final[str] = GRAY[700]
ON_DARK_EMPHASIS: Final[str] = "rgba(255, 255, 255, 0.08)"
ON_DARK_DIVIDER: Final[str] = "rgba(255, 255, 255, 0.12)"

# Palettes ---------------------------------------------------------------

PRIMARY: Final[tuple[str, ...]] = (
    BRAND_PURPLE,
    BRAND_CORAL,
    BRAND_NAVY,
    "#24A148",
    "#F59E0B",
    "#3B82F6",
    "#8B5CF6",
    "#EC4899",
    "#14B8A6",
    "#F97316",
)

CATEGORICAL: Final[tuple[str, ...]] = (
    "#7841C9",
    "#FF6150",
    "#3B82F6",
    "#24A148",
    "#F59E0B",
    "#EC4899",
    "#14B8A6",
    "#8B5CF6",
    "#F97316",
    "#6366F1",
)

SEQUENTIAL: Final[tuple[str, ...]] = tuple(INDIGO[step] for step in (50, 100, 200, 300, 400, 500, 600, 700, 800, 900))

DIVERGING: Final[tuple[str, ...]] = (
    "#FF6150",
    "#FF8D85",
    "#FFD7D4",
    "#F5F5F5",
    "#D2C3FA",
    "#9574F2",
    "#7841C9",
)

STATUS_MAP: Final[Mapping[str, str]] = {
    "success": "#24A148",
    "warning": "#F59E0B",
    "error": "#DA1E28",
    "info": "#3B82F6",
    "neutral": GRAY[500],
}

# Ordered success, warning, error, info.
STATUS: Final[tuple[str, ...]] = (
    STATUS_MAP["success"],
    STATUS_MAP["warning"],
    STATUS_MAP["error"],
    STATUS_MAP["info"],
)

PALETTES: Final[Mapping[str, tuple[str, ...]]] = {
    "primary": PRIMARY,
    "categorical": CATEGORICAL,
    "sequential": SEQUENTIAL,
    "diverging": DIVERGING,
    "status": STATUS,
}

# Typography -------------------------------------------------------------

FONT_FAMILY: Final[str] = '"Montserrat", sans-serif'

TYPOGRAPHY: Final[Mapping[str, Mapping[str, object]]] = {
    "title": {"fontSize": 16, "fontWeight": 600, "fill": GRAY[900]},
    "subtitle": {"fontSize": 13, "fontWeight": 400, "fill": GRAY[500]},
    "axisLabel": {"fontSize": 12, "fontWeight": 500, "fill": GRAY[600]},
    "axisTick": {"fontSize": 11, "fontWeight": 400, "fill": GRAY[500]},
    "legend": {"fontSize": 12, "fontWeight": 500, "fill": GRAY[700]},
    "tooltip": {"fontSize": 12, "fontWeight": 400, "fill": GRAY[700]},
    "tooltipLabel": {"fontSize": 13, "fontWeight": 600, "fill": GRAY[900]},
    "dataLabel": {"fontSize": 11, "fontWeight": 500, "fill": GRAY[700]},
}

# Spacing & sizing -------------------------------------------------------

SPACING: Final[Mapping[str, int]] = {"xs": 4, "sm": 8, "md": 12, "lg": 16, "xl": 24, "xxl": 32}

MIN_HEIGHT: Final[int] = 200
DEFAULT_HEIGHT: Final[int] = 300
MAX_HEIGHT: Final[int] = 600

STROKE_WIDTH: Final[Mapping[str, int]] = {"thin": 1, "default": 2, "thick": 3}
DOT_SIZE: Final[Mapping[str, int]] = {"small": 4, "default": 6, "large": 8}

BAR_RADIUS: Final[int] = 4
BAR_MAX_WIDTH: Final[int] = 60
DONUT_INNER_RATIO: Final[float] = 0.6
PIE_OUTER_PADDING: Final[int] = 8

DEFAULT_MARGIN: Final[Mapping[str, int]] = {"top": 20, "right": 30, "left": 20, "bottom": 20}

# Grid, axis, tooltip, legend --------------------------------------------

GRID_STYLES: Final[Mapping[str, object]] = {
    "stroke": GRAY[200],
    "strokeDasharray": "3 3",
    "strokeWidth": 1,
    "light": {"stroke": GRAY[200], "strokeOpacity": 1},
    "dark": {"stroke": GRAY[700], "strokeOpacity": 0.5},
}

AXIS_STYLES: Final[Mapping[str, object]] = {
    "stroke": GRAY[300],
    "strokeWidth": 1,
    "tickSize": 6,
    "tickPadding": 8,
    "tickFontSize": 11,
    "labelFontSize": 12,
    "light": {"lineColor": GRAY[300], "lineOpacity": 1, "tickColor": GRAY[500]},
    "dark": {"lineColor": GRAY[600], "lineOpacity": 0.5, "tickColor": GRAY[400]},
}

TOOLTIP_STYLES: Final[Mapping[str, object]] = {
    "backgroundColor": "#FFFFFF",
    "borderColor": GRAY[200],
    "borderRadius": 8,
    "boxShadow": "0 4px 12px rgba(0, 0, 0, 0.1)",
    "padding": "12px 16px",
}

LEGEND_STYLES: Final[Mapping[str, object]] = {
    "iconSize": 12,
    "iconType": "circle",
    "itemGap": 24,
    "verticalAlign": "bottom",
    "align": "center",
    "paddingTop": 16,
}

ANIMATION_DURATION: Final[int] = 400
ANIMATION_EASING: Final[str] = "ease-out"
ANIMATION: Final[Mapping[str, object]] = {"duration": ANIMATION_DURATION, "easing": ANIMATION_EASING}

ACCESSIBILITY: Final[Mapping[str, object]] = {
    "minContrastRatio": 4.5,
    "focusRing": {"color": BRAND_PURPLE, "width": 2, "offset": 2},
}

THEMES: Final[Mapping[ThemeMode, Mapping[str, object]]] = {
    "light": {
        "background": "#FFFFFF",
        "text": GRAY[900],
        "textSecondary": GRAY[500],
        "grid": GRAY[200],
        "axis": GRAY[300],
        "tooltip": {"background": "#FFFFFF", "border": GRAY[200], "text": GRAY[700]},
    },
    "dark": {
        "background": DARK_PAPER,
        "text": "#FFFFFF",
        "textSecondary": GRAY[400],
        "grid": ON_DARK_EMPHASIS,
        "axis": ON_DARK_DIVIDER,
        "tooltip": {"background": DARK_PAPER, "border": ON_DARK_EMPHASIS, "text": GRAY[300]},
    },
}


def color(index: int) -> str:
    """Return a primary palette color, wrapping around for any index.

    Args:
        index: Series index. Any integer is accepted, including negative values.

    Returns:
        A hex color string from `PRIMARY`.
    """

    return PRIMARY[index % len(PRIMARY)]


def colors(count: int) -> list[str]:
    """Return `count` consecutive primary palette colors."""

    return [color(i) for i in range(max(count, 0))]


def resolve_style(token_key: str, mode: ThemeMode = "light") -> object:
    """Resolve a dotted semantic style key for a theme mode.

    Keys address `THEMES[mode]` first (e.g. "tooltip.background"), then the
    mode-aware grid/axis styles (e.g. "grid.stroke", "axis.tickColor").

    Args:
        token_key: Dotted key such as "grid.stroke" or "text".
        mode: Theme mode, "light" or "dark".

    Returns:
        The concrete token value.

    Raises:
        KeyError: When the key does not resolve for the given mode.
    """

    if mode not in THEMES:
        raise KeyError(f"Unknown theme mode: {mode!r}")

    head, _, rest = token_key.partition(".")
    sources: dict[str, object] = {
        "grid": GRID_STYLES[mode],
        "axis": AXIS_STYLES[mode],
    }
    if head in sources and rest and rest in sources[head]:  # type: ignore[operator]
        return sources[head][rest]  # type: ignore[index]

    node: object = THEMES[mode]
    for part in token_key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            raise KeyError(f"Unknown style token {token_key!r} for mode {mode!r}")
        node = node[part]
    return node
