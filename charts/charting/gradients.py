"""Gradient resource identity for chart instances.

Gradient fills are referenced by id from the renderer's `defs` block. Ids must
be unique among every chart on a page, stay the same across re-renders of one
mounted chart, and change when a chart is remounted. A `GradientTable` is
owned by exactly one mounted instance and produces
``"{prefix}-{instance_token}-{index}"`` ids, where the token comes from a
process-wide monotonic counter.
"""

from __future__ import annotations

import itertools
import threading

from .primitives import GradientDef

_INSTANCE_TOKENS = itertools.count(1)
_TOKEN_LOCK = threading.Lock()

AREA_OPACITY = (0.4, 0.05)
LINE_FILL_OPACITY = (0.3, 0.0)
COMPOSED_LIGHT_OPACITY = (0.8, 0.1)
COMPOSED_DARK_OPACITY = (0.4, 0.05)


def next_instance_token() -> int:
    """Return the next process-wide instance token."""

    with _TOKEN_LOCK:
        return next(_INSTANCE_TOKENS)


class GradientTable:
    """Per-instance table of gradient ids.

    Ids are allocated lazily by position and never reassigned, so growing the
    series list extends the table while existing ids stay put.
    """

    def __init__(self, prefix: str = "gradient", *, token: int | None = None) -> None:
        self.prefix = prefix
        self.token = next_instance_token() if token is None else token
        self._ids: list[str] = []

    def __len__(self) -> int:
        return len(self._ids)

    def id_for(self, index: int) -> str:
        """Return the id for the series at `index`, allocating up to it."""

        if index < 0:
            raise ValueError(f"Gradient index must be non-negative, got {index}.")
        while len(self._ids) <= index:
            self._ids.append(f"{self.prefix}-{self.token}-{len(self._ids)}")
        return self._ids[index]

    def ids_for(self, count: int) -> list[str]:
        """Return ids for the first `count` series."""

        return [self.id_for(idx) for idx in range(max(count, 0))]


def linear_gradient(
    gradient_id: str,
    color: str,
    near_opacity: float,
    far_opacity: float,
    *,
    near_offset: str = "5%",
    far_offset: str = "95%",
) -> GradientDef:
    """Build a two-stop vertical gradient definition.

    Args:
        gradient_id: Id the marks reference through `gradientId`.
        color: Stop color (both stops share it).
        near_opacity: Opacity at the top stop.
        far_opacity: Opacity at the bottom stop.
        near_offset: Offset of the top stop.
        far_offset: Offset of the bottom stop.

    Returns:
        A GradientDef running top to bottom.
    """

    return {
        "id": gradient_id,
        "x1": "0",
        "y1": "0",
        "x2": "0",
        "y2": "1",
        "stops": [
            {"offset": near_offset, "color": color, "opacity": near_opacity},
            {"offset": far_offset, "color": color, "opacity": far_opacity},
        ],
    }
