"""Pytest fixtures shared across chart tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from charts import gallery


@pytest.fixture(autouse=True)
def _clear_gallery_cache():
    """Reload the gallery for every test so settings overrides take effect."""

    gallery._cached_gallery.cache_clear()
    yield
    gallery._cached_gallery.cache_clear()


@pytest.fixture
def write_gallery(tmp_path):
    """Return a helper that writes YAML text to a temporary gallery file."""

    def _write(text: str):
        path = tmp_path / "gallery.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request cycle.
    - `integration`: tests touching Django views, templates, settings, or files.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
