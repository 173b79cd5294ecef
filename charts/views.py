"""Views for the chart gallery."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render

from charts.charting.container import ChartContainer
from charts.charting.instance import ChartInstance
from charts.charting.schema import ChartDefinition, ThemeContext
from charts.gallery import get_definition, get_gallery

logger = logging.getLogger(__name__)

THEME_MODES = ("light", "dark")


def _theme(request: HttpRequest) -> ThemeContext:
    """Return the active theme: `?theme=` when valid, else `CHARTDECK_THEME_MODE`."""

    requested = (request.GET.get("theme") or "").strip().lower()
    if requested in THEME_MODES:
        return ThemeContext(mode=requested)  # type: ignore[arg-type]
    mode = getattr(settings, "CHARTDECK_THEME_MODE", "light")
    return ThemeContext(mode=mode if mode in THEME_MODES else "light")


def _render_definition(definition: ChartDefinition, theme: ThemeContext) -> ChartContainer:
    instance = ChartInstance(definition.family)
    try:
        return instance.render(definition.props, theme)
    finally:
        instance.unmount()


def _chart_context(definition: ChartDefinition, theme: ThemeContext) -> dict[str, Any]:
    container = _render_definition(definition, theme)
    return {
        "definition": definition,
        "container": container,
        "payload": container.to_dict(),
        "element_id": f"chart-{definition.slug}",
        "data_element_id": f"chart-{definition.slug}-data",
    }


def gallery(request: HttpRequest) -> HttpResponse:
    """Render every built-in chart through the container shell."""

    theme = _theme(request)
    charts = [_chart_context(definition, theme) for definition in get_gallery()]
    return render(request, "charts/gallery.html", {"charts": charts, "theme": theme})


def chart_detail(request: HttpRequest, slug: str) -> HttpResponse:
    """Render a single gallery chart."""

    definition = get_definition(slug)
    if definition is None:
        raise Http404(f"Unknown chart: {slug}")
    theme = _theme(request)
    return render(request, "charts/chart_detail.html", {"chart": _chart_context(definition, theme), "theme": theme})


def chart_api(request: HttpRequest, slug: str) -> JsonResponse:
    """Return the resolved container and chart payload for `slug` as JSON."""

    definition = get_definition(slug)
    if definition is None:
        logger.debug("Chart API request for unknown slug %r", slug)
        return JsonResponse({"error": f"Unknown chart: {slug}"}, status=404)
    container = _render_definition(definition, _theme(request))
    payload = container.to_dict()
    return JsonResponse(
        {
            "slug": definition.slug,
            "family": definition.family,
            "description": definition.description,
            "container": {key: value for key, value in payload.items() if key != "chart"},
            "chart": payload["chart"],
        }
    )
