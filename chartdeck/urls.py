"""URL configuration for chartdeck."""

from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("", include("charts.urls")),
]
