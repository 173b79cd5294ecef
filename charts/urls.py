"""URL configuration for chart views."""

from __future__ import annotations

from django.urls import path

from charts import views

app_name = "charts"

urlpatterns = [
    path("", views.gallery, name="gallery"),
    path("charts/<slug:slug>/", views.chart_detail, name="chart_detail"),
    path("api/charts/<slug:slug>/", views.chart_api, name="chart_api"),
]
