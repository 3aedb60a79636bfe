"""URL configuration for dashboard views."""

from __future__ import annotations

from django.urls import path

from dashboard import views

app_name = "dashboard"

urlpatterns = [
    path("api/dashboard/", views.dashboard_api, name="dashboard_api"),
    path("api/systems/<str:system_id>/series/", views.system_series_api, name="system_series_api"),
]
