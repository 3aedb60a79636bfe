"""App configuration for the dashboard Django app."""

from __future__ import annotations

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Configuration for the `dashboard` app."""

    name = "dashboard"
    verbose_name = "Asset dashboard"
