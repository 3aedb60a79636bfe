"""Pure derivation layer for the asset dashboard.

This package turns an in-memory `catalog.CatalogStore` snapshot into
chart-ready DTOs (distribution counts, per-asset line series, per-day bar
totals, axis labels). It must not import Django or perform any I/O.
"""

from .daily_output import daily_totals, machine_daily_output
from .distribution import assets_by_system, systems_by_environment
from .hierarchy import recursive_assets, stream_series_for_system
from .timeframe import daily_labels, hourly_labels

__all__ = [
    "assets_by_system",
    "daily_labels",
    "daily_totals",
    "hourly_labels",
    "machine_daily_output",
    "recursive_assets",
    "stream_series_for_system",
    "systems_by_environment",
]
