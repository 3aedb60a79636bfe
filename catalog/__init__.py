"""In-memory asset catalog.

This package holds the immutable Environment/System/Asset records and the
shared Timeframe they are measured against. It must not import Django; the
dashboard app loads a catalog once per process and hands it to `analysis`.
"""

from .models import Asset, DataPoint, DataSeries, Environment, System
from .store import CatalogStore

__all__ = ["Asset", "CatalogStore", "DataPoint", "DataSeries", "Environment", "System"]
