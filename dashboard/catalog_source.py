"""Process-wide catalog snapshot for the dashboard views."""

from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from django.utils import timezone

from catalog.loader import load_catalog
from catalog.store import CatalogStore


@lru_cache(maxsize=1)
def get_catalog() -> CatalogStore:
    """Load the catalog named by `settings.ASSET_CATALOG_PATH` once per process.

    Naive catalog timestamps are read in the project `TIME_ZONE` unless the
    document declares its own zone. Views render labels in `catalog.timezone`.
    """

    return load_catalog(settings.ASSET_CATALOG_PATH, default_timezone=timezone.get_default_timezone())
