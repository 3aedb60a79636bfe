"""Series built from a System and all of its descendants."""

from __future__ import annotations

from collections.abc import Iterable

from catalog.models import Asset, System
from catalog.store import CatalogStore

from .dto import LineSeries


def recursive_assets(catalog: CatalogStore, system: System) -> tuple[Asset, ...]:
    """Return every Asset owned by `system` or one of its descendants.

    The subtree is walked depth-first in pre-order. An asset shared by several
    Systems of the subtree is kept once, at its first discovery.

    Args:
        catalog: Catalog snapshot providing direct ownership.
        system: Root of the subtree.

    Returns:
        De-duplicated assets in first-discovery order.
    """

    collected: list[Asset] = []
    seen_assets: set[str] = set()
    seen_systems: set[str] = set()
    stack = [system]
    while stack:
        current = stack.pop()
        if current.id in seen_systems:
            continue
        seen_systems.add(current.id)
        for asset in catalog.assets_owned_by(current.id):
            if asset.id not in seen_assets:
                seen_assets.add(asset.id)
                collected.append(asset)
        stack.extend(reversed(current.children))
    return tuple(collected)


def assets_with_stream(assets: Iterable[Asset], stream: str) -> tuple[Asset, ...]:
    """Keep only the assets that carry at least one `stream` data series."""

    return tuple(asset for asset in assets if asset.has_stream(stream))


def stream_series_for_system(catalog: CatalogStore, system_id: str, stream: str) -> tuple[LineSeries, ...]:
    """Build one line series per asset of a System subtree carrying `stream`.

    Points keep the series' own recorded order; they are not re-aligned to an
    axis here (see `analysis.alignment`).

    Args:
        catalog: Catalog snapshot.
        system_id: Root System id.
        stream: Data series name, e.g. "temperature".

    Returns:
        Line series keyed by asset label; empty when no asset qualifies.

    Raises:
        SystemNotFoundError: When `system_id` is not in the catalog.
    """

    system = catalog.require_system(system_id)
    series: list[LineSeries] = []
    for asset in assets_with_stream(recursive_assets(catalog, system), stream):
        matching = asset.stream(stream)
        assert matching is not None
        series.append(LineSeries(label=asset.label, points=matching.values))
    return tuple(series)


def asset_labels_for_system(catalog: CatalogStore, system_id: str, stream: str) -> tuple[str, ...]:
    """Return the legend labels of `stream_series_for_system` for the same inputs."""

    system = catalog.require_system(system_id)
    return tuple(asset.label for asset in assets_with_stream(recursive_assets(catalog, system), stream))
