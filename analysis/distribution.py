"""Proportion-chart aggregations over the catalog."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from catalog.store import CatalogStore

from .dto import NameValue


def systems_by_environment(catalog: CatalogStore) -> tuple[NameValue, ...]:
    """Count Systems per Environment.

    Every System is counted once, in the bucket of its own `environment_id`.
    Environments without Systems are kept with a zero count.

    Args:
        catalog: Catalog snapshot.

    Returns:
        One NameValue per Environment, in catalog order.
    """

    counts = Counter(system.environment_id for system in catalog.systems)
    return tuple(
        NameValue(name=environment.name, value=counts.get(environment.id, 0))
        for environment in catalog.environments
    )


def assets_by_system(catalog: CatalogStore, system_ids: Iterable[str]) -> tuple[NameValue, ...]:
    """Count Assets linked to each requested System.

    An asset linked to several requested Systems is counted in each of their
    buckets. Unknown ids are skipped; a repeated id yields a single bucket.

    Args:
        catalog: Catalog snapshot.
        system_ids: Requested System ids, in display order.

    Returns:
        One NameValue per known requested System, in input order.
    """

    buckets: list[NameValue] = []
    seen: set[str] = set()
    for system_id in system_ids:
        if system_id in seen:
            continue
        seen.add(system_id)
        system = catalog.get_system(system_id)
        if system is None:
            continue
        count = sum(1 for asset in catalog.assets if system_id in asset.system_ids)
        buckets.append(NameValue(name=system.name, value=count))
    return tuple(buckets)
