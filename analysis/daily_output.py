"""Per-day totals of a machine's production readings."""

from __future__ import annotations

from datetime import date

from catalog.errors import MissingStreamError
from catalog.models import Asset, DataSeries
from catalog.store import CatalogStore

from .dto import BarSeries, DailyTotal


OUTPUT_STREAM = "output"


def find_stream(asset: Asset, name: str) -> DataSeries | None:
    """Return the asset's first `name` data series, or None when absent."""

    return asset.stream(name)


def daily_totals(series: DataSeries) -> tuple[DailyTotal, ...]:
    """Sum a series' readings per calendar day.

    Days follow first-occurrence order in the series. Days without readings
    do not appear; no rounding is applied to the sums.

    Args:
        series: A data series whose timestamps share the display timezone.

    Returns:
        One DailyTotal per day that has at least one reading.
    """

    totals: dict[date, float] = {}
    for point in series.values:
        day = point.timestamp.date()
        totals[day] = totals.get(day, 0.0) + point.value
    return tuple(DailyTotal(day=day, total=total) for day, total in totals.items())


def machine_daily_output(asset: Asset, *, stream: str = OUTPUT_STREAM) -> BarSeries:
    """Build the per-day output bar series for a producing machine.

    Args:
        asset: The machine asset.
        stream: Name of the production stream (defaults to "output").

    Returns:
        BarSeries labelled with the asset label.

    Raises:
        MissingStreamError: When the asset has no `stream` data series.
    """

    series = find_stream(asset, stream)
    if series is None:
        raise MissingStreamError(asset_id=asset.id, stream=stream)
    return BarSeries(label=asset.label, points=daily_totals(series))


def machines_in_system(catalog: CatalogStore, system_id: str) -> tuple[Asset, ...]:
    """Return assets directly linked to `system_id` (not its descendants)."""

    return tuple(asset for asset in catalog.assets if system_id in asset.system_ids)
