"""Unit tests for catalog validation and normalization."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from analysis.alignment import align_bar_series
from analysis.daily_output import machine_daily_output
from analysis.timeframe import distinct_days
from catalog.errors import CatalogValidationError, SystemNotFoundError
from catalog.models import Asset, DataPoint, DataSeries, Environment, System
from catalog.store import CatalogStore

pytestmark = pytest.mark.unit

START = datetime(2026, 1, 5, tzinfo=timezone.utc)
TIMEFRAME = [START + timedelta(hours=offset) for offset in range(6)]
ENVIRONMENTS = [Environment(id="env1", name="Site")]
PARIS = ZoneInfo("Europe/Paris")


def _catalog(*, systems=(), assets=(), timeframe=TIMEFRAME, environments=ENVIRONMENTS) -> CatalogStore:
    return CatalogStore(environments=environments, systems=systems, assets=assets, timeframe=timeframe)


def test_timeframe_is_sorted_and_deduplicated() -> None:
    """The shared axis is ascending with unique timestamps."""

    catalog = _catalog(timeframe=[TIMEFRAME[2], TIMEFRAME[0], TIMEFRAME[1], TIMEFRAME[0]])
    assert catalog.timeframe == tuple(TIMEFRAME[:3])


def test_naive_timeframe_is_rejected() -> None:
    """Timestamps must carry a timezone."""

    with pytest.raises(CatalogValidationError, match="timezone-aware"):
        _catalog(timeframe=[datetime(2026, 1, 5)])


def test_series_are_sorted_on_load() -> None:
    """Readings are stored in ascending timestamp order."""

    system = System(id="s1", name="S1", environment_id="env1")
    asset = Asset(
        id="a1",
        label="A1",
        system_ids=frozenset({"s1"}),
        data=(
            DataSeries(
                name="temperature",
                values=(DataPoint(timestamp=TIMEFRAME[3], value=3.0), DataPoint(timestamp=TIMEFRAME[1], value=1.0)),
            ),
        ),
    )
    catalog = _catalog(systems=[system], assets=[asset])
    stored = catalog.assets[0].stream("temperature")
    assert stored is not None
    assert [point.value for point in stored.values] == [1.0, 3.0]


def test_reading_outside_timeframe_is_rejected() -> None:
    """Every reading must sit on the shared timeframe."""

    system = System(id="s1", name="S1", environment_id="env1")
    stray = DataPoint(timestamp=START - timedelta(hours=1), value=1.0)
    asset = Asset(id="a1", label="A1", system_ids=frozenset({"s1"}), data=(DataSeries(name="t", values=(stray,)),))
    with pytest.raises(CatalogValidationError, match="outside the timeframe"):
        _catalog(systems=[system], assets=[asset])


def test_duplicate_reading_timestamps_are_rejected() -> None:
    """A series cannot hold two readings for the same instant."""

    system = System(id="s1", name="S1", environment_id="env1")
    points = (DataPoint(timestamp=START, value=1.0), DataPoint(timestamp=START, value=2.0))
    asset = Asset(id="a1", label="A1", system_ids=frozenset({"s1"}), data=(DataSeries(name="t", values=points),))
    with pytest.raises(CatalogValidationError, match="duplicate readings"):
        _catalog(systems=[system], assets=[asset])


def test_timeframe_is_expressed_in_the_zone_of_its_first_timestamp() -> None:
    """Mixed-zone axes are converted to one zone so calendar days agree."""

    first = datetime(2026, 1, 5, 23, 0, tzinfo=PARIS)
    catalog = _catalog(timeframe=[(first + timedelta(hours=1)).astimezone(timezone.utc), first])

    assert catalog.timezone == PARIS
    assert [stamp.tzinfo for stamp in catalog.timeframe] == [PARIS, PARIS]
    assert distinct_days(catalog.timeframe) == (date(2026, 1, 5), date(2026, 1, 6))


def test_empty_timeframe_has_no_timezone() -> None:
    """Without timestamps there is no catalog zone."""

    assert _catalog(timeframe=[]).timezone is None


def test_readings_are_restamped_in_the_timeframe_zone() -> None:
    """A reading recorded in UTC lands on the Paris calendar day of its slot."""

    timeframe = [datetime(2026, 1, 5, tzinfo=PARIS) + timedelta(hours=offset) for offset in range(48)]
    paris_midnight = timeframe[24]
    reading = DataPoint(timestamp=paris_midnight.astimezone(timezone.utc), value=5.0)
    machine = Asset(
        id="m1",
        label="Presse",
        system_ids=frozenset({"s1"}),
        data=(DataSeries(name="output", values=(reading,)),),
    )
    catalog = _catalog(
        systems=[System(id="s1", name="S1", environment_id="env1")],
        assets=[machine],
        timeframe=timeframe,
    )

    stored = catalog.assets[0].stream("output")
    assert stored is not None
    assert stored.values[0].timestamp.tzinfo is PARIS
    assert stored.values[0].timestamp == paris_midnight

    bars = machine_daily_output(catalog.assets[0])
    assert [(total.day, total.total) for total in bars.points] == [(date(2026, 1, 6), 5.0)]
    assert align_bar_series(bars, distinct_days(catalog.timeframe)) == [None, 5.0]


def test_unknown_environment_is_rejected() -> None:
    """Systems must reference a known environment."""

    with pytest.raises(CatalogValidationError, match="unknown environment"):
        _catalog(systems=[System(id="s1", name="S1", environment_id="nope")])


def test_asset_with_unknown_system_is_rejected() -> None:
    """Assets must reference known systems."""

    with pytest.raises(CatalogValidationError, match="unknown systems: s9"):
        _catalog(assets=[Asset(id="a1", label="A1", system_ids=frozenset({"s9"}))])


def test_duplicate_ids_are_rejected() -> None:
    """Environment and asset ids are unique."""

    with pytest.raises(CatalogValidationError, match="Duplicate environment id"):
        _catalog(environments=[Environment(id="env1", name="A"), Environment(id="env1", name="B")])
    with pytest.raises(CatalogValidationError, match="Duplicate asset id"):
        _catalog(assets=[Asset(id="a1", label="A"), Asset(id="a1", label="B")])


def test_conflicting_system_definitions_are_rejected() -> None:
    """Two different systems cannot share an id."""

    with pytest.raises(CatalogValidationError, match="conflicting definitions"):
        _catalog(
            systems=[
                System(id="s1", name="S1", environment_id="env1"),
                System(id="s1", name="Other", environment_id="env1"),
            ]
        )


def test_system_with_two_parents_is_rejected() -> None:
    """The hierarchy is a forest: one parent per system."""

    child = System(id="c", name="C", environment_id="env1")
    parents = [
        System(id="p1", name="P1", environment_id="env1", children=(child,)),
        System(id="p2", name="P2", environment_id="env1", children=(child,)),
    ]
    with pytest.raises(CatalogValidationError, match="more than one parent"):
        _catalog(systems=parents)


def test_unlisted_descendants_are_indexed_after_listed_systems() -> None:
    """Children reachable from listed systems are part of the catalog."""

    grandchild = System(id="g", name="G", environment_id="env1")
    child = System(id="c", name="C", environment_id="env1", children=(grandchild,))
    root = System(id="r", name="R", environment_id="env1", children=(child,))
    other = System(id="o", name="O", environment_id="env1")

    catalog = _catalog(systems=[root, other])
    assert [system.id for system in catalog.systems] == ["r", "o", "c", "g"]
    assert catalog.get_system("g") is grandchild


def test_system_lookups(sample_catalog) -> None:
    """Optional lookup returns None; strict lookup raises."""

    assert sample_catalog.get_system("unknown") is None
    assert sample_catalog.require_system("s3").name == "Utilités"
    with pytest.raises(SystemNotFoundError, match="unknown"):
        sample_catalog.require_system("unknown")


def test_assets_owned_by_returns_direct_members(sample_catalog) -> None:
    """Ownership is direct membership in `system_ids`."""

    assert [asset.id for asset in sample_catalog.assets_owned_by("s2")] == ["a2", "a3"]
    assert sample_catalog.assets_owned_by("s1")[0].id == "a1"
    assert sample_catalog.assets_owned_by("unknown") == ()
