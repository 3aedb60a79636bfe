"""Shared catalog fixtures: a two-day UTC timeframe and a small nested plant with sensors and machines."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

import pytest

from catalog.models import Asset, DataPoint, DataSeries, Environment, System
from catalog.store import CatalogStore

START = datetime(2026, 1, 5, tzinfo=timezone.utc)


def hour(offset: int) -> datetime:
    """Return the UTC timestamp `offset` hours after the test timeframe start."""

    return START + timedelta(hours=offset)


def series(name: str, readings: dict[int, float]) -> DataSeries:
    """Build a DataSeries from `{hour offset: value}` readings."""

    return DataSeries(
        name=name,
        values=tuple(DataPoint(timestamp=hour(offset), value=value) for offset, value in readings.items()),
    )


@pytest.fixture
def timeframe() -> tuple[datetime, ...]:
    """Two days of hourly UTC timestamps."""

    return tuple(hour(offset) for offset in range(48))


@pytest.fixture
def sample_catalog(timeframe) -> CatalogStore:
    """Return a small catalog with a nested hierarchy and a shared asset.

    Hierarchy (environment in brackets)::

        s1 [env1]
        ├── s2 [env1]
        └── s3 [env1]
            └── s4 [env1]
        s5 [env2]

    `env3` has no systems. Asset `a3` belongs to both `s2` and `s3`.
    """

    s4 = System(id="s4", name="Chaufferie", environment_id="env1")
    s2 = System(id="s2", name="Ligne 1", environment_id="env1")
    s3 = System(id="s3", name="Utilités", environment_id="env1", children=(s4,))
    s1 = System(id="s1", name="Atelier", environment_id="env1", children=(s2, s3))
    s5 = System(id="s5", name="Quais", environment_id="env2")

    assets = [
        Asset(
            id="a1",
            label="Sonde atelier",
            system_ids=frozenset({"s1"}),
            data=(series("temperature", {0: 20.0, 1: 20.5, 2: 21.0}),),
        ),
        Asset(
            id="a2",
            label="Presse 01",
            system_ids=frozenset({"s2"}),
            data=(
                series("temperature", {0: 40.0, 2: 42.0}),
                series("output", {9: 3.0, 14: 4.0, 33: 5.0}),
            ),
        ),
        Asset(
            id="a3",
            label="Sonde partagée",
            system_ids=frozenset({"s2", "s3"}),
            data=(series("temperature", {1: 18.0}),),
        ),
        Asset(
            id="a4",
            label="Hygromètre",
            system_ids=frozenset({"s4"}),
            data=(series("humidity", {0: 45.0}),),
        ),
        Asset(
            id="a5",
            label="Convoyeur",
            system_ids=frozenset({"s5"}),
            data=(series("output", {10: 1.5}),),
        ),
    ]
    return CatalogStore(
        environments=[
            Environment(id="env1", name="Lyon"),
            Environment(id="env2", name="Nantes"),
            Environment(id="env3", name="Lille"),
        ],
        systems=[s1, s2, s3, s4, s5],
        assets=assets,
        timeframe=timeframe,
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Require exactly one of `unit` (pure catalog and analysis code) or `integration` (Django) per test."""

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
