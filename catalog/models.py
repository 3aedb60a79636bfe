"""Immutable record types held by the catalog.

Records are plain frozen dataclasses so they can be shared freely between the
catalog, the analysis layer and the dashboard without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


Timeframe = tuple[datetime, ...]


@dataclass(frozen=True, slots=True)
class Environment:
    """Top-level grouping of Systems, typically a physical site.

    Attributes:
        id: Stable environment id.
        name: Display name.
    """

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class System:
    """A hierarchical grouping of Assets and sub-Systems.

    Attributes:
        id: Stable system id.
        name: Display name.
        environment_id: Id of the owning Environment.
        children: Direct sub-Systems, in catalog order.
    """

    id: str
    name: str
    environment_id: str
    children: tuple["System", ...] = ()


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single reading on the shared Timeframe.

    Attributes:
        timestamp: Timezone-aware instant; always a Timeframe member.
        value: Numeric reading.
    """

    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class DataSeries:
    """A named, time-ordered stream of readings (e.g. "temperature").

    Attributes:
        name: Stream name.
        values: Readings in ascending timestamp order.
    """

    name: str
    values: tuple[DataPoint, ...] = ()


@dataclass(frozen=True, slots=True)
class Asset:
    """A monitored entity (sensor, machine) producing named data streams.

    Attributes:
        id: Stable asset id.
        label: Display label used as the chart series name.
        system_ids: Ids of every System the asset belongs to.
        data: Named data streams observed on the asset.
    """

    id: str
    label: str
    system_ids: frozenset[str] = frozenset()
    data: tuple[DataSeries, ...] = ()

    def stream(self, name: str) -> DataSeries | None:
        """Return the first DataSeries named `name`, or None."""

        for series in self.data:
            if series.name == name:
                return series
        return None

    def has_stream(self, name: str) -> bool:
        """Return whether the asset carries at least one `name` stream."""

        return any(series.name == name for series in self.data)
