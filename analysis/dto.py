"""DTO types returned by the derivation layer.

DTOs are plain data containers used to transport derived results to the
dashboard. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from catalog.models import DataPoint


@dataclass(frozen=True, slots=True)
class NameValue:
    """One slice of a proportion (pie/donut) chart.

    Attributes:
        name: Bucket display name.
        value: Count of members in the bucket.
    """

    name: str
    value: int


@dataclass(frozen=True, slots=True)
class LineSeries:
    """One asset's readings for a single named stream.

    Attributes:
        label: Asset label used as the series name.
        points: Readings in recorded (ascending timestamp) order.
    """

    label: str
    points: tuple[DataPoint, ...] = ()

    @property
    def values(self) -> tuple[float, ...]:
        """Raw reading values in recorded order, not aligned to any axis."""

        return tuple(point.value for point in self.points)


@dataclass(frozen=True, slots=True)
class DailyTotal:
    """Sum of one stream's readings over a calendar day.

    Attributes:
        day: Calendar day of the readings.
        total: Floating-point sum of the day's readings.
    """

    day: date
    total: float


@dataclass(frozen=True, slots=True)
class BarSeries:
    """One machine's per-day totals.

    Attributes:
        label: Machine label used as the series name.
        points: Per-day totals in first-occurrence day order.
    """

    label: str
    points: tuple[DailyTotal, ...] = ()

    @property
    def values(self) -> tuple[float, ...]:
        """Daily totals in day order; days without readings are absent."""

        return tuple(point.total for point in self.points)
