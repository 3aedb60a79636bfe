"""Axis-label helpers derived from the shared Timeframe.

The Timeframe is a single ascending sequence of timestamps that every asset's
data series is measured against. These helpers slice it into the hourly window
and the distinct calendar days used as chart x-axes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime


HOURLY_WINDOW = 24

LabelFormatter = Callable[[datetime], str]


def iso_hour_label(stamp: datetime) -> str:
    """Locale-free hour label, e.g. `2026-01-05 09:00`."""

    return stamp.strftime("%Y-%m-%d %H:%M")


def iso_day_label(stamp: datetime) -> str:
    """Locale-free day label, e.g. `2026-01-05`."""

    return stamp.date().isoformat()


def hourly_window(timeframe: Sequence[datetime], *, hours: int = HOURLY_WINDOW) -> tuple[datetime, ...]:
    """Return the first `hours` timestamps of the Timeframe.

    A shorter Timeframe is truncated silently rather than treated as an error.
    """

    if hours < 0:
        raise ValueError("hours must be non-negative.")
    return tuple(timeframe[:hours])


def hourly_labels(
    timeframe: Sequence[datetime],
    *,
    formatter: LabelFormatter = iso_hour_label,
    hours: int = HOURLY_WINDOW,
) -> tuple[str, ...]:
    """Format the first `hours` timestamps as hour labels.

    Args:
        timeframe: Ascending shared timestamps.
        formatter: Display formatter for a single timestamp.
        hours: Window size (24 for the standard one-day axis).

    Returns:
        Up to `hours` labels; fewer when the Timeframe is shorter.
    """

    return tuple(formatter(stamp) for stamp in hourly_window(timeframe, hours=hours))


def day_starts(timeframe: Sequence[datetime]) -> tuple[datetime, ...]:
    """Return the first timestamp of each calendar day, in first-occurrence order."""

    first_by_day: dict[date, datetime] = {}
    for stamp in timeframe:
        first_by_day.setdefault(stamp.date(), stamp)
    return tuple(first_by_day.values())


def distinct_days(timeframe: Sequence[datetime]) -> tuple[date, ...]:
    """Return the distinct calendar days of the Timeframe in first-occurrence order."""

    return tuple(stamp.date() for stamp in day_starts(timeframe))


def daily_labels(
    timeframe: Sequence[datetime],
    *,
    formatter: LabelFormatter = iso_day_label,
) -> tuple[str, ...]:
    """Map every timestamp to its day label and keep each label once.

    The Timeframe is expected to be sorted (the catalog sorts it on load);
    labels keep first-occurrence order.
    """

    return tuple(dict.fromkeys(formatter(stamp) for stamp in timeframe))
