"""Explicit joins of derived series onto chart axes.

Series produced by `analysis.hierarchy` and `analysis.daily_output` keep their
own point order and may be sparse. Charts pair them with axis labels, so the
pairing is done here by key instead of by position.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from datetime import date, datetime

from .dto import BarSeries, LineSeries


def _join(values_by_key: Mapping[Hashable, float], axis: Sequence[Hashable]) -> list[float | None]:
    return [values_by_key.get(key) for key in axis]


def align_line_series(series: LineSeries, axis: Sequence[datetime]) -> list[float | None]:
    """Return the series values at each axis timestamp, None where missing."""

    return _join({point.timestamp: point.value for point in series.points}, axis)


def align_bar_series(series: BarSeries, axis: Sequence[date]) -> list[float | None]:
    """Return the daily totals at each axis day, None for days without readings."""

    return _join({point.day: point.total for point in series.points}, axis)
