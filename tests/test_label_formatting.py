"""Integration tests for Django-localized axis labels."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from django.test import override_settings

from analysis.timeframe import daily_labels, hourly_labels
from dashboard.formatting import localized_formatter

pytestmark = pytest.mark.integration

STAMP = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)


@override_settings(TIME_ZONE="Europe/Paris")
def test_formatter_converts_to_display_timezone() -> None:
    """Aware timestamps are shown in the project timezone."""

    formatter = localized_formatter(locale="en", date_format="Y-m-d H:i")
    assert formatter(STAMP) == "2026-01-05 09:00"


@override_settings(TIME_ZONE="UTC")
def test_formatter_resolves_locale_format_names() -> None:
    """Format names such as DATE_FORMAT are resolved in the display locale."""

    french = localized_formatter(locale="fr", date_format="DATE_FORMAT")
    assert french(STAMP).lower() == "5 janvier 2026"

    english = localized_formatter(locale="en", date_format="F j, Y")
    assert english(STAMP) == "January 5, 2026"


@override_settings(TIME_ZONE="UTC")
def test_localized_formatters_drive_axis_labels() -> None:
    """The pure label helpers accept the localized formatters."""

    timeframe = tuple(STAMP.replace(hour=hour) for hour in range(3))
    hour_formatter = localized_formatter(locale="en", date_format="H:i")
    day_formatter = localized_formatter(locale="fr", date_format="j F")

    assert hourly_labels(timeframe, formatter=hour_formatter) == ("00:00", "01:00", "02:00")
    assert [label.lower() for label in daily_labels(timeframe, formatter=day_formatter)] == ["5 janvier"]


@override_settings(TIME_ZONE="Europe/Paris")
def test_formatter_renders_in_explicit_zone() -> None:
    """An explicit zone wins over the project timezone."""

    tokyo = ZoneInfo("Asia/Tokyo")
    formatter = localized_formatter(locale="en", date_format="Y-m-d H:i", zone=tokyo)
    timeframe = tuple(datetime(2026, 1, 5, tzinfo=tokyo) + timedelta(hours=offset) for offset in range(48))

    assert formatter(STAMP) == "2026-01-05 17:00"
    assert daily_labels(timeframe, formatter=localized_formatter(locale="en", date_format="Y-m-d", zone=tokyo)) == (
        "2026-01-05",
        "2026-01-06",
    )
