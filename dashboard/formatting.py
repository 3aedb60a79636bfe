"""Localized axis-label formatters.

Labels are rendered with Django's locale formats in a fixed display locale,
independent of the request language.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo

from django.utils import formats, timezone, translation


def localized_formatter(
    *,
    locale: str,
    date_format: str,
    zone: tzinfo | None = None,
) -> Callable[[datetime], str]:
    """Return a formatter rendering timestamps in `locale`.

    Args:
        locale: Language code used for month/day names and format names.
        date_format: Django date format string, or a format setting name such
            as "DATE_FORMAT" resolved in `locale`.
        zone: Timezone labels are rendered in. Pass the catalog zone so day
            labels match the calendar days readings are grouped by; defaults
            to the project `TIME_ZONE`.

    Returns:
        Callable formatting a single timestamp.
    """

    def _format(stamp: datetime) -> str:
        if timezone.is_aware(stamp):
            stamp = timezone.localtime(stamp, zone)
        with translation.override(locale):
            return formats.date_format(stamp, date_format)

    return _format
