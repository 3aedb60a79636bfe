"""Dashboard settings resolved into a typed, immutable config."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass(frozen=True, slots=True)
class DashboardSettings:
    """Chart selection and display choices for the dashboard payload.

    Attributes:
        display_locale: Fixed locale used for axis labels (e.g. "fr").
        hour_label_format: Django date format (or format name) for hour labels.
        day_label_format: Django date format (or format name) for day labels.
        hourly_window: Number of timestamps on the hourly axis.
        temperature_stream: Stream charted per system as stacked lines.
        output_stream: Stream summed per day for machines.
        stacked_chart_system_ids: Systems rendered as stacked line charts.
        asset_pie_system_ids: Systems bucketed in the assets-per-system pie.
        machine_system_id: System whose directly linked assets are machines.
    """

    display_locale: str = "fr"
    hour_label_format: str = "j M Y H:i"
    day_label_format: str = "DATE_FORMAT"
    hourly_window: int = 24
    temperature_stream: str = "temperature"
    output_stream: str = "output"
    stacked_chart_system_ids: tuple[str, ...] = ()
    asset_pie_system_ids: tuple[str, ...] = ()
    machine_system_id: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DashboardSettings":
        """Build settings from a `DASHBOARD`-style mapping; missing keys keep defaults."""

        defaults = cls()
        return cls(
            display_locale=str(raw.get("DISPLAY_LOCALE", defaults.display_locale)),
            hour_label_format=str(raw.get("HOUR_LABEL_FORMAT", defaults.hour_label_format)),
            day_label_format=str(raw.get("DAY_LABEL_FORMAT", defaults.day_label_format)),
            hourly_window=int(raw.get("HOURLY_WINDOW", defaults.hourly_window)),
            temperature_stream=str(raw.get("TEMPERATURE_STREAM", defaults.temperature_stream)),
            output_stream=str(raw.get("OUTPUT_STREAM", defaults.output_stream)),
            stacked_chart_system_ids=tuple(raw.get("STACKED_CHART_SYSTEM_IDS", ())),
            asset_pie_system_ids=tuple(raw.get("ASSET_PIE_SYSTEM_IDS", ())),
            machine_system_id=raw.get("MACHINE_SYSTEM_ID", defaults.machine_system_id),
        )


def dashboard_settings() -> DashboardSettings:
    """Return the dashboard settings from `settings.DASHBOARD`."""

    return DashboardSettings.from_mapping(getattr(settings, "DASHBOARD", {}))
