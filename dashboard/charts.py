"""ECharts option payloads built from the derivation layer.

Each builder returns plain JSON-serializable dicts. Series are joined onto
their x-axis by timestamp (hourly charts) or by calendar day (daily charts),
so sparse data shows up as gaps rather than shifted points.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict
from typing import TypedDict

from analysis.alignment import align_bar_series, align_line_series
from analysis.daily_output import machine_daily_output, machines_in_system
from analysis.distribution import assets_by_system, systems_by_environment
from analysis.dto import BarSeries, NameValue
from analysis.hierarchy import stream_series_for_system
from analysis.timeframe import LabelFormatter, day_starts, hourly_window
from catalog.errors import MissingStreamError
from catalog.store import CatalogStore

from .config import DashboardSettings

logger = logging.getLogger(__name__)


class ChartSeries(TypedDict, total=False):
    """A single ECharts series entry."""

    name: str
    type: str
    stack: str
    data: list[float | None] | list[dict[str, object]]


class ChartAxis(TypedDict, total=False):
    """An ECharts axis definition."""

    type: str
    data: list[str]
    boundaryGap: bool


class ChartOptions(TypedDict, total=False):
    """The subset of ECharts options produced by the dashboard."""

    tooltip: dict[str, str]
    legend: dict[str, list[str]]
    xAxis: ChartAxis
    yAxis: ChartAxis
    series: list[ChartSeries]


class SystemChart(TypedDict):
    """A stacked line chart for one System subtree."""

    id: str
    options: ChartOptions


class DashboardPayload(TypedDict):
    """Every chart rendered by the dashboard page."""

    systemsByEnvironment: ChartOptions
    assetsBySystem: ChartOptions
    systemCharts: list[SystemChart]
    machinesOutput: ChartOptions


def pie_chart_options(data: Iterable[NameValue]) -> ChartOptions:
    """Return a pie chart showing the given name/value buckets."""

    return {
        "tooltip": {"trigger": "item"},
        "series": [{"type": "pie", "data": [asdict(item) for item in data]}],
    }


def system_line_chart(
    catalog: CatalogStore,
    system_id: str,
    *,
    config: DashboardSettings,
    hour_formatter: LabelFormatter,
) -> SystemChart:
    """Build the stacked line chart of one stream across a System subtree.

    Args:
        catalog: Catalog snapshot.
        system_id: Root System id.
        config: Dashboard settings (stream name, hourly window).
        hour_formatter: Display formatter for hour labels.

    Returns:
        SystemChart whose series are aligned to the hourly window.

    Raises:
        SystemNotFoundError: When `system_id` is not in the catalog.
    """

    axis = hourly_window(catalog.timeframe, hours=config.hourly_window)
    series = stream_series_for_system(catalog, system_id, config.temperature_stream)
    return {
        "id": system_id,
        "options": {
            "tooltip": {"trigger": "axis"},
            "legend": {"data": [line.label for line in series]},
            "xAxis": {
                "type": "category",
                "boundaryGap": False,
                "data": [hour_formatter(stamp) for stamp in axis],
            },
            "yAxis": {"type": "value"},
            "series": [
                {"name": line.label, "type": "line", "data": align_line_series(line, axis)}
                for line in series
            ],
        },
    }


def machine_bar_series(catalog: CatalogStore, *, config: DashboardSettings) -> tuple[BarSeries, ...]:
    """Return per-day output series for every machine of the configured System.

    Machines without an output stream are skipped with a warning so a single
    misconfigured asset does not blank the whole chart.
    """

    if config.machine_system_id is None:
        return ()
    series: list[BarSeries] = []
    for machine in machines_in_system(catalog, config.machine_system_id):
        try:
            series.append(machine_daily_output(machine, stream=config.output_stream))
        except MissingStreamError as exc:
            logger.warning("Skipping machine %r in output chart: %s", machine.id, exc)
    return tuple(series)


def machines_output_chart(
    catalog: CatalogStore,
    *,
    config: DashboardSettings,
    day_formatter: LabelFormatter,
) -> ChartOptions:
    """Build the stacked bar chart of per-day machine output."""

    starts = day_starts(catalog.timeframe)
    days = [stamp.date() for stamp in starts]
    labels = [day_formatter(stamp) for stamp in starts]
    return {
        "tooltip": {"trigger": "axis"},
        "xAxis": {"type": "category", "data": labels},
        "yAxis": {"type": "value"},
        "series": [
            {"name": bars.label, "type": "bar", "stack": "total", "data": align_bar_series(bars, days)}
            for bars in machine_bar_series(catalog, config=config)
        ],
    }


def build_dashboard(
    catalog: CatalogStore,
    *,
    config: DashboardSettings,
    hour_formatter: LabelFormatter,
    day_formatter: LabelFormatter,
) -> DashboardPayload:
    """Build every chart of the dashboard page.

    Configured stacked-chart Systems that are not in the catalog are left out
    with a warning.
    """

    system_charts: list[SystemChart] = []
    for system_id in config.stacked_chart_system_ids:
        if catalog.get_system(system_id) is None:
            logger.warning("Stacked chart system %r is not in the catalog.", system_id)
            continue
        system_charts.append(
            system_line_chart(catalog, system_id, config=config, hour_formatter=hour_formatter)
        )

    return {
        "systemsByEnvironment": pie_chart_options(systems_by_environment(catalog)),
        "assetsBySystem": pie_chart_options(assets_by_system(catalog, config.asset_pie_system_ids)),
        "systemCharts": system_charts,
        "machinesOutput": machines_output_chart(catalog, config=config, day_formatter=day_formatter),
    }
