"""JSON endpoints serving chart payloads to the dashboard front end."""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from analysis.alignment import align_line_series
from analysis.hierarchy import stream_series_for_system
from analysis.timeframe import hourly_window
from catalog.errors import SystemNotFoundError
from dashboard.catalog_source import get_catalog
from dashboard.charts import build_dashboard
from dashboard.config import dashboard_settings
from dashboard.formatting import localized_formatter


@require_GET
def dashboard_api(request: HttpRequest) -> JsonResponse:
    """Return every chart of the dashboard page as ECharts options."""

    config = dashboard_settings()
    catalog = get_catalog()
    payload = build_dashboard(
        catalog,
        config=config,
        hour_formatter=localized_formatter(
            locale=config.display_locale, date_format=config.hour_label_format, zone=catalog.timezone
        ),
        day_formatter=localized_formatter(
            locale=config.display_locale, date_format=config.day_label_format, zone=catalog.timezone
        ),
    )
    return JsonResponse(payload)


@require_GET
def system_series_api(request: HttpRequest, system_id: str) -> JsonResponse:
    """Return one stream's per-asset series for a System subtree.

    The stream defaults to the configured temperature stream and can be chosen
    with `?stream=`. Unknown systems yield HTTP 404.
    """

    config = dashboard_settings()
    stream = (request.GET.get("stream") or "").strip() or config.temperature_stream
    catalog = get_catalog()
    try:
        series = stream_series_for_system(catalog, system_id, stream)
    except SystemNotFoundError as exc:
        return JsonResponse({"error": str(exc), "system_id": exc.system_id}, status=404)

    axis = hourly_window(catalog.timeframe, hours=config.hourly_window)
    formatter = localized_formatter(
        locale=config.display_locale, date_format=config.hour_label_format, zone=catalog.timezone
    )
    return JsonResponse(
        {
            "system_id": system_id,
            "stream": stream,
            "labels": [formatter(stamp) for stamp in axis],
            "series": [{"label": line.label, "values": align_line_series(line, axis)} for line in series],
        }
    )
