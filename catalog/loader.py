"""YAML catalog loader.

Catalog documents describe a whole session snapshot:

```yaml
timezone: Europe/Paris
timeframe:
  start: 2026-01-05T00:00:00
  count: 48
  step_minutes: 60
environments:
  - {id: env001, name: Site de Lyon}
systems:
  - {id: sys001, name: Atelier, environment_id: env001, children: [sys002]}
  - {id: sys002, name: Ligne 1, environment_id: env001}
assets:
  - id: sensor-01
    label: Sonde 01
    system_ids: [sys002]
    data:
      - name: temperature
        values: [21.5, 21.7, null, 22.0]
      - name: output
        points:
          - {timestamp: "2026-01-05T09:00:00", value: 3}
```

`timeframe` may also be an explicit list of timestamps. Positional `values`
are aligned to the sorted Timeframe; `null` marks a missing reading. Naive
timestamps are interpreted in the document (or caller) timezone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .errors import CatalogError, CatalogValidationError
from .models import Asset, DataPoint, DataSeries, Environment, System
from .store import CatalogStore

logger = logging.getLogger(__name__)


def load_catalog(path: Path | str, *, default_timezone: tzinfo | None = None) -> CatalogStore:
    """Load and validate a catalog from a YAML file.

    Args:
        path: Path to the YAML document.
        default_timezone: Timezone used for naive timestamps when the document
            does not declare one. Defaults to UTC.

    Returns:
        A validated CatalogStore.

    Raises:
        CatalogError: When the file cannot be read or parsed.
        CatalogValidationError: When the records violate catalog invariants.
    """

    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog file {path}: {exc}") from exc
    logger.info("Loading asset catalog from %s", path)
    return parse_catalog(raw_text, default_timezone=default_timezone)


def parse_catalog(raw_text: str, *, default_timezone: tzinfo | None = None) -> CatalogStore:
    """Parse a YAML catalog document into a CatalogStore.

    Args:
        raw_text: YAML document text.
        default_timezone: Timezone for naive timestamps (UTC when omitted).

    Returns:
        A validated CatalogStore.
    """

    try:
        document = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid catalog YAML: {exc}") from exc
    if not isinstance(document, Mapping):
        raise CatalogError("Catalog document must be a mapping.")
    return build_catalog(document, default_timezone=default_timezone)


def build_catalog(document: Mapping[str, Any], *, default_timezone: tzinfo | None = None) -> CatalogStore:
    """Build a CatalogStore from an already-decoded catalog mapping."""

    zone = _document_timezone(document.get("timezone"), default=default_timezone)
    timeframe = _parse_timeframe(document.get("timeframe"), zone=zone)
    axis = tuple(sorted(set(timeframe)))

    environments = [
        Environment(id=str(_required(entry, "id", "environment")), name=str(_required(entry, "name", "environment")))
        for entry in _entries(document, "environments")
    ]
    systems = _build_systems(_entries(document, "systems"))
    assets = [_build_asset(entry, axis=axis, zone=zone) for entry in _entries(document, "assets")]
    return CatalogStore(environments=environments, systems=systems, assets=assets, timeframe=timeframe)


def _document_timezone(raw: object, *, default: tzinfo | None) -> tzinfo:
    if raw is None:
        return default if default is not None else ZoneInfo("UTC")
    try:
        return ZoneInfo(str(raw))
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise CatalogError(f"Unknown catalog timezone {raw!r}.") from exc


def _entries(document: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    raw = document.get(key) or []
    if not isinstance(raw, list) or not all(isinstance(entry, Mapping) for entry in raw):
        raise CatalogError(f"Catalog `{key}` must be a list of mappings.")
    return raw


def _required(entry: Mapping[str, Any], key: str, kind: str) -> Any:
    value = entry.get(key)
    if value is None:
        raise CatalogValidationError(f"Catalog {kind} entry is missing `{key}`: {dict(entry)!r}.")
    return value


def _mappings(raw: object, *, where: str) -> list[Mapping[str, Any]]:
    """Return a nested list of mapping entries (an absent list is empty)."""

    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(entry, Mapping) for entry in raw):
        raise CatalogValidationError(f"{where} must be a list of mappings.")
    return raw


def _number(raw: object, *, where: str) -> float:
    if isinstance(raw, bool):
        raise CatalogValidationError(f"{where} has a non-numeric value {raw!r}.")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise CatalogValidationError(f"{where} has a non-numeric value {raw!r}.") from exc


def _integer(raw: object, *, where: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise CatalogValidationError(f"{where} must be an integer, got {raw!r}.")
    try:
        return int(raw)
    except ValueError as exc:
        raise CatalogValidationError(f"{where} must be an integer, got {raw!r}.") from exc


def _parse_timestamp(raw: object, *, zone: tzinfo) -> datetime:
    if isinstance(raw, datetime):
        stamp = raw
    elif isinstance(raw, date):
        stamp = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        try:
            stamp = datetime.fromisoformat(raw.strip())
        except ValueError as exc:
            raise CatalogValidationError(f"Invalid timestamp {raw!r}.") from exc
    else:
        raise CatalogValidationError(f"Invalid timestamp {raw!r}.")
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=zone)
    return stamp.astimezone(zone)


def _parse_timeframe(raw: object, *, zone: tzinfo) -> list[datetime]:
    if raw is None:
        raise CatalogValidationError("Catalog is missing `timeframe`.")
    if isinstance(raw, list):
        return [_parse_timestamp(item, zone=zone) for item in raw]
    if not isinstance(raw, Mapping):
        raise CatalogValidationError("Catalog `timeframe` must be a list or a {start, count} mapping.")

    start = _parse_timestamp(_required(raw, "start", "timeframe"), zone=zone)
    count = _integer(_required(raw, "count", "timeframe"), where="Timeframe `count`")
    step_minutes = _integer(raw.get("step_minutes", 60), where="Timeframe `step_minutes`")
    if count < 0 or step_minutes <= 0:
        raise CatalogValidationError("Timeframe `count` must be >= 0 and `step_minutes` must be positive.")
    step = timedelta(minutes=step_minutes)
    origin = start.astimezone(timezone.utc)
    return [(origin + index * step).astimezone(zone) for index in range(count)]


def _build_systems(entries: list[Mapping[str, Any]]) -> list[System]:
    """Resolve `children` id references into nested System records.

    Raises:
        CatalogValidationError: On unknown child ids or cyclic hierarchies.
    """

    raw_by_id: dict[str, Mapping[str, Any]] = {}
    for entry in entries:
        system_id = str(_required(entry, "id", "system"))
        if system_id in raw_by_id:
            raise CatalogValidationError(f"Duplicate system id {system_id!r}.")
        raw_by_id[system_id] = entry

    child_ids: dict[str, tuple[str, ...]] = {}
    for system_id, entry in raw_by_id.items():
        children = tuple(str(child) for child in entry.get("children") or ())
        for child in children:
            if child not in raw_by_id:
                raise CatalogValidationError(f"System {system_id!r} lists unknown child {child!r}.")
        child_ids[system_id] = children

    built: dict[str, System] = {}
    for root_id in raw_by_id:
        if root_id in built:
            continue
        # Iterative post-order build; `path` holds the ancestors being resolved.
        path: list[str] = []
        stack: list[tuple[str, bool]] = [(root_id, False)]
        while stack:
            system_id, expanded = stack.pop()
            if expanded:
                path.pop()
                entry = raw_by_id[system_id]
                built[system_id] = System(
                    id=system_id,
                    name=str(_required(entry, "name", "system")),
                    environment_id=str(_required(entry, "environment_id", "system")),
                    children=tuple(built[child] for child in child_ids[system_id]),
                )
                continue
            if system_id in built:
                continue
            if system_id in path:
                cycle = " -> ".join([*path[path.index(system_id):], system_id])
                raise CatalogValidationError(f"System hierarchy contains a cycle: {cycle}.")
            path.append(system_id)
            stack.append((system_id, True))
            for child in reversed(child_ids[system_id]):
                if child not in built:
                    stack.append((child, False))

    return [built[system_id] for system_id in raw_by_id]


def _build_asset(entry: Mapping[str, Any], *, axis: tuple[datetime, ...], zone: tzinfo) -> Asset:
    asset_id = str(_required(entry, "id", "asset"))
    data = tuple(
        _build_series(series_entry, asset_id=asset_id, axis=axis, zone=zone)
        for series_entry in _mappings(entry.get("data"), where=f"Asset {asset_id!r} `data`")
    )
    return Asset(
        id=asset_id,
        label=str(entry.get("label") or asset_id),
        system_ids=frozenset(str(system_id) for system_id in entry.get("system_ids") or ()),
        data=data,
    )


def _build_series(
    entry: Mapping[str, Any],
    *,
    asset_id: str,
    axis: tuple[datetime, ...],
    zone: tzinfo,
) -> DataSeries:
    name = str(_required(entry, "name", f"asset {asset_id!r} data"))
    where = f"Asset {asset_id!r} series {name!r}"
    points: list[DataPoint] = []

    positional = entry.get("values")
    if positional is not None:
        if not isinstance(positional, list):
            raise CatalogValidationError(f"{where} `values` must be a list.")
        if len(positional) > len(axis):
            raise CatalogValidationError(
                f"{where} has {len(positional)} values for a {len(axis)}-step timeframe."
            )
        points.extend(
            DataPoint(timestamp=stamp, value=_number(value, where=where))
            for stamp, value in zip(axis, positional)
            if value is not None
        )

    for point in _mappings(entry.get("points"), where=f"{where} `points`"):
        points.append(
            DataPoint(
                timestamp=_parse_timestamp(_required(point, "timestamp", "data point"), zone=zone),
                value=_number(_required(point, "value", "data point"), where=where),
            )
        )
    return DataSeries(name=name, values=tuple(points))
