"""Validated, read-only catalog of environments, systems and assets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, tzinfo

from .errors import CatalogValidationError, SystemNotFoundError
from .models import Asset, DataPoint, DataSeries, Environment, System, Timeframe

logger = logging.getLogger(__name__)


class CatalogStore:
    """In-memory catalog snapshot shared by every derivation call.

    The constructor validates and normalizes its inputs once:

    - the Timeframe is sorted ascending, de-duplicated and expressed in the
      zone of its earliest timestamp;
    - each DataSeries is restamped onto the Timeframe and sorted; duplicate
      timestamps and readings outside the Timeframe are rejected;
    - every System references a known Environment and has at most one parent;
    - every Asset references known Systems only.

    Duplicate stream names on one asset are accepted (the first one wins on
    lookup) but logged, since they usually point at a data-quality issue.
    """

    def __init__(
        self,
        *,
        environments: Iterable[Environment],
        systems: Iterable[System],
        assets: Iterable[Asset],
        timeframe: Iterable[datetime],
    ) -> None:
        """Build and validate a catalog snapshot.

        Args:
            environments: Environments in catalog order.
            systems: Systems in catalog order. Descendants reachable through
                `children` but not listed explicitly are appended after the
                listed ones.
            assets: Assets in catalog order.
            timeframe: Shared timestamps; need not be sorted.

        Raises:
            CatalogValidationError: When an invariant is violated.
        """

        self._timeframe = _normalize_timeframe(timeframe)
        self._environments = _unique_by_id(environments, kind="environment")
        self._systems = _flatten_systems(systems)
        self._system_by_id = {system.id: system for system in self._systems}

        environment_ids = {environment.id for environment in self._environments}
        for system in self._systems:
            if system.environment_id not in environment_ids:
                raise CatalogValidationError(
                    f"System {system.id!r} references unknown environment {system.environment_id!r}."
                )
        _check_single_parent(self._systems)

        timeframe_members = {stamp: stamp for stamp in self._timeframe}
        normalized_assets = [
            _normalize_asset(asset, known_system_ids=self._system_by_id, timeframe=timeframe_members)
            for asset in assets
        ]
        self._assets = _unique_by_id(normalized_assets, kind="asset")

        owned: dict[str, list[Asset]] = {system.id: [] for system in self._systems}
        for asset in self._assets:
            for system_id in asset.system_ids:
                owned[system_id].append(asset)
        self._assets_by_system = {system_id: tuple(items) for system_id, items in owned.items()}

        logger.debug(
            "Catalog built: %d environments, %d systems, %d assets, %d timestamps.",
            len(self._environments),
            len(self._systems),
            len(self._assets),
            len(self._timeframe),
        )

    @property
    def environments(self) -> tuple[Environment, ...]:
        """Environments in catalog order."""

        return self._environments

    @property
    def systems(self) -> tuple[System, ...]:
        """Every System (roots and descendants) in catalog order."""

        return self._systems

    @property
    def assets(self) -> tuple[Asset, ...]:
        """Assets in catalog order."""

        return self._assets

    @property
    def timeframe(self) -> Timeframe:
        """The shared, ascending timestamp axis."""

        return self._timeframe

    @property
    def timezone(self) -> tzinfo | None:
        """Zone every timestamp is expressed in; None for an empty Timeframe."""

        return self._timeframe[0].tzinfo if self._timeframe else None

    def get_system(self, system_id: str) -> System | None:
        """Return the System with `system_id`, or None when unknown."""

        return self._system_by_id.get(system_id)

    def require_system(self, system_id: str) -> System:
        """Return the System with `system_id`.

        Raises:
            SystemNotFoundError: When the id is not in the catalog.
        """

        system = self._system_by_id.get(system_id)
        if system is None:
            raise SystemNotFoundError(system_id=system_id)
        return system

    def assets_owned_by(self, system_id: str) -> tuple[Asset, ...]:
        """Return assets directly linked to `system_id`, in catalog order."""

        return self._assets_by_system.get(system_id, ())


def _normalize_timeframe(timeframe: Iterable[datetime]) -> Timeframe:
    """Sort and de-duplicate the axis, expressed in the zone of its earliest timestamp."""

    stamps = set()
    for stamp in timeframe:
        if stamp.tzinfo is None:
            raise CatalogValidationError(f"Timeframe timestamp {stamp.isoformat()} is not timezone-aware.")
        stamps.add(stamp)
    ordered = sorted(stamps)
    if not ordered:
        return ()
    zone = ordered[0].tzinfo
    return tuple(stamp.astimezone(zone) for stamp in ordered)


def _unique_by_id(records, *, kind: str) -> tuple:
    seen: set[str] = set()
    items = []
    for record in records:
        if record.id in seen:
            raise CatalogValidationError(f"Duplicate {kind} id {record.id!r}.")
        seen.add(record.id)
        items.append(record)
    return tuple(items)


def _flatten_systems(systems: Iterable[System]) -> tuple[System, ...]:
    """Return listed systems followed by unlisted descendants, unique by id."""

    listed = list(systems)
    by_id: dict[str, System] = {}
    ordered: list[System] = []

    def _add(system: System) -> None:
        existing = by_id.get(system.id)
        if existing is None:
            by_id[system.id] = system
            ordered.append(system)
        elif existing != system:
            raise CatalogValidationError(f"Duplicate system id {system.id!r} with conflicting definitions.")

    for system in listed:
        _add(system)

    visited: set[str] = set()
    stack = list(reversed(listed))
    while stack:
        system = stack.pop()
        if system.id in visited:
            continue
        visited.add(system.id)
        for child in system.children:
            _add(child)
        stack.extend(reversed(system.children))
    return tuple(ordered)


def _check_single_parent(systems: tuple[System, ...]) -> None:
    parent_of: dict[str, str] = {}
    for system in systems:
        for child in system.children:
            if child.id == system.id:
                raise CatalogValidationError(f"System {system.id!r} lists itself as a child.")
            previous = parent_of.setdefault(child.id, system.id)
            if previous != system.id:
                raise CatalogValidationError(
                    f"System {child.id!r} has more than one parent ({previous!r}, {system.id!r})."
                )


def _normalize_asset(
    asset: Asset,
    *,
    known_system_ids: dict[str, System],
    timeframe: Mapping[datetime, datetime],
) -> Asset:
    unknown = sorted(system_id for system_id in asset.system_ids if system_id not in known_system_ids)
    if unknown:
        raise CatalogValidationError(f"Asset {asset.id!r} references unknown systems: {', '.join(unknown)}.")

    seen_names: set[str] = set()
    data: list[DataSeries] = []
    for series in asset.data:
        if series.name in seen_names:
            logger.warning(
                "Asset %r carries more than one %r data series; only the first is used.",
                asset.id,
                series.name,
            )
        seen_names.add(series.name)
        data.append(_normalize_series(series, asset_id=asset.id, timeframe=timeframe))
    return replace(asset, system_ids=frozenset(asset.system_ids), data=tuple(data))


def _normalize_series(series: DataSeries, *, asset_id: str, timeframe: Mapping[datetime, datetime]) -> DataSeries:
    """Sort readings and restamp each one with its Timeframe member.

    Aware datetimes compare by instant, so a reading recorded in another zone
    still matches its Timeframe slot; restamping puts it in the axis zone so
    calendar days agree with the axis.
    """

    points: list[DataPoint] = []
    for point in series.values:
        member = timeframe.get(point.timestamp)
        if member is None:
            raise CatalogValidationError(
                f"Asset {asset_id!r} series {series.name!r} has a reading at "
                f"{point.timestamp.isoformat()} outside the timeframe."
            )
        points.append(point if point.timestamp.tzinfo is member.tzinfo else replace(point, timestamp=member))
    points.sort(key=lambda point: point.timestamp)

    previous: datetime | None = None
    for point in points:
        if point.timestamp == previous:
            raise CatalogValidationError(
                f"Asset {asset_id!r} series {series.name!r} has duplicate readings at {point.timestamp.isoformat()}."
            )
        previous = point.timestamp
    return replace(series, values=tuple(points))
