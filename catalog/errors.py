"""Exceptions raised by the catalog and the derivation layer."""

from __future__ import annotations


class CatalogError(ValueError):
    """Base class for catalog loading failures."""


class CatalogValidationError(CatalogError):
    """Raised when catalog records violate a load-time invariant."""


class SystemNotFoundError(LookupError):
    """Raised when a System id does not exist in the catalog."""

    def __init__(self, *, system_id: str) -> None:
        """Initialize the error.

        Args:
            system_id: The unknown System id.
        """

        super().__init__(f"Unknown system id {system_id!r}.")
        self.system_id = system_id


class MissingStreamError(LookupError):
    """Raised when an Asset does not carry an expected named data stream."""

    def __init__(self, *, asset_id: str, stream: str) -> None:
        """Initialize the error.

        Args:
            asset_id: Id of the asset that lacks the stream.
            stream: Name of the expected DataSeries.
        """

        super().__init__(f"Asset {asset_id!r} has no {stream!r} data series.")
        self.asset_id = asset_id
        self.stream = stream
