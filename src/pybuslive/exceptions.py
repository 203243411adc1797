"""Custom exception hierarchy for pybuslive."""

from __future__ import annotations


class BusLiveError(Exception):
    """Base exception for all pybuslive errors."""


class BusLiveConfigError(BusLiveError):
    """Invalid or missing configuration."""


class BusLiveCatalogError(BusLiveError):
    """Route catalog could not be loaded or contains invalid stops."""


class BusLiveTransportError(BusLiveError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
