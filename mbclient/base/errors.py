from __future__ import annotations

from typing import Optional


class MapboxError(Exception):
    """Base exception for everything raised by this client."""


class MapboxAPIError(MapboxError):
    """The API answered with an error (or with a body we cannot use)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class APILimitExceeded(MapboxAPIError):
    """Raised on HTTP 429."""

    def __init__(self, message: str = "Mapbox API rate limit exceeded") -> None:
        super().__init__(message, status_code=429)


class APIUnauthorized(MapboxAPIError):
    """Raised on HTTP 401 (missing, invalid or under-scoped token)."""

    def __init__(self, message: str = "Mapbox API unauthorized") -> None:
        super().__init__(message, status_code=401)
