"""
Base Mapbox API client

- Injects the access token into every request
- GET / JSON POST / multipart upload helpers
- Maps 429 and 401 onto APILimitExceeded and APIUnauthorized
"""
from .client import BASE_URL, Base
from .errors import APILimitExceeded, APIUnauthorized, MapboxAPIError, MapboxError

__all__ = [
    "BASE_URL",
    "Base",
    "MapboxError",
    "MapboxAPIError",
    "APILimitExceeded",
    "APIUnauthorized",
]
