from __future__ import annotations

"""
Common base for the Mapbox API modules.

Handles access-token injection, plain GET/POST, multipart uploads and the
mapping of HTTP failures onto the exceptions in mbclient.base.errors.
See https://docs.mapbox.com/api/ for endpoint documentation.

Usage:
    base = Base()  # requires MAPBOX_TOKEN in env or token=...
    data = base.query_base("tilesets/v1/someuser", {"limit": 10})
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from mbclient.base.errors import APILimitExceeded, APIUnauthorized, MapboxAPIError
from mbclient.common.types import MapboxAPIMessage


log = logging.getLogger(__name__)

BASE_URL = "https://api.mapbox.com"

STATUS_RATE_LIMIT_EXCEEDED = 429

_TOKEN_RE = re.compile(r"(access_token=)[^&\s]+")


def _redact(text: str) -> str:
    return _TOKEN_RE.sub(r"\1***", text)


def _api_error(
    body: bytes,
    status_code: Optional[int],
    fallback: str = "Bad Request (400) - no message",
) -> MapboxAPIError:
    """Build an error from a JSON `{"message": ...}` body when there is one."""
    try:
        msg = MapboxAPIMessage.from_json(body)
    except ValueError:
        return MapboxAPIError(fallback, status_code)
    return MapboxAPIError(f"api error: {msg.message}", status_code)


class Base:
    def __init__(
        self,
        token: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        debug: bool = False,
        timeout: float = 30.0,
    ):
        """
        Create a new API base instance.

        Params:
            token: Mapbox access token (falls back to env MAPBOX_TOKEN)
            session: optional requests.Session for connection reuse
            debug: log request/response details at DEBUG level
            timeout: per-request timeout in seconds
        """
        self.token = token or os.getenv("MAPBOX_TOKEN")
        if not self.token:
            raise ValueError("Mapbox API token not found")
        self.session = session or requests.Session()
        self.debug = debug
        self.timeout = timeout

    def set_debug(self, debug: bool) -> None:
        """Enable or disable debug output for API calls."""
        self.debug = bool(debug)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url='{BASE_URL}', debug={self.debug})"

    # ----------------------------
    # Internals
    # ----------------------------
    def _url(self, path: str) -> str:
        return f"{BASE_URL}/{path.lstrip('/')}"

    def _check_auth_and_limits(self, resp: requests.Response) -> None:
        if resp.status_code == STATUS_RATE_LIMIT_EXCEEDED:
            raise APILimitExceeded()
        if resp.status_code == 401:
            raise APIUnauthorized()

    def _dump(self, resp: requests.Response) -> None:
        if not self.debug:
            return
        req = resp.request
        log.debug(
            "Request: %s %s",
            getattr(req, "method", "?"),
            _redact(str(getattr(req, "url", ""))),
        )
        log.debug("Response: %s %s", resp.status_code, dict(resp.headers or {}))

    # ----------------------------
    # Raw requests
    # ----------------------------
    def simple_get(self, path: str) -> bytes:
        """GET `path` with the token attached and return the raw body."""
        resp = self.session.get(
            self._url(path), params={"access_token": self.token}, timeout=self.timeout
        )
        self._dump(resp)
        self._check_auth_and_limits(resp)
        return resp.content

    def post_request(self, path: str, data: Optional[bytes] = None) -> bytes:
        """POST an optional JSON body to `path` and return the raw body."""
        headers = {"Content-Type": "application/json"} if data is not None else {}
        resp = self.session.post(
            self._url(path),
            params={"access_token": self.token},
            data=data,
            headers=headers,
            timeout=self.timeout,
        )
        self._dump(resp)
        self._check_auth_and_limits(resp)
        return resp.content

    def post_upload_file_request(self, path: str, file: str, field: str) -> bytes:
        """
        Send a multipart/form-data POST carrying one file under form field
        `field`. The part's file name is the basename of `file`.

        Raises:
            FileNotFoundError: `file` does not exist (no request is made)
            MapboxAPIError: any non-200 response
        """
        fp = Path(file)
        url = f"{self._url(path)}/"
        with fp.open("rb") as f:
            resp = self.session.post(
                url,
                params={"access_token": self.token},
                files={field: (fp.name, f)},
                timeout=self.timeout,
            )
        self._dump(resp)
        self._check_auth_and_limits(resp)
        if resp.status_code != 200:
            raise _api_error(resp.content, resp.status_code)
        log.debug("Upload response: %s", resp.text[:500])
        return resp.content

    # ----------------------------
    # Query helpers
    # ----------------------------
    def query_request(self, query: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        GET `query` with the given parameters plus the access token and
        return the response if it is neither rate limited nor unauthorized.
        """
        params = dict(params or {})
        params["access_token"] = self.token

        url = self._url(query)
        if self.debug:
            log.debug("URL: %s", url)

        resp = self.session.get(url, params=params, timeout=self.timeout)
        self._dump(resp)
        self._check_auth_and_limits(resp)
        return resp

    def query_base(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Query the API and return the decoded JSON body."""
        resp = self.query_request(query, params)
        body = resp.content

        # Bad requests usually carry a message
        if resp.status_code == 400:
            raise _api_error(body, resp.status_code)
        if resp.status_code >= 400:
            raise _api_error(body, resp.status_code, f"unexpected status {resp.status_code}")

        try:
            return json.loads(body)
        except ValueError as e:
            raise MapboxAPIError(f"invalid JSON response: {e}", resp.status_code) from e

    def query(
        self,
        api: str,
        version: str,
        mode: str,
        query: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Query `{api}/{version}/{mode}/{query}`."""
        return self.query_base(f"{api}/{version}/{mode}/{query}", params)
