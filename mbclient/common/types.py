from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict, Union


JsonBody = Union[bytes, str, Dict[str, Any]]


def _as_dict(body: JsonBody) -> Dict[str, Any]:
    """Decode a JSON payload (raw bytes/str or an already-parsed dict)."""
    if isinstance(body, dict):
        return body
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


@dataclass(frozen=True)
class Location:
    """
    WGS84 position in degrees.

    Longitudes outside [-180, 180] are accepted; tile helpers clamp the
    resulting tile indices instead.
    """
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude <= 90.0):
            raise ValueError("latitude out of range")


@dataclass
class MapboxAPIMessage:
    """Simple holder for `{"message": ...}` responses from Mapbox."""
    message: str = ""

    @classmethod
    def from_json(cls, body: JsonBody) -> "MapboxAPIMessage":
        d = _as_dict(body)
        return cls(message=str(d.get("message") or ""))


@dataclass
class UploadResponse:
    """Response of the tileset source upload endpoint."""
    file_size: int = 0
    files: int = 0
    source_size: int = 0
    id: str = ""

    @classmethod
    def from_json(cls, body: JsonBody) -> "UploadResponse":
        d = _as_dict(body)
        return cls(
            file_size=int(d.get("file_size") or 0),
            files=int(d.get("files") or 0),
            source_size=int(d.get("source_size") or 0),
            id=str(d.get("id") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PublishResponse:
    """Response of the tileset publish endpoint; `jobId` on the wire."""
    message: str = ""
    job_id: str = ""

    @classmethod
    def from_json(cls, body: JsonBody) -> "PublishResponse":
        d = _as_dict(body)
        return cls(message=str(d.get("message") or ""), job_id=str(d.get("jobId") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "jobId": self.job_id}


@dataclass
class StatusResponse:
    """Status of the most recent job on a tileset."""
    id: str = ""
    latest_job: str = ""
    status: str = ""

    @classmethod
    def from_json(cls, body: JsonBody) -> "StatusResponse":
        d = _as_dict(body)
        return cls(
            id=str(d.get("id") or ""),
            latest_job=str(d.get("latest_job") or ""),
            status=str(d.get("status") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
