from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from mbclient.base.client import Base
from mbclient.base.errors import MapboxAPIError
from mbclient.common.types import (
    MapboxAPIMessage,
    PublishResponse,
    StatusResponse,
    UploadResponse,
)


log = logging.getLogger(__name__)

API_NAME = "tilesets"
API_VERSION = "v1"

STATUS_FAILED = "failed"
STATUS_SUCCESS = "success"
TERMINAL_STATUSES = (STATUS_FAILED, STATUS_SUCCESS)

DEFAULT_POLL_INTERVAL_S = 5.0


def _decode(cls, body: bytes, what: str):
    try:
        return cls.from_json(body)
    except ValueError as e:
        raise MapboxAPIError(f"invalid {what} response: {e}") from e


class Tileset:
    """
    Client for the Mapbox Tiling Service endpoints of a single tileset.

    Usage:
        ts = Tileset(Base())
        ts.set_tileset("someuser", "hello-world")
        ts.upload_geojson("data/points.geojson.ld")
        ts.create_tileset("config/recipe.json")
        ts.publish_tileset()
        ts.check_job_status()
    """

    def __init__(self, base: Base, *, sleep: Callable[[float], None] = time.sleep):
        self.base = base
        self.username = ""
        self.tileset_id = ""
        self._sleep = sleep

    def set_tileset(self, username: str, tileset_id: str) -> None:
        self.username = username
        self.tileset_id = tileset_id

    def _require_tileset(self) -> None:
        if not self.username or not self.tileset_id:
            raise ValueError("username and tileset_id must be set (see set_tileset)")

    def tileset_url(self) -> str:
        """Relative URL `tilesets/v1/{username}.{tileset_id}`."""
        self._require_tileset()
        return f"{API_NAME}/{API_VERSION}/{self.username}.{self.tileset_id}"

    def source_url(self) -> str:
        self._require_tileset()
        return f"{API_NAME}/{API_VERSION}/sources/{self.username}/{self.tileset_id}"

    # ----------------------------
    # Operations
    # ----------------------------
    def upload_geojson(self, path_to_file: str) -> UploadResponse:
        """Upload a line-delimited GeoJSON file as the tileset source."""
        res = self.base.post_upload_file_request(self.source_url(), path_to_file, "file")
        upload = _decode(UploadResponse, res, "upload")
        log.info("Uploaded %s to source %s (%d bytes)", path_to_file, upload.id, upload.file_size)
        return upload

    def create_tileset(self, path_to_recipe: str) -> MapboxAPIMessage:
        """Create the tileset from a tileset-recipe JSON file."""
        data = Path(path_to_recipe).read_bytes()
        res = self.base.post_request(self.tileset_url(), data)
        return _decode(MapboxAPIMessage, res, "create")

    def publish_tileset(self) -> PublishResponse:
        """Publish a tileset after it has been created."""
        res = self.base.post_request(self.tileset_url() + "/publish", None)
        publish = _decode(PublishResponse, res, "publish")
        log.info("Publish requested: %s (job %s)", publish.message, publish.job_id)
        return publish

    def get_status(self) -> StatusResponse:
        """Status of the most recent job."""
        res = self.base.simple_get(self.tileset_url() + "/status")
        status = _decode(StatusResponse, res, "status")
        if not status.status:
            # error bodies carry a message instead of a status
            msg = _decode(MapboxAPIMessage, res, "status")
            raise MapboxAPIError(f"api error: {msg.message}" if msg.message else "status response has no status")
        return status

    def check_job_status(self, poll_interval: float = DEFAULT_POLL_INTERVAL_S) -> StatusResponse:
        """
        Poll the job status every `poll_interval` seconds until it is
        "failed" or "success", and return that final status.

        There is no timeout: a job that never reaches a terminal state keeps
        this call polling.
        """
        log.info("Awaiting job completion. This may take some time...")
        while True:
            status = self.get_status()
            if status.status == STATUS_FAILED:
                log.info("Job failed", extra={"extra": status.to_dict()})
                return status
            if status.status == STATUS_SUCCESS:
                log.info("Job complete", extra={"extra": status.to_dict()})
                return status
            log.info("%s", status.status)
            self._sleep(poll_interval)
