from __future__ import annotations

import logging
from typing import List, Optional

from PIL import Image

from mbclient.base.client import Base
from mbclient.base.errors import MapboxAPIError
from mbclient.common.geo import get_enclosing_tile_ids
from mbclient.common.types import Location
from mbclient.maps.cache import Cache
from mbclient.maps.constants import (
    MapFormat,
    MapFormatLike,
    MapIDLike,
    enum_value,
    tile_size,
)
from mbclient.maps.imaging import decode_image
from mbclient.maps.tile import Tile


log = logging.getLogger(__name__)

API_NAME = "v4"


class Maps:
    """
    Raster tile client for the Mapbox v4 tile endpoint:
        https://api.mapbox.com/v4/{map_id}/{z}/{x}/{y}{@2x}.{format}
    """

    def __init__(self, base: Base, cache: Optional[Cache] = None):
        self.base = base
        self.cache = cache

    def set_cache(self, cache: Optional[Cache]) -> None:
        self.cache = cache

    @staticmethod
    def tile_path(map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool) -> str:
        dpi = "@2x" if high_dpi else ""
        return f"{API_NAME}/{enum_value(map_id)}/{int(z)}/{int(x)}/{int(y)}{dpi}.{enum_value(fmt)}"

    def get_tile_bytes(
        self,
        map_id: MapIDLike,
        x: int,
        y: int,
        z: int,
        fmt: MapFormatLike = MapFormat.PNG,
        high_dpi: bool = False,
    ) -> bytes:
        """
        Raw tile payload, served from the cache when present. Downloaded
        payloads are written back to the cache.
        """
        if self.cache is not None:
            cached = self.cache.fetch(map_id, x, y, z, fmt, high_dpi)
            if cached:
                return cached

        path = self.tile_path(map_id, x, y, z, fmt, high_dpi)
        resp = self.base.query_request(path)
        if resp.status_code != 200 or not resp.content:
            raise MapboxAPIError(
                f"tile fetch failed [{resp.status_code}] for {path}: {resp.text[:200]}",
                resp.status_code,
            )
        data = resp.content

        if self.cache is not None:
            self.cache.save(data, map_id, x, y, z, fmt, high_dpi)
        return data

    def get_tile(
        self,
        map_id: MapIDLike,
        x: int,
        y: int,
        z: int,
        fmt: MapFormatLike = MapFormat.PNG,
        high_dpi: bool = False,
    ) -> Image.Image:
        """Fetch and decode one raster tile."""
        data = self.get_tile_bytes(map_id, x, y, z, fmt, high_dpi)
        try:
            return decode_image(data)
        except (OSError, Image.DecompressionBombError) as e:
            raise MapboxAPIError(f"cannot decode tile {z}/{x}/{y}: {e}") from e

    def get_enclosing_tiles(
        self,
        map_id: MapIDLike,
        a: Location,
        b: Location,
        level: int,
        fmt: MapFormatLike = MapFormat.PNG,
        high_dpi: bool = False,
    ) -> List[List[Tile]]:
        """
        Fetch every tile covering the box spanned by `a` and `b`.
        Returned as rows (north to south) of columns (west to east).
        """
        x1, y1, x2, y2 = get_enclosing_tile_ids(a, b, level)
        size = tile_size(high_dpi)
        log.info(
            "Fetching %d tiles at level %d",
            (x2 - x1 + 1) * (y2 - y1 + 1),
            level,
            extra={"extra": {"map_id": enum_value(map_id), "x": [x1, x2], "y": [y1, y2]}},
        )

        tiles: List[List[Tile]] = []
        for y in range(y1, y2 + 1):
            row: List[Tile] = []
            for x in range(x1, x2 + 1):
                img = self.get_tile(map_id, x, y, level, fmt, high_dpi)
                row.append(Tile(x, y, level, size, img))
            tiles.append(row)
        return tiles
