from __future__ import annotations

import math
from typing import Tuple

from mbclient.common.types import Location


# Web Mercator is undefined at the poles; latitudes are clamped to this.
MAX_LATITUDE = 85.05112878


# -------------------------
# Web Mercator (slippy map) helpers
# -------------------------
def _world_size(level: int, size: int) -> float:
    # World size in pixels at the given zoom for `size` px tiles
    return float(size) * (2 ** int(level))


def _lon_to_x(lon: float, world: float) -> float:
    return (lon + 180.0) / 360.0 * world


def _lat_to_y(lat: float, world: float) -> float:
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
    s = math.sin(math.radians(lat))
    y = 0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)
    return y * world


def _x_to_lon(x: float, world: float) -> float:
    return x / world * 360.0 - 180.0


def _y_to_lat(y: float, world: float) -> float:
    n = math.pi - 2.0 * math.pi * (y / world)
    return math.degrees(math.atan(math.sinh(n)))


def location_to_pixel(loc: Location, level: int, size: int = 256) -> Tuple[float, float]:
    """
    Convert a location to global pixel coordinates at `level` for tiles of
    `size` pixels. (0, 0) is the north-west corner of tile (0, 0).
    """
    world = _world_size(level, size)
    return _lon_to_x(loc.longitude, world), _lat_to_y(loc.latitude, world)


def pixel_to_location(px: float, py: float, level: int, size: int = 256) -> Location:
    """Inverse of location_to_pixel()."""
    world = _world_size(level, size)
    return Location(latitude=_y_to_lat(py, world), longitude=_x_to_lon(px, world))


def location_to_tile_id(loc: Location, level: int) -> Tuple[int, int]:
    """
    Return the (x, y) id of the tile containing `loc`.
    Ids are clamped into [0, 2**level - 1] so out-of-range longitudes map to
    the edge tiles.
    """
    px, py = location_to_pixel(loc, level, size=1)
    n = 2 ** int(level)
    x = min(max(int(math.floor(px)), 0), n - 1)
    y = min(max(int(math.floor(py)), 0), n - 1)
    return x, y


def tile_id_to_location(x: float, y: float, level: int) -> Location:
    """North-west corner of tile (x, y). Fractional ids address inside the tile."""
    return pixel_to_location(float(x), float(y), level, size=1)


def get_enclosing_tile_ids(a: Location, b: Location, level: int) -> Tuple[int, int, int, int]:
    """
    Tile id range (x1, y1, x2, y2), inclusive, covering both locations.
    The result is ordered so that x1 <= x2 and y1 <= y2 whichever corners
    were passed.
    """
    ax, ay = location_to_tile_id(a, level)
    bx, by = location_to_tile_id(b, level)
    return min(ax, bx), min(ay, by), max(ax, bx), max(ay, by)


# -------------------------
# Terrain-RGB
# -------------------------
def pixel_to_height(r: int, g: int, b: int) -> float:
    """Decode a mapbox.terrain-rgb pixel into metres above sea level."""
    return -10000.0 + (int(r) * 256 * 256 + int(g) * 256 + int(b)) * 0.1
