from __future__ import annotations

from enum import Enum
from typing import Union


class MapID(str, Enum):
    """Mapbox-hosted raster tilesets."""
    STREETS = "mapbox.streets"
    LIGHT = "mapbox.light"
    DARK = "mapbox.dark"
    SATELLITE = "mapbox.satellite"
    STREETS_SATELLITE = "mapbox.streets-satellite"
    WHEATPASTE = "mapbox.wheatpaste"
    STREETS_BASIC = "mapbox.streets-basic"
    COMIC = "mapbox.comic"
    OUTDOORS = "mapbox.outdoors"
    RUN_BIKE_HIKE = "mapbox.run-bike-hike"
    PENCIL = "mapbox.pencil"
    PIRATES = "mapbox.pirates"
    EMERALD = "mapbox.emerald"
    HIGH_CONTRAST = "mapbox.high-contrast"
    TERRAIN_RGB = "mapbox.terrain-rgb"


class MapFormat(str, Enum):
    """Raster tile formats; the jpg/png suffix selects compression quality/palette."""
    PNG = "png"
    PNG32 = "png32"
    PNG64 = "png64"
    PNG128 = "png128"
    PNG256 = "png256"
    JPG70 = "jpg70"
    JPG80 = "jpg80"
    JPG90 = "jpg90"
    PNG_RAW = "pngraw"


# Plain strings are accepted too, e.g. "username.tileset-id" for user tilesets
MapIDLike = Union[MapID, str]
MapFormatLike = Union[MapFormat, str]

TILE_SIZE = 256
TILE_SIZE_HIGH_DPI = 512


def enum_value(v: Union[Enum, str]) -> str:
    return str(v.value) if isinstance(v, Enum) else str(v)


def tile_size(high_dpi: bool) -> int:
    return TILE_SIZE_HIGH_DPI if high_dpi else TILE_SIZE
