"""
Maps: raster tile retrieval and compositing

- Maps: fetches v4 raster tiles (optionally through a Cache)
- FileCache: on-disk `{map_id}/{z}/{x}/{y}` tile store
- Tile / stitch_tiles: pixel-space drawing over one or many stitched tiles
"""
from .cache import Cache, FileCache
from .constants import MapFormat, MapID
from .imaging import load_image, save_image_jpg, save_image_png
from .maps import Maps
from .tile import CENTER, DrawConfig, Justify, Tile, stitch_tiles

__all__ = [
    "Cache",
    "FileCache",
    "MapFormat",
    "MapID",
    "Maps",
    "Tile",
    "Justify",
    "DrawConfig",
    "CENTER",
    "stitch_tiles",
    "load_image",
    "save_image_jpg",
    "save_image_png",
]
