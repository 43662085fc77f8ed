"""
Tilesets: Mapbox Tiling Service client

- Uploads line-delimited GeoJSON as a tileset source
- Creates a tileset from a recipe file and publishes it
- Polls the latest job until it fails or succeeds
"""
from .tileset import Tileset

__all__ = ["Tileset"]
