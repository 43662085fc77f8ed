"""
mbclient: a small client for the Mapbox web API

Packages:
- base/: token handling, HTTP helpers, error mapping
- tilesets/: upload, create, publish and job polling for tilesets
- maps/: raster tile fetching, caching, stitching and marker drawing
- common/: logging, config, geo transforms, response records

Entry point:
    mbclient --help
"""
from mbclient.base import Base
from mbclient.common.types import Location
from mbclient.maps import Maps
from mbclient.tilesets import Tileset

__version__ = "0.1.0"

__all__ = ["Base", "Location", "Maps", "Tileset", "__version__"]
