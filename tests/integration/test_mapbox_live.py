#!/usr/bin/env python3
"""
Integration tests against the live Mapbox API.

Skipped unless MAPBOX_TOKEN is set. Output images land in the pytest tmp dir;
pass MBCLIENT_KEEP_IMAGES=/some/dir to keep them for a visual check.
"""

import os
import sys
import pytest
from PIL import Image, ImageDraw

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from mbclient.base.client import Base
from mbclient.common.geo import get_enclosing_tile_ids
from mbclient.common.types import Location
from mbclient.maps import (
    DrawConfig,
    FileCache,
    Justify,
    MapFormat,
    MapID,
    Maps,
    Tile,
    save_image_jpg,
    stitch_tiles,
)

pytestmark = pytest.mark.skipif(not os.getenv("MAPBOX_TOKEN"), reason="MAPBOX_TOKEN not set")

SIZE = 512
AUCKLAND = Location(-36.8485, 174.7633)
PIN = DrawConfig(vertical=Justify.BOTTOM, horizontal=Justify.CENTER)


def _pin() -> Image.Image:
    img = Image.new("RGBA", (24, 32), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    d.ellipse([2, 0, 22, 20], fill=(230, 40, 20, 255))
    d.polygon([(6, 16), (18, 16), (12, 31)], fill=(230, 40, 20, 255))
    return img


@pytest.fixture(scope="module")
def maps():
    return Maps(Base())


@pytest.fixture
def out_dir(tmp_path):
    keep = os.getenv("MBCLIENT_KEEP_IMAGES")
    if keep:
        os.makedirs(keep, exist_ok=True)
        return keep
    return str(tmp_path)


def test_single_tile_drawing(maps, out_dir):
    x, y, z = 15, 9, 4
    img = maps.get_tile(MapID.SATELLITE, x, y, z, MapFormat.JPG90, True)
    assert img.size == (SIZE, SIZE)

    tile = Tile(x, y, z, SIZE, img)
    tile.draw_local_xy(_pin(), SIZE // 2, SIZE // 2)
    tile.draw_global_xy(_pin(), SIZE * x + SIZE // 2, SIZE * y + SIZE // 2)
    for h in (Justify.LEFT, Justify.CENTER, Justify.RIGHT):
        tile.draw_location(_pin(), AUCKLAND, DrawConfig(vertical=Justify.CENTER, horizontal=h))
    tile.draw_location(_pin(), AUCKLAND, PIN)
    save_image_jpg(tile, os.path.join(out_dir, "mbclient-tile.jpg"))


def test_composite_tiles(maps, out_dir, tmp_path):
    maps.set_cache(FileCache(str(tmp_path / "cache")))
    a = Location(-45.942805, 166.568500)
    b = Location(-34.2186101, 178.6)
    level = 6

    x1, y1, x2, y2 = get_enclosing_tile_ids(a, b, level)
    grid = maps.get_enclosing_tiles(MapID.SATELLITE, a, b, level, MapFormat.JPG90, True)
    assert len(grid) == y2 - y1 + 1
    assert len(grid[0]) == x2 - x1 + 1

    tile = stitch_tiles(grid)
    assert (tile.x, tile.y) == (x1, y1)
    for loc in (Location(-41.2865, 174.7762), AUCKLAND, Location(-43.5321, 172.6362)):
        tile.draw_location(_pin(), loc, PIN)
    save_image_jpg(tile, os.path.join(out_dir, "mbclient-composite.jpg"))


def test_terrain_altitude(maps):
    x, y = 63, 39
    img = maps.get_tile(MapID.TERRAIN_RGB, x, y, 6, MapFormat.PNG_RAW, False)
    tile = Tile(x, y, 6, 256, img)
    centre = tile.pixel_to_location(128, 128)
    assert -500.0 < tile.get_altitude(centre) < 9000.0
