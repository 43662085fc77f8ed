"""
Unit tests for tile drawing and stitching
"""

import pytest
import os
import sys
import numpy as np
from PIL import Image

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from mbclient.common.geo import location_to_pixel
from mbclient.common.types import Location
from mbclient.maps.tile import CENTER, DrawConfig, Justify, Tile, stitch_tiles

WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)
AUCKLAND = Location(-36.8485, 174.7633)


def _tile(x=15, y=9, z=4, size=256, color=WHITE, mode="RGB"):
    img = Image.new(mode, (size, size), color[:3] if mode == "RGB" else color)
    return Tile(x, y, z, size, img)


def _marker(w=10, h=20, color=RED):
    return Image.new("RGBA", (w, h), color)


class TestJustify:
    """Anchor -> paste position"""

    @pytest.mark.parametrize(
        "config, expected",
        [
            (CENTER, (45, 40)),
            (DrawConfig(vertical=Justify.BOTTOM, horizontal=Justify.CENTER), (45, 30)),
            (DrawConfig(vertical=Justify.TOP, horizontal=Justify.LEFT), (50, 50)),
            (DrawConfig(vertical=Justify.CENTER, horizontal=Justify.RIGHT), (40, 40)),
        ],
    )
    def test_positions(self, config, expected):
        assert _tile().justify(_marker(), 50, 50, config) == expected

    def test_invalid_axis(self):
        with pytest.raises(ValueError):
            DrawConfig(vertical=Justify.LEFT)
        with pytest.raises(ValueError):
            DrawConfig(horizontal=Justify.TOP)


class TestDrawing:
    """Local, global and location drawing"""

    def test_tile_image_is_rgba(self):
        t = _tile()
        assert t.image.mode == "RGBA"
        assert (t.width, t.height) == (256, 256)

    def test_draw_local_top_left(self):
        t = _tile()
        t.draw_local_xy(_marker(4, 4), 10, 10, DrawConfig(Justify.TOP, Justify.LEFT))
        assert t.image.getpixel((10, 10)) == RED
        assert t.image.getpixel((13, 13)) == RED
        assert t.image.getpixel((14, 14)) == WHITE

    def test_transparent_marker_keeps_background(self):
        t = _tile()
        t.draw_local_xy(Image.new("RGBA", (8, 8), (0, 0, 255, 0)), 20, 20)
        assert t.image.getpixel((20, 20)) == WHITE

    def test_draw_local_clips_at_edges(self):
        t = _tile()
        t.draw_local_xy(_marker(8, 8), 0, 0)
        assert t.image.getpixel((0, 0)) == RED
        assert t.image.getpixel((4, 4)) == WHITE

    def test_draw_global_translates(self):
        t = _tile(x=2, y=3, z=3)
        t.draw_global_xy(_marker(2, 2), 2 * 256 + 5, 3 * 256 + 5, DrawConfig(Justify.TOP, Justify.LEFT))
        assert t.image.getpixel((5, 5)) == RED

    def test_draw_global_outside_raises(self):
        t = _tile(x=2, y=3, z=3)
        with pytest.raises(ValueError, match="outside"):
            t.draw_global_xy(_marker(), 5, 5)

    def test_draw_location_pin(self):
        t = _tile(size=512)
        px, py = t.location_to_pixel(AUCKLAND)
        t.draw_location(_marker(10, 20), AUCKLAND, DrawConfig(vertical=Justify.BOTTOM))
        # pin body sits just above the anchor
        assert t.image.getpixel((int(round(px)), int(round(py)) - 5)) == RED
        assert t.image.getpixel((int(round(px)), int(round(py)) + 5)) == WHITE

    def test_draw_point(self):
        t = _tile()
        px, py = t.location_to_pixel(AUCKLAND)
        t.draw_point(AUCKLAND, radius=3, fill=RED)
        assert t.image.getpixel((int(px), int(py))) == RED

    def test_draw_line(self):
        t = _tile()
        a = t.pixel_to_location(10, 128)
        b = t.pixel_to_location(240, 128)
        t.draw_line(a, b, fill=RED, width=3)
        assert t.image.getpixel((128, 128)) == RED
        assert t.image.getpixel((128, 20)) == WHITE


class TestTransforms:
    """Local pixel <-> location"""

    def test_location_inside_its_tile(self):
        t = _tile(size=512)
        x, y = t.location_to_pixel(AUCKLAND)
        assert t.contains_local(x, y)

    def test_local_is_global_minus_origin(self):
        t = _tile(size=512)
        gx, gy = location_to_pixel(AUCKLAND, 4, 512)
        x, y = t.location_to_pixel(AUCKLAND)
        assert (gx - x, gy - y) == pytest.approx((15 * 512, 9 * 512))

    def test_round_trip(self):
        t = _tile()
        loc = t.pixel_to_location(100.5, 37.25)
        assert t.location_to_pixel(loc) == pytest.approx((100.5, 37.25))

    def test_interpolate_locations(self):
        t = _tile()
        a = t.pixel_to_location(0, 0)
        b = t.pixel_to_location(200, 100)
        pts = t.interpolate_locations(a, b, 3)
        assert len(pts) == 3
        assert t.location_to_pixel(pts[1]) == pytest.approx((100, 50))
        assert pts[0].latitude == pytest.approx(a.latitude)
        assert pts[-1].longitude == pytest.approx(b.longitude)

    def test_interpolate_needs_two(self):
        with pytest.raises(ValueError):
            _tile().interpolate_locations(AUCKLAND, AUCKLAND, 1)


class TestTerrain:
    """Terrain-RGB decoding on tiles"""

    def test_sea_level_tile(self):
        t = _tile(size=256, color=(1, 134, 160, 255))
        centre = t.pixel_to_location(128, 128)
        assert t.get_altitude(centre) == pytest.approx(0.0, abs=1e-6)
        elev = t.elevation()
        assert elev.shape == (256, 256)
        assert np.allclose(elev, 0.0, atol=1e-3)

    def test_altitude_outside_raises(self):
        t = _tile()
        with pytest.raises(ValueError):
            t.get_altitude(Location(51.5, -0.12))


class TestStitch:
    """Composite tile grids"""

    def _grid(self, rows=2, cols=3, size=256):
        colors = [[(r * 100, c * 80, 50, 255) for c in range(cols)] for r in range(rows)]
        grid = [
            [Tile(10 + c, 20 + r, 6, size, Image.new("RGBA", (size, size), colors[r][c])) for c in range(cols)]
            for r in range(rows)
        ]
        return grid, colors

    def test_stitch_layout(self):
        grid, colors = self._grid()
        out = stitch_tiles(grid)
        assert (out.width, out.height) == (3 * 256, 2 * 256)
        assert (out.x, out.y, out.level, out.size) == (10, 20, 6, 256)
        assert out.image.getpixel((300, 10)) == colors[0][1]
        assert out.image.getpixel((600, 400)) == colors[1][2]

    def test_stitched_tile_draws_by_location(self):
        grid, _ = self._grid()
        out = stitch_tiles(grid)
        loc = grid[1][2].pixel_to_location(50, 60)
        x, y = out.location_to_pixel(loc)
        assert (x, y) == pytest.approx((2 * 256 + 50, 256 + 60))

    def test_empty_grid(self):
        with pytest.raises(ValueError):
            stitch_tiles([])
        with pytest.raises(ValueError):
            stitch_tiles([[]])

    def test_ragged_grid(self):
        grid, _ = self._grid()
        grid[1] = grid[1][:2]
        with pytest.raises(ValueError, match="rectangular"):
            stitch_tiles(grid)

    def test_mixed_sizes(self):
        grid, _ = self._grid(rows=1, cols=2)
        grid[0][1] = _tile(size=512)
        with pytest.raises(ValueError, match="size"):
            stitch_tiles(grid)
