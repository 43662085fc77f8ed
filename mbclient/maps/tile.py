from __future__ import annotations

"""
Pixel-space drawing over a raster tile (or a stitched block of tiles).

A Tile knows where it sits in the Web Mercator pixel grid: its north-west
corner is tile (x, y) at `level`, and every underlying tile is `size` pixels
square. That is enough to place markers, points and lines by location:

    tile = Tile(x, y, z, 512, img)
    tile.draw_location(pin, Location(-36.8485, 174.7633),
                       DrawConfig(vertical=Justify.BOTTOM, horizontal=Justify.CENTER))
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from mbclient.common.geo import location_to_pixel, pixel_to_height, pixel_to_location
from mbclient.common.types import Location


class Justify(str, Enum):
    """
    Which edge of the drawn image sits on the anchor point.
    BOTTOM puts the image above the point (a map pin), LEFT puts it to the
    right of the point, CENTER centres it on that axis.
    """
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class DrawConfig:
    vertical: Justify = Justify.CENTER
    horizontal: Justify = Justify.CENTER

    def __post_init__(self) -> None:
        if self.vertical in (Justify.LEFT, Justify.RIGHT):
            raise ValueError("vertical justification must be CENTER, TOP or BOTTOM")
        if self.horizontal in (Justify.TOP, Justify.BOTTOM):
            raise ValueError("horizontal justification must be CENTER, LEFT or RIGHT")


CENTER = DrawConfig()


class Tile:
    def __init__(self, x: int, y: int, level: int, size: int, image: Image.Image):
        """
        Params:
            x, y: id of the north-west tile covered by `image`
            level: zoom level
            size: pixel size of one underlying tile (256, or 512 for @2x)
            image: raster; converted to RGBA so overlays keep their alpha
        """
        if size <= 0:
            raise ValueError("size must be > 0")
        self.x = int(x)
        self.y = int(y)
        self.level = int(level)
        self.size = int(size)
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(x={self.x}, y={self.y}, level={self.level}, "
            f"size={self.size}, px={self.width}x{self.height})"
        )

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def origin(self) -> Tuple[int, int]:
        """Global pixel coordinates of this tile's top-left pixel."""
        return self.x * self.size, self.y * self.size

    def contains_local(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ----------------------------
    # Coordinate transforms
    # ----------------------------
    def location_to_pixel(self, loc: Location) -> Tuple[float, float]:
        """Location -> local (x, y) pixel; may fall outside the image."""
        gx, gy = location_to_pixel(loc, self.level, self.size)
        ox, oy = self.origin
        return gx - ox, gy - oy

    def pixel_to_location(self, x: float, y: float) -> Location:
        ox, oy = self.origin
        return pixel_to_location(x + ox, y + oy, self.level, self.size)

    # ----------------------------
    # Drawing
    # ----------------------------
    def justify(self, img: Image.Image, x: int, y: int, config: DrawConfig = CENTER) -> Tuple[int, int]:
        """Top-left paste position for `img` anchored at (x, y)."""
        w, h = img.size
        if config.horizontal == Justify.CENTER:
            x -= w // 2
        elif config.horizontal == Justify.RIGHT:
            x -= w
        if config.vertical == Justify.CENTER:
            y -= h // 2
        elif config.vertical == Justify.BOTTOM:
            y -= h
        return x, y

    def draw_local_xy(self, img: Image.Image, x: int, y: int, config: DrawConfig = CENTER) -> None:
        """Draw `img` at local pixel (x, y); parts outside the tile are clipped."""
        px, py = self.justify(img, int(x), int(y), config)
        if img.mode == "RGBA":
            self.image.paste(img, (px, py), mask=img)
        else:
            self.image.paste(img.convert("RGBA"), (px, py))

    def draw_global_xy(self, img: Image.Image, x: int, y: int, config: DrawConfig = CENTER) -> None:
        """
        Draw `img` at global pixel (x, y), i.e. pixel coordinates across the
        whole map at this level.

        Raises:
            ValueError: the point is not inside this tile
        """
        ox, oy = self.origin
        lx, ly = int(x) - ox, int(y) - oy
        if not self.contains_local(lx, ly):
            raise ValueError(f"global pixel ({x}, {y}) is outside {self!r}")
        self.draw_local_xy(img, lx, ly, config)

    def draw_location(self, img: Image.Image, loc: Location, config: DrawConfig = CENTER) -> None:
        x, y = self.location_to_pixel(loc)
        self.draw_local_xy(img, int(round(x)), int(round(y)), config)

    def draw_point(self, loc: Location, radius: int = 4, fill=(255, 0, 0, 255)) -> None:
        x, y = self.location_to_pixel(loc)
        ImageDraw.Draw(self.image).ellipse(
            [x - radius, y - radius, x + radius, y + radius], fill=fill
        )

    def draw_line(self, a: Location, b: Location, fill=(255, 0, 0, 255), width: int = 2) -> None:
        ImageDraw.Draw(self.image).line(
            [self.location_to_pixel(a), self.location_to_pixel(b)], fill=fill, width=int(width)
        )

    def draw_path(self, locations: Sequence[Location], fill=(255, 0, 0, 255), width: int = 2) -> None:
        if len(locations) < 2:
            return
        ImageDraw.Draw(self.image).line(
            [self.location_to_pixel(loc) for loc in locations], fill=fill, width=int(width), joint="curve"
        )

    def interpolate_locations(self, a: Location, b: Location, count: int) -> List[Location]:
        """
        `count` locations evenly spaced in pixel space from a to b (both
        included), so they lie on the straight line draw_line() renders.
        """
        if count < 2:
            raise ValueError("count must be >= 2")
        ax, ay = self.location_to_pixel(a)
        bx, by = self.location_to_pixel(b)
        out: List[Location] = []
        for i in range(count):
            t = i / float(count - 1)
            out.append(self.pixel_to_location(ax + (bx - ax) * t, ay + (by - ay) * t))
        return out

    # ----------------------------
    # Terrain-RGB
    # ----------------------------
    def get_altitude(self, loc: Location) -> float:
        """Altitude (m) at `loc`; only meaningful for mapbox.terrain-rgb pngraw tiles."""
        x, y = self.location_to_pixel(loc)
        if not self.contains_local(x, y):
            raise ValueError(f"{loc} is outside {self!r}")
        r, g, b = self.image.getpixel((int(x), int(y)))[:3]
        return pixel_to_height(r, g, b)

    def elevation(self) -> np.ndarray:
        """Whole-image Terrain-RGB decode, shape (height, width), float32 metres."""
        arr = np.asarray(self.image.convert("RGB")).astype(np.float32)
        R, G, B = arr[:, :, 0], arr[:, :, 1], arr[:, :, 2]
        return -10000.0 + (R * 256 * 256 + G * 256 + B) * 0.1


def stitch_tiles(tiles: Sequence[Sequence[Tile]]) -> Tile:
    """
    Composite a rectangular grid of tiles (rows by y, columns by x) into a
    single Tile anchored at tiles[0][0].

    Raises:
        ValueError: empty or ragged grid, or mixed tile sizes
    """
    if not tiles or not tiles[0]:
        raise ValueError("no tiles to stitch")
    cols = len(tiles[0])
    first = tiles[0][0]
    size = first.size
    for row in tiles:
        if len(row) != cols:
            raise ValueError("tile grid is not rectangular")
        for t in row:
            if t.size != size:
                raise ValueError("all tiles must share the same size")

    out = Image.new("RGBA", (cols * size, len(tiles) * size))
    for r, row in enumerate(tiles):
        for c, t in enumerate(row):
            out.paste(t.image, (c * size, r * size))
    return Tile(first.x, first.y, first.level, size, out)
