"""
Command line front-end for the tileset and tile clients.

Examples:
  mbclient tileset upload --username me --tileset quakes data/quakes.geojson.ld
  mbclient tileset create --username me --tileset quakes config/recipe.json
  mbclient tileset publish --username me --tileset quakes
  mbclient tileset wait --username me --tileset quakes
  mbclient tiles fetch --map-id mapbox.satellite -x 15 -y 9 -z 4 --out /tmp/tile.jpg
  mbclient tiles compose --bbox -45.94 166.57 -34.22 178.6 --zoom 6 \
      --marker pin.png --at -41.2865,174.7762 --out /tmp/nz.jpg
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from mbclient.base.client import Base
from mbclient.base.errors import MapboxError
from mbclient.common.config import load_config
from mbclient.common.logging_setup import setup_logging
from mbclient.common.types import Location
from mbclient.maps.cache import FileCache
from mbclient.maps.constants import tile_size
from mbclient.maps.imaging import load_image, save_image_jpg, save_image_png
from mbclient.maps.maps import Maps
from mbclient.maps.tile import DrawConfig, Justify, Tile, stitch_tiles
from mbclient.tilesets.tileset import Tileset


log = logging.getLogger("mbclient.cli")

PIN = DrawConfig(vertical=Justify.BOTTOM, horizontal=Justify.CENTER)


def _parse_location(text: str) -> Location:
    try:
        lat, lon = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LON but got {text!r}")
    return Location(lat, lon)


def _save(tile_or_image, out: str) -> None:
    p = Path(out)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() in (".jpg", ".jpeg"):
        save_image_jpg(tile_or_image, p)
    else:
        save_image_png(tile_or_image, p)


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mbclient", description="Mapbox tilesets and raster tiles")
    ap.add_argument("--config", default=None, help="YAML config (default: config/params.yaml if present)")
    ap.add_argument("--token", default=None, help="Access token (default: MAPBOX_TOKEN / config)")
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR")
    ap.add_argument("--debug", action="store_true", help="Log request/response details")
    sub = ap.add_subparsers(dest="group", required=True)

    # tileset ...
    ts = sub.add_parser("tileset", help="Mapbox Tiling Service operations")
    ts_sub = ts.add_subparsers(dest="action", required=True)

    def _ts_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--username", default=None, help="Account name (default: MAPBOX_USERNAME / config)")
        p.add_argument("--tileset", required=True, help="Tileset id (without the username prefix)")

    p = ts_sub.add_parser("upload", help="Upload line-delimited GeoJSON as the tileset source")
    _ts_common(p)
    p.add_argument("file")
    p = ts_sub.add_parser("create", help="Create the tileset from a recipe JSON file")
    _ts_common(p)
    p.add_argument("recipe")
    p = ts_sub.add_parser("publish", help="Publish the tileset")
    _ts_common(p)
    p = ts_sub.add_parser("status", help="Show the latest job status once")
    _ts_common(p)
    p = ts_sub.add_parser("wait", help="Poll until the latest job fails or succeeds")
    _ts_common(p)
    p.add_argument("--interval", type=float, default=None, help="Seconds between polls")

    # tiles ...
    tl = sub.add_parser("tiles", help="Raster tile retrieval")
    tl_sub = tl.add_subparsers(dest="action", required=True)

    def _tl_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--map-id", default="mapbox.satellite")
        p.add_argument("--format", default=None, help="png, png256, jpg90, pngraw, ...")
        p.add_argument("--high-dpi", action="store_true", default=None, help="Request @2x (512 px) tiles")
        p.add_argument("--cache", default=None, help="Tile cache directory")
        p.add_argument("--out", required=True, help="Output image (.png or .jpg)")

    p = tl_sub.add_parser("fetch", help="Fetch a single tile")
    _tl_common(p)
    p.add_argument("-x", type=int, required=True)
    p.add_argument("-y", type=int, required=True)
    p.add_argument("-z", type=int, required=True)

    p = tl_sub.add_parser("compose", help="Stitch all tiles covering a box and draw markers")
    _tl_common(p)
    p.add_argument("--bbox", type=float, nargs=4, required=True, metavar=("LAT1", "LON1", "LAT2", "LON2"))
    p.add_argument("--zoom", type=int, required=True)
    p.add_argument("--marker", default=None, help="Marker image drawn at each --at location")
    p.add_argument("--at", type=_parse_location, action="append", default=[], metavar="LAT,LON")
    return ap


def _run_tileset(args: argparse.Namespace, base: Base, cfg: Dict[str, Any]) -> int:
    username = args.username or cfg["mapbox"].get("username")
    if not username:
        raise ValueError("username is required (--username, MAPBOX_USERNAME or config mapbox.username)")
    ts = Tileset(base)
    ts.set_tileset(username, args.tileset)

    if args.action == "upload":
        _emit(ts.upload_geojson(args.file).to_dict())
    elif args.action == "create":
        _emit({"message": ts.create_tileset(args.recipe).message})
    elif args.action == "publish":
        _emit(ts.publish_tileset().to_dict())
    elif args.action == "status":
        _emit(ts.get_status().to_dict())
    elif args.action == "wait":
        interval = args.interval if args.interval is not None else float(cfg["tilesets"]["poll_interval_s"])
        status = ts.check_job_status(poll_interval=interval)
        _emit(status.to_dict())
        return 0 if status.status == "success" else 2
    return 0


def _run_tiles(args: argparse.Namespace, base: Base, cfg: Dict[str, Any]) -> int:
    maps_cfg = cfg["maps"]
    fmt = args.format or maps_cfg.get("format") or "png"
    high_dpi = bool(maps_cfg.get("high_dpi")) if args.high_dpi is None else args.high_dpi
    cache_root = args.cache or maps_cfg.get("cache_root")
    maps = Maps(base, FileCache(cache_root) if cache_root else None)

    if args.action == "fetch":
        img = maps.get_tile(args.map_id, args.x, args.y, args.z, fmt, high_dpi)
        _save(img, args.out)
        _emit({"out": args.out, "width": img.width, "height": img.height})
        return 0

    lat1, lon1, lat2, lon2 = args.bbox
    a, b = Location(lat1, lon1), Location(lat2, lon2)
    grid = maps.get_enclosing_tiles(args.map_id, a, b, args.zoom, fmt, high_dpi)
    tile: Tile = stitch_tiles(grid)

    if args.at:
        if args.marker:
            marker, _ = load_image(args.marker)
            for loc in args.at:
                tile.draw_location(marker, loc, PIN)
        else:
            for loc in args.at:
                tile.draw_point(loc, radius=max(3, tile_size(high_dpi) // 64))
    _save(tile, args.out)
    _emit({
        "out": args.out,
        "width": tile.width,
        "height": tile.height,
        "tiles": [len(grid[0]), len(grid)],
        "origin": {"x": tile.x, "y": tile.y, "z": tile.level},
    })
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        setup_logging(args.log_level)
        log.error("Cannot load config: %s", e)
        return 1
    setup_logging(args.log_level or cfg["logging"].get("level"))

    try:
        base = Base(
            args.token or cfg["mapbox"].get("token"),
            debug=args.debug,
            timeout=float(cfg["mapbox"].get("timeout_s", 30.0)),
        )
        if args.group == "tileset":
            return _run_tileset(args, base, cfg)
        return _run_tiles(args, base, cfg)
    except (MapboxError, OSError, ValueError) as e:
        log.error("%s: %s", type(e).__name__, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
