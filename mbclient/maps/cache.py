from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from mbclient.maps.constants import MapFormatLike, MapIDLike, enum_value


log = logging.getLogger(__name__)


class Cache(ABC):
    """Tile byte store consulted by Maps.get_tile() before any request."""

    @abstractmethod
    def fetch(
        self, map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool
    ) -> Optional[bytes]:
        """Return cached tile bytes, or None on a miss."""

    @abstractmethod
    def save(
        self, data: bytes, map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool
    ) -> None:
        """Store tile bytes."""


class FileCache(Cache):
    """
    File-based cache for raw tile payloads, laid out as

        basedir/
          └─ {map_id}/
              └─ {z}/
                  └─ {x}/
                      └─ {y}[@2x].{fmt}

    Payloads are stored exactly as downloaded (no re-encoding).
    """

    def __init__(self, basedir: str):
        self.root = Path(basedir)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(
        self, map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool
    ) -> Path:
        dpi = "@2x" if high_dpi else ""
        return self.root / enum_value(map_id) / str(int(z)) / str(int(x)) / f"{int(y)}{dpi}.{enum_value(fmt)}"

    def fetch(
        self, map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool
    ) -> Optional[bytes]:
        path = self.path_for(map_id, x, y, z, fmt, high_dpi)
        if not path.is_file():
            return None
        log.debug("Cache hit %s", path)
        return path.read_bytes()

    def save(
        self, data: bytes, map_id: MapIDLike, x: int, y: int, z: int, fmt: MapFormatLike, high_dpi: bool
    ) -> None:
        path = self.path_for(map_id, x, y, z, fmt, high_dpi)
        path.parent.mkdir(parents=True, exist_ok=True)
        # readers only ever see complete tiles
        tmp = path.with_name(path.name + ".part")
        tmp.write_bytes(data)
        tmp.replace(path)

    def stats(self) -> Dict[str, int]:
        files = [p for p in self.root.rglob("*") if p.is_file() and not p.name.endswith(".part")]
        return {
            "tiles": len(files),
            "bytes": sum(p.stat().st_size for p in files),
        }
