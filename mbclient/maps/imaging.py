from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple, Union

from PIL import Image


def decode_image(data: bytes) -> Image.Image:
    """Decode PNG/JPEG bytes; raises PIL.UnidentifiedImageError (an OSError) on garbage."""
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def load_image(path: Union[str, Path]) -> Tuple[Image.Image, str]:
    """Load an image file, returning (image, format) e.g. (img, "PNG")."""
    with Image.open(path) as img:
        img.load()
        fmt = img.format or ""
        return img.copy(), fmt


def _as_image(obj) -> Image.Image:
    # Accept a Tile (anything exposing `.image`) as well as a bare image
    return getattr(obj, "image", obj)


def save_image_jpg(obj, path: Union[str, Path], quality: int = 90) -> None:
    """Save as JPEG; alpha is dropped."""
    img = _as_image(obj)
    if img.mode != "RGB":
        img = img.convert("RGB")
    img.save(str(path), format="JPEG", quality=int(quality))


def save_image_png(obj, path: Union[str, Path]) -> None:
    _as_image(obj).save(str(path), format="PNG")
