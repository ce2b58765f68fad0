from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .raster import RasterBuffer

logger = logging.getLogger(__name__)

MAX_SIDE = 800

SUPPORTED_FORMATS = ("PNG", "JPEG", "MPO", "GIF", "WEBP", "BMP", "TIFF")
ACCEPTED_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".tif", ".tiff")


class DecodeError(ValueError):
    pass


def fit_size(width: int, height: int, max_side: int = MAX_SIDE) -> tuple[int, int]:
    """Scale ``(width, height)`` so the longer side is at most ``max_side``."""
    side = max(width, height)
    if side <= max_side:
        return width, height
    # Integer arithmetic keeps the result exact for ratios like 2:1.
    if width >= height:
        return max_side, max(1, height * max_side // width)
    return max(1, width * max_side // height), max_side


def pil_to_raster(pil_img: Image.Image) -> RasterBuffer:
    img = pil_img.convert("RGBA")
    return RasterBuffer(np.asarray(img, dtype=np.uint8).copy())


def load_image(data: bytes, max_side: int = MAX_SIDE) -> RasterBuffer:
    """Decode image file bytes into a frozen RGBA buffer, downscaled to fit ``max_side``."""
    try:
        pil_img = Image.open(io.BytesIO(data))
        if pil_img.format not in SUPPORTED_FORMATS:
            raise UnidentifiedImageError(f"unsupported format {pil_img.format}")
        # Force a full decode so truncated files fail here.
        pil_img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError, SyntaxError, ValueError) as e:
        logger.warning("Could not decode image (%d bytes): %s", len(data), e)
        raise DecodeError(f"Not a supported image: {e}") from e

    fmt = pil_img.format
    # Applies EXIF orientation, including mirrored modes.
    pil_img = ImageOps.exif_transpose(pil_img)
    w, h = pil_img.size
    target = fit_size(w, h, max_side)
    rgba = pil_img.convert("RGBA")
    if target != (w, h):
        rgba = rgba.resize(target, Image.Resampling.LANCZOS)
    logger.info("Loaded %s image %dx%d -> %dx%d", fmt, w, h, target[0], target[1])
    return pil_to_raster(rgba).frozen()


def load_image_file(path: str | Path, max_side: int = MAX_SIDE) -> RasterBuffer:
    path = Path(path)
    return load_image(path.read_bytes(), max_side)
