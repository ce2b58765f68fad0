from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from .raster import RasterBuffer

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "beautified_photo.png"


def to_pil(buffer: RasterBuffer) -> Image.Image:
    return Image.fromarray(buffer.pixels)


def encode_png(buffer: RasterBuffer) -> bytes:
    out = io.BytesIO()
    to_pil(buffer).save(out, format="PNG")
    return out.getvalue()


def save_png(buffer: RasterBuffer, path: str | Path) -> Path:
    out_path = Path(path)
    if out_path.is_dir():
        out_path = out_path / EXPORT_FILENAME
    out_path.write_bytes(encode_png(buffer))
    logger.info("Exported %r to %s", buffer, out_path)
    return out_path
