from __future__ import annotations

import io

from PIL import Image


def png_bytes(width: int, height: int, color=(120, 80, 200, 255)) -> bytes:
    out = io.BytesIO()
    Image.new("RGBA", (width, height), color=color).save(out, format="PNG")
    return out.getvalue()


def jpeg_bytes(width: int, height: int, orientation: int | None = None) -> bytes:
    out = io.BytesIO()
    exif = Image.Exif()
    if orientation is not None:
        exif[0x0112] = orientation
    Image.new("RGB", (width, height), color=(200, 150, 120)).save(out, format="JPEG", exif=exif.tobytes())
    return out.getvalue()
