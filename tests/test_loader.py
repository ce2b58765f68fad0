from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from photo_beautify.loader import DecodeError, fit_size, load_image, load_image_file

from .helpers import jpeg_bytes, png_bytes


def encode(img: Image.Image, fmt: str) -> bytes:
    out = io.BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


def test_large_image_is_downscaled_to_800() -> None:
    buf = load_image(png_bytes(1600, 800))
    assert (buf.width, buf.height) == (800, 400)


def test_portrait_image_is_downscaled_on_height() -> None:
    buf = load_image(png_bytes(300, 1200))
    assert (buf.width, buf.height) == (200, 800)


def test_small_image_keeps_size_and_pixels() -> None:
    buf = load_image(png_bytes(40, 30, color=(1, 2, 3, 4)))
    assert (buf.width, buf.height) == (40, 30)
    assert buf.pixels[0, 0].tolist() == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "size,expected",
    [
        ((800, 800), (800, 800)),
        ((801, 400), (800, 399)),
        ((1000, 700), (800, 560)),
        ((5000, 3), (800, 1)),
        ((10, 20), (10, 20)),
    ],
)
def test_fit_size(size: tuple[int, int], expected: tuple[int, int]) -> None:
    assert fit_size(*size) == expected


def test_loaded_buffer_is_frozen() -> None:
    buf = load_image(png_bytes(4, 4))
    assert buf.is_frozen
    with pytest.raises(ValueError):
        buf.pixels[0, 0, 0] = 9


@pytest.mark.parametrize("fmt", ["JPEG", "GIF", "BMP"])
def test_other_formats_decode_to_rgba(fmt: str) -> None:
    img = Image.new("RGB", (12, 8), color=(250, 250, 250))
    buf = load_image(encode(img, fmt))
    assert (buf.width, buf.height) == (12, 8)
    assert np.all(buf.alpha == 255)


def test_rejects_non_image_bytes() -> None:
    with pytest.raises(DecodeError):
        load_image(b"definitely not an image")


def test_rejects_truncated_png() -> None:
    data = png_bytes(64, 64)
    with pytest.raises(DecodeError):
        load_image(data[: len(data) // 2])


def test_load_image_file(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes(10, 5))
    buf = load_image_file(path)
    assert (buf.width, buf.height) == (10, 5)


def test_exif_rotation_is_applied() -> None:
    buf = load_image(jpeg_bytes(40, 20, orientation=6))
    assert (buf.width, buf.height) == (20, 40)


def test_exif_rotation_happens_before_downscale() -> None:
    buf = load_image(jpeg_bytes(1600, 800, orientation=8))
    assert (buf.width, buf.height) == (400, 800)


def test_jpeg_without_orientation_keeps_layout() -> None:
    buf = load_image(jpeg_bytes(40, 20))
    assert (buf.width, buf.height) == (40, 20)
