from __future__ import annotations

import numpy as np
import pytest

from photo_beautify.raster import RasterBuffer
from photo_beautify.smoothing import (
    apply_smooth,
    blend,
    blur_premultiplied,
    blur_sigma,
    gaussian_blur,
    gaussian_kernel,
    smooth_opacity,
)


def test_kernel_is_normalized_and_symmetric() -> None:
    k = gaussian_kernel(1.5)
    assert k.size == 2 * 5 + 1
    assert k.sum() == pytest.approx(1.0)
    assert np.allclose(k, k[::-1])
    assert k.argmax() == k.size // 2


def test_zero_sigma_kernel_is_unit() -> None:
    assert gaussian_kernel(0).tolist() == [1.0]


def test_sigma_and_opacity_mapping() -> None:
    assert blur_sigma(100) == pytest.approx(3.0)
    assert blur_sigma(30) == pytest.approx(0.9)
    assert smooth_opacity(100) == pytest.approx(0.5)
    assert smooth_opacity(30) == pytest.approx(0.15)


def test_blur_keeps_flat_regions() -> None:
    rgb = np.full((6, 9, 3), 42.0)
    assert np.allclose(gaussian_blur(rgb, 2.0), 42.0)


def test_blur_spreads_a_single_bright_pixel() -> None:
    rgb = np.zeros((11, 11, 3))
    rgb[5, 5] = 255.0
    out = gaussian_blur(rgb, 1.0)
    assert out[5, 5, 0] < 255.0
    assert out[5, 6, 0] > 0.0
    assert out.sum() == pytest.approx(rgb.sum())


def test_blend_weights() -> None:
    sharp = np.array([100.0])
    blurred = np.array([200.0])
    assert blend(sharp, blurred, 0.25)[0] == pytest.approx(125.0)


def test_smooth_zero_returns_input() -> None:
    buf = RasterBuffer.filled(3, 3, (10, 20, 30, 40))
    assert apply_smooth(buf, 0) is buf


def test_smooth_composite_on_edge() -> None:
    pixels = np.zeros((4, 8, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[:, 4:, :3] = 255
    buf = RasterBuffer(pixels)
    out = apply_smooth(buf, 100)

    expected_blur = gaussian_blur(pixels[..., :3].astype(np.float64), 3.0)
    expected = np.floor(np.clip(blend(pixels[..., :3].astype(np.float64), expected_blur, 0.5), 0, 255) + 0.5)
    assert np.array_equal(out.rgb, expected.astype(np.uint8))
    assert np.array_equal(out.alpha, buf.alpha)
    # Edge softened on both sides.
    assert 0 < out.rgb[0, 3, 0] < 128 < out.rgb[0, 4, 0] < 255


def test_transparent_pixels_do_not_darken_opaque_edge() -> None:
    pixels = np.zeros((4, 8, 4), dtype=np.uint8)
    pixels[:, 4:] = 255
    buf = RasterBuffer(pixels)
    out = apply_smooth(buf, 30)
    assert out.rgb[:, 4:].tolist() == [[[255, 255, 255]] * 4] * 4
    assert np.array_equal(out.alpha, buf.alpha)


def test_uniform_partial_alpha_matches_straight_blur() -> None:
    rgb = np.zeros((5, 9, 3))
    rgb[:, 5:] = 180.0
    a = np.full((5, 9), 128, dtype=np.uint8)
    out = blur_premultiplied(rgb, a, 2.0)
    assert np.allclose(out, gaussian_blur(rgb, 2.0))


def test_fully_transparent_neighbourhood_keeps_its_color() -> None:
    rgb = np.full((3, 3, 3), 77.0)
    a = np.zeros((3, 3), dtype=np.uint8)
    assert np.array_equal(blur_premultiplied(rgb, a, 1.0), rgb)
