"""Softening composite: a Gaussian-blurred copy blended over the sharp render.

The blur is an explicit separable kernel so the result is a pure function of
the buffer and the ``smooth`` amount, independent of any drawing backend.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from .raster import RasterBuffer, to_float, to_uint8

logger = logging.getLogger(__name__)

ArrayF = np.ndarray

BLUR_SCALE = 3.0
SMOOTH_OPACITY = 0.5
KERNEL_TRUNCATE = 3.0


def blur_sigma(smooth: float) -> float:
    return float(smooth) / 100.0 * BLUR_SCALE


def smooth_opacity(smooth: float) -> float:
    return float(smooth) / 100.0 * SMOOTH_OPACITY


def gaussian_kernel(sigma: float) -> ArrayF:
    s = float(sigma)
    if s <= 0:
        return np.ones(1, dtype=np.float64)
    radius = int(math.ceil(KERNEL_TRUNCATE * s))
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    k = np.exp(-(x * x) / (2.0 * s * s))
    return k / k.sum()


def _convolve_axis(rgb: ArrayF, kernel: ArrayF, axis: int) -> ArrayF:
    radius = (kernel.size - 1) // 2
    if radius == 0:
        return rgb
    pad = [(0, 0)] * rgb.ndim
    pad[axis] = (radius, radius)
    padded = np.pad(rgb, pad, mode="edge")
    n = rgb.shape[axis]
    out = np.zeros_like(rgb, dtype=np.float64)
    for i, w in enumerate(kernel):
        out += w * np.take(padded, np.arange(i, i + n), axis=axis)
    return out


def gaussian_blur(rgb: ArrayF, sigma: float) -> ArrayF:
    """Separable Gaussian blur over rows then columns, edges replicated."""
    kernel = gaussian_kernel(sigma)
    out = _convolve_axis(rgb.astype(np.float64), kernel, axis=1)
    return _convolve_axis(out, kernel, axis=0)


def blend(sharp: ArrayF, blurred: ArrayF, alpha: float) -> ArrayF:
    alpha = float(np.clip(alpha, 0.0, 1.0))
    return sharp * (1.0 - alpha) + blurred * alpha


def blur_premultiplied(rgb: ArrayF, alpha8: np.ndarray, sigma: float) -> ArrayF:
    """Blur straight-alpha RGB so transparent pixels contribute no color.

    Color is weighted by alpha before the blur and divided by the blurred
    alpha afterwards; where the blurred alpha is zero the input color is kept.
    """
    a = alpha8.astype(np.float64)[..., None] / 255.0
    blurred_pre = gaussian_blur(rgb * a, sigma)
    blurred_a = gaussian_blur(a, sigma)
    out = rgb.copy()
    np.divide(blurred_pre, blurred_a, out=out, where=blurred_a > 0)
    return out


def apply_smooth(buffer: RasterBuffer, smooth: int) -> RasterBuffer:
    if smooth <= 0:
        return buffer
    sharp = to_float(buffer.rgb)
    sigma = blur_sigma(smooth)
    if np.all(buffer.alpha == 255):
        blurred = gaussian_blur(sharp, sigma)
    else:
        blurred = blur_premultiplied(sharp, buffer.alpha, sigma)
    mixed = blend(sharp, blurred, smooth_opacity(smooth))
    logger.debug("Smoothing %r with sigma=%.2f", buffer, sigma)
    return buffer.with_rgb(to_uint8(mixed))
