from __future__ import annotations

import logging

import numpy as np

from .params import EffectParameters
from .raster import RasterBuffer, to_float, to_uint8
from .smoothing import apply_smooth

logger = logging.getLogger(__name__)

ArrayF = np.ndarray

WHITEN_STRENGTH = 0.3
CONTRAST_PIVOT = 128.0


def luminance(rgb: ArrayF) -> ArrayF:
    # Rec.601 luma
    return rgb[..., 0] * 0.2989 + rgb[..., 1] * 0.5870 + rgb[..., 2] * 0.1140


def apply_brightness(rgb: ArrayF, brightness: float) -> ArrayF:
    # Additive offset in channel units; clamping happens once at the end.
    return rgb + float(brightness)


def contrast_factor(contrast: float) -> float:
    c = float(contrast)
    if c >= 259.0:
        raise ValueError(f"Contrast {contrast} has no finite factor (must be below 259)")
    return (259.0 * (c + 255.0)) / (255.0 * (259.0 - c))


def apply_contrast(rgb: ArrayF, contrast: float) -> ArrayF:
    if contrast == 0:
        return rgb
    factor = contrast_factor(contrast)
    return factor * (rgb - CONTRAST_PIVOT) + CONTRAST_PIVOT


def apply_saturation(rgb: ArrayF, saturation: float) -> ArrayF:
    # saturation in [-100, 100]; -50 is grayscale, 0 is unchanged
    s = float(saturation)
    if s == 0:
        return rgb
    gray = luminance(rgb)[..., None]
    factor = 1.0 + s / 50.0
    return gray + factor * (rgb - gray)


def apply_whiten(rgb: ArrayF, whiten: float) -> ArrayF:
    w = float(whiten)
    if w == 0:
        return rgb
    amount = w / 100.0
    return rgb + (255.0 - rgb) * amount * WHITEN_STRENGTH


def apply_params(rgb: ArrayF, params: EffectParameters) -> ArrayF:
    """Run the per-pixel steps in their fixed order on float RGB."""
    out = rgb
    if params.brightness:
        out = apply_brightness(out, params.brightness)
    if params.contrast:
        out = apply_contrast(out, params.contrast)
    if params.saturation:
        out = apply_saturation(out, params.saturation)
    if params.whiten:
        out = apply_whiten(out, params.whiten)
    return out


def apply(original: RasterBuffer, params: EffectParameters) -> RasterBuffer:
    """Return a new buffer with the color transform applied to ``original``.

    ``original`` is only read. Alpha is carried over unchanged and every color
    channel is clamped to [0, 255] and rounded half up.
    """
    rgb = to_float(original.rgb)
    out = apply_params(rgb, params)
    return original.with_rgb(to_uint8(out))


def render(original: RasterBuffer, params: EffectParameters) -> RasterBuffer:
    """Full render: color transform followed by the smoothing composite."""
    logger.debug("Rendering %r with %s", original, params.to_dict())
    working = apply(original, params)
    return apply_smooth(working, params.smooth)
