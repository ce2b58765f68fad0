from __future__ import annotations

from typing import Sequence

import numpy as np


class RasterBuffer:
    """An RGBA 8-bit pixel grid stored as a ``(height, width, 4)`` uint8 array."""

    __slots__ = ("pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        if not isinstance(pixels, np.ndarray):
            raise ValueError("Expected a numpy array")
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError(f"Expected HxWx4 uint8 RGBA array, got {pixels.shape} {pixels.dtype}")
        self.pixels = pixels

    @classmethod
    def from_flat(cls, width: int, height: int, values: Sequence[int]) -> RasterBuffer:
        arr = np.asarray(values, dtype=np.uint8)
        if arr.size != width * height * 4:
            raise ValueError(f"Expected {width * height * 4} channel values, got {arr.size}")
        return cls(arr.reshape((height, width, 4)).copy())

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> RasterBuffer:
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[...] = np.asarray(rgba, dtype=np.uint8)
        return cls(arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    @property
    def flat(self) -> np.ndarray:
        return self.pixels.reshape(-1)

    def __len__(self) -> int:
        return int(self.pixels.size)

    @property
    def is_frozen(self) -> bool:
        return not self.pixels.flags.writeable

    def frozen(self) -> RasterBuffer:
        # Read-only copy; later writes raise instead of corrupting the original.
        arr = self.pixels.copy()
        arr.flags.writeable = False
        return RasterBuffer(arr)

    def with_rgb(self, rgb8: np.ndarray) -> RasterBuffer:
        """Return a new buffer with ``rgb8`` as color and this buffer's alpha."""
        out = np.empty_like(self.pixels)
        out[..., :3] = rgb8
        out[..., 3] = self.pixels[..., 3]
        return RasterBuffer(out)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(np.array_equal(self.pixels, other.pixels))

    def __repr__(self) -> str:
        return f"RasterBuffer({self.width}x{self.height})"


def to_float(rgb8: np.ndarray) -> np.ndarray:
    if rgb8.dtype != np.uint8:
        raise TypeError(f"Expected uint8 image, got {rgb8.dtype}")
    return rgb8.astype(np.float64)


def to_uint8(rgb: np.ndarray) -> np.ndarray:
    # Clamp to [0, 255], then round half up.
    rgb = np.clip(rgb, 0.0, 255.0)
    return np.floor(rgb + 0.5).astype(np.uint8)
