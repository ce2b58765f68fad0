from __future__ import annotations

import numpy as np
import pytest

from photo_beautify.raster import RasterBuffer


@pytest.fixture
def noisy_buffer() -> RasterBuffer:
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8)
    return RasterBuffer(pixels).frozen()
