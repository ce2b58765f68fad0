"""Editor state kept apart from the Qt widgets.

The window owns one :class:`AppState`; every user action goes through it and
ends in a fresh render from the untouched original.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .effects import render
from .export import save_png
from .loader import load_image
from .params import EffectParameters
from .raster import RasterBuffer

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    original: RasterBuffer | None = None
    params: EffectParameters = field(default_factory=EffectParameters)
    source: Path | None = None
    rendered: RasterBuffer | None = None

    @property
    def has_image(self) -> bool:
        return self.original is not None

    def load(self, data: bytes, source: str | Path | None = None) -> RasterBuffer:
        # Decode first; a DecodeError leaves the current state as it was.
        original = load_image(data)
        self.original = original
        self.source = Path(source) if source is not None else None
        self.rendered = None
        self.render_current()
        return original

    def render_current(self) -> RasterBuffer | None:
        if self.original is None:
            self.rendered = None
            return None
        self.rendered = render(self.original, self.params)
        return self.rendered

    def set_param(self, name: str, value: Any) -> RasterBuffer | None:
        self.params = self.params.replace(**{name: value}).clamped()
        return self.render_current()

    def reset(self) -> RasterBuffer | None:
        self.params = EffectParameters()
        logger.info("Reset adjustments to defaults")
        return self.render_current()

    def export(self, path: str | Path) -> Path:
        if self.original is None:
            raise RuntimeError("No image loaded")
        rendered = self.rendered if self.rendered is not None else self.render_current()
        return save_png(rendered, path)
