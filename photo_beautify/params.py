from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from dataclasses import replace as _replace
from typing import Any

# name -> (min, max, default); slider order in the editor follows this mapping.
PARAM_RANGES: dict[str, tuple[int, int, int]] = {
    "smooth": (0, 100, 30),
    "whiten": (0, 100, 20),
    "brightness": (-100, 100, 0),
    "contrast": (-100, 100, 0),
    "saturation": (-100, 100, 0),
}


def clamp_param(name: str, value: Any) -> int:
    lo, hi, _ = PARAM_RANGES[name]
    return max(lo, min(hi, int(round(float(value)))))


@dataclass(frozen=True)
class EffectParameters:
    brightness: int = 0
    contrast: int = 0
    saturation: int = 0
    whiten: int = 20
    smooth: int = 30

    @classmethod
    def neutral(cls) -> EffectParameters:
        """Parameters under which the whole render is the identity."""
        return cls(brightness=0, contrast=0, saturation=0, whiten=0, smooth=0)

    def clamped(self) -> EffectParameters:
        return EffectParameters(**{f.name: clamp_param(f.name, getattr(self, f.name)) for f in fields(self)})

    def replace(self, **changes: Any) -> EffectParameters:
        return _replace(self, **changes)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

