from .effects import apply, render
from .export import EXPORT_FILENAME, encode_png, save_png
from .loader import DecodeError, fit_size, load_image, load_image_file
from .params import PARAM_RANGES, EffectParameters
from .raster import RasterBuffer
from .smoothing import apply_smooth, gaussian_blur, gaussian_kernel
from .state import AppState

__all__ = [
    "AppState",
    "DecodeError",
    "EXPORT_FILENAME",
    "EffectParameters",
    "PARAM_RANGES",
    "RasterBuffer",
    "apply",
    "apply_smooth",
    "encode_png",
    "fit_size",
    "gaussian_blur",
    "gaussian_kernel",
    "load_image",
    "load_image_file",
    "render",
    "save_png",
]
