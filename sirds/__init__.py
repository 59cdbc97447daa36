"""
sirds: single-image random-dot stereograms from mask images.

    from sirds import new_stereogram_from_mask, with_output_dpi
    img = new_stereogram_from_mask("mask.png", with_output_dpi(96), seed=1)
    img.save("stereogram.png")
"""

from .color import Color, ColorProvider
from .config import (
    StereogramConfig,
    with_color_palette,
    with_depth_of_field,
    with_eye_separation_ratio,
    with_mask_transparent_color,
    with_output_dpi,
    with_seed,
    with_workers,
)
from .depth import depth_field_from_mask
from .errors import (
    ColorFormatError,
    ConfigError,
    GeometryError,
    MaskDecodeError,
    StereogramError,
)
from .stereogram import draw_autostereogram, new_stereogram_from_mask

__version__ = "0.1.0"
