"""
Depth field construction from a mask image.

The mask is read as monochrome: each pixel is either background (depth 0.0)
or foreground (depth 1.0), decided by the transparency rule.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np
from PIL import Image

from .color import Color

logger = logging.getLogger(__name__)

MaskLike = Union[Image.Image, np.ndarray]


def mask_to_rgba(mask: MaskLike) -> np.ndarray:
    """
    Return the mask as an ``(H, W, 4)`` uint8 RGBA array.

    PIL images are converted with ``Image.convert("RGBA")``. Arrays may be
    ``(H, W)`` bool (True is opaque, False fully transparent), ``(H, W)`` gray,
    ``(H, W, 3)`` RGB or ``(H, W, 4)`` RGBA; missing alpha is
    filled with 255.
    """
    if isinstance(mask, Image.Image):
        return np.asarray(mask.convert("RGBA"), dtype=np.uint8)

    arr = np.asarray(mask)
    if arr.dtype == bool and arr.ndim == 2:
        rgba = np.zeros(arr.shape + (4,), dtype=np.uint8)
        rgba[arr, 3] = 255
        return rgba
    arr = arr.astype(np.uint8, copy=False)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"mask array must be (H, W), (H, W, 3) or (H, W, 4), got shape {arr.shape}")
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=2)
    return arr


def transparent_mask(rgba: np.ndarray, transparent_color: Optional[Color] = None) -> np.ndarray:
    """
    Evaluate the transparency predicate for every pixel.

    Parameters
    ----------
    rgba : (H, W, 4) uint8
    transparent_color : Color or None
        If given, a pixel is transparent iff all four channels equal it.
        Otherwise a pixel is transparent iff its alpha is exactly zero.

    Returns
    -------
    (H, W) bool
    """
    if transparent_color is None:
        return rgba[..., 3] == 0
    target = np.array(Color.from_any(transparent_color), dtype=np.uint8)
    return (rgba == target).all(axis=2)


def depth_field_from_mask(mask: MaskLike, transparent_color: Optional[Color] = None) -> np.ndarray:
    """
    Build the depth field for a mask image.

    Returns
    -------
    depth : (W, H) float64
        Indexed ``depth[x, y]``; 0.0 for transparent (background) pixels and
        1.0 for everything else.
    """
    rgba = mask_to_rgba(mask)
    background = transparent_mask(rgba, transparent_color)
    depth = np.where(background, 0.0, 1.0)
    logger.debug("Depth field %dx%d: %d foreground pixel(s)",
                 depth.shape[1], depth.shape[0], int(np.count_nonzero(depth)))
    return np.ascontiguousarray(depth.T)
