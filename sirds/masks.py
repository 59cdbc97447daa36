"""
Demo masks
==========

A ready-made shape for trying the generator without drawing a mask first.
The default shape is a centered **square ring** (a "square donut"): simple,
but with an inner edge and an outer edge, so the depth step is easy to spot.
"""

from __future__ import annotations

import numpy as np
from PIL import Image


def square_ring_mask(width: int, height: int, outer_frac: float = 0.60,
                     inner_frac: float = 0.38) -> Image.Image:
    """
    Centered square ring as an RGBA mask, ready for the default alpha rule.

    Parameters
    ----------
    width, height : int
        Mask size in pixels.
    outer_frac : float
        Outer square side = outer_frac * min(width, height).
    inner_frac : float
        Side of the hole = inner_frac * min(width, height). 0 gives a filled square.

    Returns
    -------
    PIL.Image.Image
        RGBA; the ring is opaque black, everything else fully transparent.
    """
    if not 0 <= inner_frac < outer_frac <= 1:
        raise ValueError("need 0 <= inner_frac < outer_frac <= 1")
    side = min(width, height)
    rows, cols = np.indices((height, width))
    # Chebyshev distance from the center: squares are its level sets.
    dist = np.maximum(np.abs(rows - height // 2), np.abs(cols - width // 2))

    ring = dist <= int(side * outer_frac) // 2
    hole_half = int(side * inner_frac) // 2
    if hole_half > 0:
        ring &= dist >= hole_half
    return mask_to_image(ring)


def mask_to_image(mask: np.ndarray) -> Image.Image:
    """
    Render a boolean mask as an RGBA image the depth builder reads by default:
    transparent background, opaque black foreground.
    """
    mask = np.asarray(mask, dtype=bool)
    rgba = np.zeros(mask.shape + (4,), dtype=np.uint8)
    rgba[mask, 3] = 255
    return Image.fromarray(rgba)
