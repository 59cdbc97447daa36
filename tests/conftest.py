"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from sirds.masks import square_ring_mask


@pytest.fixture
def ring_mask() -> Image.Image:
    """80x60 RGBA square ring: transparent background, opaque black ring."""
    return square_ring_mask(80, 60, 0.60, 0.38)


@pytest.fixture
def ring_png(ring_mask) -> bytes:
    buf = io.BytesIO()
    ring_mask.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def ring_depth(ring_mask) -> np.ndarray:
    from sirds.depth import depth_field_from_mask
    return depth_field_from_mask(ring_mask)
