"""Tests for the demo masks."""

from __future__ import annotations

import numpy as np
import pytest

from sirds.masks import mask_to_image, square_ring_mask


class TestSquareRing:
    def test_ring_has_hole(self):
        img = square_ring_mask(80, 60, 0.60, 0.38)
        assert img.mode == "RGBA"
        assert img.size == (80, 60)
        alpha = np.asarray(img)[..., 3]
        assert alpha[30, 40] == 0           # inside the hole
        assert alpha[30, 40 + 15] == 255    # on the ring
        assert alpha[30, 40 + 18] == 255    # outer edge is part of the ring
        assert alpha[30, 40 + 19] == 0
        assert alpha[30, 40 + 11] == 255    # inner edge is part of the ring
        assert alpha[30, 40 + 10] == 0
        assert alpha[0, 0] == 0             # outside

    def test_filled_square(self):
        alpha = np.asarray(square_ring_mask(40, 40, 0.5, 0.0))[..., 3]
        assert alpha[20, 20] == 255
        assert np.count_nonzero(alpha) == 21 * 21

    def test_rejects_inverted_fracs(self):
        with pytest.raises(ValueError):
            square_ring_mask(40, 40, 0.3, 0.5)


class TestMaskToImage:
    def test_alpha_follows_mask(self):
        mask = np.array([[True, False]])
        img = mask_to_image(mask)
        assert img.mode == "RGBA"
        assert img.size == (2, 1)
        assert img.getpixel((0, 0)) == (0, 0, 0, 255)
        assert img.getpixel((1, 0)) == (0, 0, 0, 0)
