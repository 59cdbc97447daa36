"""
Colors and random color sources
===============================

``Color`` is an immutable RGBA value. ``ColorProvider`` hands out pixel colors,
either uniformly from a fixed palette or as a fully random opaque RGB color.

Each synthesis row gets its own provider through :meth:`ColorProvider.spawn`,
so concurrent rows never touch the same ``numpy.random.Generator``.
"""

from __future__ import annotations

import string
from typing import Iterable, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from .errors import ColorFormatError

_HEX_DIGITS = frozenset(string.hexdigits)


# -----------------------------
# Color value
# -----------------------------

class Color(NamedTuple):
    """RGBA color with 8-bit channels. Equality compares all four channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def hex(self) -> str:
        """Return the color as ``#RRGGBBAA``."""
        return "#{:02X}{:02X}{:02X}{:02X}".format(self.r, self.g, self.b, self.a)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Parse ``#RRGGBBAA`` hex text.

        The leading ``#`` is optional. Shorter strings are padded on the right
        with ``F``, so ``#11b7d4`` is opaque.
        """
        digits = text.strip()
        if digits.startswith("#"):
            digits = digits[1:]
        if len(digits) > 8:
            raise ColorFormatError(f"color {text!r} has more than 8 hex digits")
        if not set(digits) <= _HEX_DIGITS:
            raise ColorFormatError(f"color {text!r} is not valid hex")
        value = int(digits + "F" * (8 - len(digits)), 16)
        return cls(
            r=(value >> 24) & 0xFF,
            g=(value >> 16) & 0xFF,
            b=(value >> 8) & 0xFF,
            a=value & 0xFF,
        )

    @classmethod
    def from_any(cls, value: Union["Color", str, Sequence[int]]) -> "Color":
        """Coerce a ``Color``, hex string, or 3/4-tuple of ints into a ``Color``."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        channels = tuple(int(c) for c in value)
        if len(channels) not in (3, 4):
            raise ColorFormatError(f"color {value!r} must have 3 or 4 channels")
        if any(c < 0 or c > 255 for c in channels):
            raise ColorFormatError(f"color {value!r} has a channel outside 0..255")
        return cls(*channels)


# -----------------------------
# Color provider
# -----------------------------

SeedLike = Union[None, int, np.random.SeedSequence]


class ColorProvider:
    """
    Source of stereogram pixel colors.

    Parameters
    ----------
    palette : iterable of Color-like
        If non-empty, every color is drawn uniformly from it and used as given
        (alpha included). If empty, R, G and B are drawn independently from
        0..255 and alpha is 255.
    seed : int, numpy.random.SeedSequence or None
        Seed for the underlying generator. ``None`` pulls fresh OS entropy.
        Two providers built from the same int seed yield identical streams.
    """

    def __init__(self, palette: Iterable = (), seed: SeedLike = None) -> None:
        self.palette = tuple(Color.from_any(c) for c in palette)
        self._palette_array = np.array(self.palette, dtype=np.uint8).reshape(-1, 4)
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_seq)

    def next(self) -> Color:
        """Draw a single color."""
        return Color(*(int(c) for c in self.draw(1)[0]))

    def draw(self, n: int) -> np.ndarray:
        """
        Draw ``n`` colors at once.

        Returns
        -------
        colors : (n, 4) uint8
        """
        if len(self.palette):
            idx = self._rng.integers(0, len(self.palette), size=n)
            return self._palette_array[idx]
        out = np.empty((n, 4), dtype=np.uint8)
        out[:, :3] = self._rng.integers(0, 256, size=(n, 3))
        out[:, 3] = 255
        return out

    def spawn(self, n: int) -> List["ColorProvider"]:
        """Return ``n`` independently seeded providers sharing this palette."""
        return [ColorProvider(self.palette, seed=child) for child in self._seed_seq.spawn(n)]

    def __repr__(self) -> str:
        return f"ColorProvider(palette={len(self.palette)} colors)"


def parse_palette(values: Optional[Iterable]) -> tuple:
    """Turn a list of Color-likes (hex strings, tuples) into a tuple of ``Color``."""
    if not values:
        return ()
    return tuple(Color.from_any(v) for v in values)
