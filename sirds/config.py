"""Stereogram synthesis parameters and option setters."""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .color import Color, parse_palette
from .errors import ConfigError


@dataclass(frozen=True)
class StereogramConfig:
    """
    Read-only parameter bundle for one synthesis call.

    Attributes
    ----------
    mask_transparent_color : Color or None
        Mask pixels exactly equal to this color (alpha included) are background.
        If None, every mask pixel with a zero alpha channel is background.
    palette : tuple of Color
        Colors drawn uniformly at random for each fresh pixel. Empty means a
        random opaque RGB color per pixel. A single color gives a flat image.
    mu : float
        Depth of field, as a fraction of the viewing distance. Open interval (0, 1).
    dpi : int
        Output resolution in pixels per inch.
    e_ratio : float
        Eye separation in inches; multiplied by ``dpi`` to get pixels.
    seed : int or None
        Seed for the color source. None gives a different image every call.
    workers : int or None
        Thread pool size for the row workers. None lets ``concurrent.futures`` pick.
    """

    mask_transparent_color: Optional[Color] = None
    palette: tuple = ()
    mu: float = 1 / 3
    dpi: int = 72
    e_ratio: float = 2.5
    seed: Optional[int] = None
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        # Normalize Color-likes so equality and hashing behave.
        object.__setattr__(self, "palette", parse_palette(self.palette))
        if self.mask_transparent_color is not None:
            object.__setattr__(self, "mask_transparent_color",
                               Color.from_any(self.mask_transparent_color))

    @property
    def eye_separation(self) -> int:
        """Eye separation in output pixels: ``ceil(e_ratio * dpi)``."""
        return int(math.ceil(self.e_ratio * self.dpi))

    def replace(self, **changes) -> "StereogramConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def apply(self, *options: "StereogramOption") -> "StereogramConfig":
        """Fold option setters into a new config. Order does not matter."""
        cfg = self
        for opt in options:
            cfg = opt(cfg)
        return cfg

    def validate(self) -> "StereogramConfig":
        """
        Reject parameters the projection formula cannot handle.

        Raises
        ------
        ConfigError
            If ``dpi`` is not a positive int, ``e_ratio`` is not positive,
            ``mu`` is outside (0, 1), or ``workers`` is set but not positive.
        """
        if isinstance(self.dpi, bool) or not isinstance(self.dpi, numbers.Integral) or self.dpi <= 0:
            raise ConfigError(f"dpi must be a positive integer, got {self.dpi!r}")
        if not _is_finite_number(self.e_ratio) or self.e_ratio <= 0:
            raise ConfigError(f"eye separation ratio must be positive, got {self.e_ratio!r}")
        if not _is_finite_number(self.mu) or not 0 < self.mu < 1:
            raise ConfigError(f"depth of field mu must lie in (0, 1), got {self.mu!r}")
        if self.workers is not None and (not isinstance(self.workers, numbers.Integral) or self.workers <= 0):
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")
        return self


def _is_finite_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


# -----------------------------
# Option setters
# -----------------------------

StereogramOption = Callable[[StereogramConfig], StereogramConfig]


def with_mask_transparent_color(color) -> StereogramOption:
    """Treat mask pixels equal to ``color`` as background instead of using alpha."""
    color = Color.from_any(color)
    return lambda cfg: cfg.replace(mask_transparent_color=color)


def with_color_palette(*palette) -> StereogramOption:
    """Draw pixel colors from ``palette``. No arguments restores fully random colors."""
    colors = parse_palette(palette)
    return lambda cfg: cfg.replace(palette=colors)


def with_output_dpi(dpi: int) -> StereogramOption:
    return lambda cfg: cfg.replace(dpi=dpi)


def with_eye_separation_ratio(ratio: float) -> StereogramOption:
    return lambda cfg: cfg.replace(e_ratio=ratio)


def with_depth_of_field(mu: float) -> StereogramOption:
    return lambda cfg: cfg.replace(mu=mu)


def with_seed(seed: Optional[int]) -> StereogramOption:
    return lambda cfg: cfg.replace(seed=seed)


def with_workers(workers: Optional[int]) -> StereogramOption:
    return lambda cfg: cfg.replace(workers=workers)


def build_config(options: Iterable[StereogramOption] = (), **overrides) -> StereogramConfig:
    """Start from the defaults, apply ``options`` then keyword ``overrides``."""
    cfg = StereogramConfig().apply(*options)
    if overrides:
        cfg = cfg.replace(**overrides)
    return cfg
