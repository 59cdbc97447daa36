"""
Single-image random-dot stereogram (SIRDS) synthesis
====================================================

Implements the autostereogram algorithm of Thimbleby, Inglis and Witten,
"Displaying 3D Images: Algorithms for Single-Image Random-Dot Stereograms"
(IEEE Computer, 1994).

Each scanline is processed on its own:

1. For every column ``x``, project the depth ``z`` into a separation ``s`` and
   the pair of columns ``left``/``right`` that must share a color.
2. Drop pairs that fall off the image or whose point is hidden behind a nearer
   surface (hidden-surface test).
3. Merge the surviving pairs into a link table, ``link[x] >= x``, where
   ``link[x] == x`` marks a column that gets a fresh color.
4. Color the row right to left: fresh columns draw from the color provider,
   linked columns copy the color of the column they link to.

Rows share nothing but the read-only depth field, so they run in a thread pool.
Every row worker owns its own color provider, spawned from one seed sequence.
"""

from __future__ import annotations

import concurrent.futures as cf
import io
import logging
import os
import time
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .color import ColorProvider
from .config import StereogramConfig, StereogramOption
from .depth import depth_field_from_mask
from .errors import GeometryError, MaskDecodeError

logger = logging.getLogger(__name__)


# -----------------------------
# Geometry
# -----------------------------

def projected_separation(z, mu: float, e: float):
    """
    Separation in pixels between the two images of a point at depth ``z``.

    ``s = ceil((1 - mu*z) * e / (2 - mu*z))``. Works on scalars and arrays.
    """
    return np.ceil((1 - mu * z) * e / (2 - mu * z)).astype(np.int64)


def visible_columns(z_row: np.ndarray, candidates: np.ndarray, mu: float, e: float) -> np.ndarray:
    """
    Hidden-surface test for one row.

    For ``t = 1, 2, ...`` the ray from column ``x`` toward each eye sits at depth
    ``zt = z + 2*(2 - mu*z)*t / (mu*e)``. The point is hidden as soon as either
    neighbour ``x - t`` or ``x + t`` is at least as near as ``zt``. The scan stops
    once ``zt`` reaches 1 or ``t`` passes the nearest image edge.

    Parameters
    ----------
    z_row : (W,) float64
        Depths of this row.
    candidates : (W,) bool
        Columns whose pair lies inside the image; only these are tested.

    Returns
    -------
    (W,) bool
        True where the column is a candidate and its point is visible to both eyes.
    """
    width = z_row.shape[0]
    xs = np.arange(width)
    limit = np.minimum(xs, width - 1 - xs)

    visible = np.ones(width, dtype=bool)
    active = candidates.copy()
    t = 1
    while True:
        active &= t <= limit
        if not active.any():
            break
        zt = z_row + 2 * (2 - mu * z_row) * t / (mu * e)
        near_left = z_row[np.maximum(xs - t, 0)]
        near_right = z_row[np.minimum(xs + t, width - 1)]
        clear = (near_left < zt) & (near_right < zt)
        visible[active] = clear[active]
        active &= clear & (zt < 1)
        t += 1
    return visible & candidates


def link_pair(link: list, left: int, right: int) -> None:
    """
    Record that columns ``left < right`` share a color.

    Walks the chain already hanging off ``left`` so the new constraint is
    folded in without breaking ``link[x] >= x``. Updates ``link`` in place.
    """
    k = link[left]
    while k != left and k != right:
        if k < right:
            left = k
        else:
            left, right = right, k
        k = link[left]
    link[left] = right


def link_row(z_row: np.ndarray, y: int, mu: float, e: float) -> np.ndarray:
    """
    Build the link table for row ``y``.

    Returns
    -------
    link : (W,) int64
        ``link[x]`` is the column whose color ``x`` copies; ``link[x] == x``
        means ``x`` gets a fresh color. Always ``link[x] >= x``.
    """
    width = z_row.shape[0]
    xs = np.arange(width)
    s = projected_separation(z_row, mu, e)
    # Row parity flips the rounding of odd separations to avoid a vertical seam.
    left = xs - (s + (s & y & 1)) // 2
    right = left + s
    candidates = (left >= 0) & (right < width)
    constrained = visible_columns(z_row, candidates, mu, e)

    link = list(range(width))
    for x in np.flatnonzero(constrained):
        link_pair(link, int(left[x]), int(right[x]))
    return np.array(link, dtype=np.int64)


def color_row(link: np.ndarray, colors: ColorProvider) -> np.ndarray:
    """
    Assign a color to every column of a linked row.

    Fresh colors are drawn right to left, one per column with ``link[x] == x``;
    every other column copies the color at the end of its link chain.

    Returns
    -------
    (W, 4) uint8
    """
    width = link.shape[0]
    fresh = np.flatnonzero(link == np.arange(width))

    pixels = np.zeros((width, 4), dtype=np.uint8)
    pixels[fresh[::-1]] = colors.draw(fresh.size)

    # Follow chains to their fresh column; link[x] >= x so this terminates.
    root = link
    while True:
        nxt = link[root]
        if np.array_equal(nxt, root):
            break
        root = nxt
    return pixels[root]


def synthesize_row(z_row: np.ndarray, y: int, mu: float, e: float, colors: ColorProvider) -> np.ndarray:
    """Link and color one scanline. Returns ``(W, 4) uint8``."""
    return color_row(link_row(z_row, y, mu, e), colors)


# -----------------------------
# Whole image
# -----------------------------

def draw_autostereogram(depth: np.ndarray, mu: float, e: float, colors: ColorProvider,
                        workers: Optional[int] = None) -> np.ndarray:
    """
    Turn a depth field into stereogram pixels.

    Parameters
    ----------
    depth : (W, H) float
        Depth field indexed ``depth[x, y]``, values in [0, 1] (1 = nearest).
    mu : float
        Depth of field, fraction of the viewing distance.
    e : float
        Eye separation in pixels.
    colors : ColorProvider
        Parent color source. Each row draws from its own spawned child.
    workers : int or None
        Thread pool size.

    Returns
    -------
    img : (H, W, 4) uint8
        RGBA pixels, every one of them assigned.
    """
    depth = np.asarray(depth, dtype=np.float64)
    if depth.ndim != 2:
        raise GeometryError(f"depth field must be 2-D, got shape {depth.shape}")
    width, height = depth.shape
    if width == 0 or height == 0:
        raise GeometryError(f"depth field must not be empty, got {width}x{height}")
    if not ((depth >= 0) & (depth <= 1)).all():
        raise ValueError("depth values must lie in [0, 1]")

    row_colors = colors.spawn(height)
    out = np.empty((height, width, 4), dtype=np.uint8)

    logger.debug("Synthesizing %dx%d stereogram (mu=%.4f, e=%g px)", width, height, mu, e)
    with cf.ThreadPoolExecutor(max_workers=workers) as tpe:
        futures = {}
        for y in range(height):
            task = tpe.submit(synthesize_row, depth[:, y], y, mu, e, row_colors[y])
            futures[task] = y

        for task in cf.as_completed(futures):
            out[futures[task]] = task.result()
    return out


# -----------------------------
# Mask decoding and entry point
# -----------------------------

MaskSource = Union[str, os.PathLike, bytes, io.IOBase, Image.Image, np.ndarray]


def load_mask(source: MaskSource) -> Union[Image.Image, np.ndarray]:
    """
    Decode a mask source with Pillow.

    Paths, binary file objects and raw bytes are decoded; PIL images and numpy
    arrays pass through untouched. The first frame of an animated image is used.
    Files opened here are closed before returning.

    Raises
    ------
    MaskDecodeError
        If Pillow cannot read the data as an image.
    OSError
        Filesystem errors (missing file, directory, permissions) pass through.
    """
    if isinstance(source, (Image.Image, np.ndarray)):
        return source
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as img:
            img.load()
            return img.copy()
    except (FileNotFoundError, IsADirectoryError, PermissionError):
        raise
    except (UnidentifiedImageError, OSError) as err:
        raise MaskDecodeError(f"could not decode mask image data: {err}") from err


def new_stereogram_from_mask(source: MaskSource, *options: StereogramOption,
                             config: Optional[StereogramConfig] = None, **overrides) -> Image.Image:
    """
    Create a random-dot stereogram from a mask image.

    The mask is read as monochrome. By default every pixel with a zero alpha
    channel is background and everything else pops out; set
    ``mask_transparent_color`` to pick the background color explicitly.

    Parameters
    ----------
    source : path, file object, bytes, PIL.Image.Image or ndarray
        The mask. Encoded data may be any format Pillow reads (png, jpeg, gif, ...).
    *options : callables
        Option setters such as ``with_output_dpi(300)``, applied in any order.
    config : StereogramConfig, optional
        Starting configuration; defaults to ``StereogramConfig()``.
    **overrides
        Field overrides applied last, e.g. ``dpi=300``.

    Returns
    -------
    PIL.Image.Image
        RGBA image with the mask's width and height.

    Raises
    ------
    MaskDecodeError, ConfigError, GeometryError
    """
    mask = load_mask(source)

    cfg = (config or StereogramConfig()).apply(*options)
    if overrides:
        cfg = cfg.replace(**overrides)
    cfg.validate()

    start = time.perf_counter()
    depth = depth_field_from_mask(mask, cfg.mask_transparent_color)
    width, height = depth.shape
    if width == 0 or height == 0:
        raise GeometryError(f"mask image must not be empty, got {width}x{height}")

    colors = ColorProvider(cfg.palette, seed=cfg.seed)
    pixels = draw_autostereogram(depth, cfg.mu, cfg.eye_separation, colors, workers=cfg.workers)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Stereogram %dx%d done in %.0fms (e=%d px, %s)",
                width, height, elapsed, cfg.eye_separation,
                f"{len(cfg.palette)} palette colors" if cfg.palette else "random colors")
    return Image.fromarray(pixels)
