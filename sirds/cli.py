"""
Command line front end
======================

Quick start
-----------
  sirds mask.png --out stereogram.png --dpi 96 --seed 42

  sirds --demo-ring --width 900 --height 600 --out ring.png \
      --palette "#000000" "#cfcfcf" "#14054c" "#b61500" "#ffd376"

Viewing: relax (diverge) your eyes as if looking through the page until the
repeated pattern fuses and the mask shape floats in front of the background.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from .color import Color
from .config import StereogramConfig
from .errors import StereogramError
from .masks import square_ring_mask
from .stereogram import new_stereogram_from_mask


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = StereogramConfig()
    p = argparse.ArgumentParser(
        prog="sirds",
        description="Single-image random-dot stereogram (autostereogram) generator. "
                    "Transparent mask pixels form the background; everything else pops out.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    p.add_argument("mask", nargs="?", default=None, help="Mask image (png, jpeg, gif, ...)")
    p.add_argument("--out", type=str, default="stereogram.png", help="Output image path; format from extension")
    p.add_argument("--transparent-color", type=str, default=None,
                   help="Hex #RRGGBBAA color treated as background instead of zero alpha")
    p.add_argument("--palette", type=str, nargs="+", default=None,
                   help="Hex colors to draw pixels from (default: fully random colors)")
    p.add_argument("--dpi", type=int, default=defaults.dpi, help="Output DPI")
    p.add_argument("--eye-ratio", type=float, default=defaults.e_ratio, help="Eye separation in inches")
    p.add_argument("--mu", type=float, default=defaults.mu, help="Depth of field (fraction of viewing distance)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--workers", type=int, default=None, help="Row worker threads")
    p.add_argument("--demo-ring", action="store_true", help="Use a built-in square ring mask instead of MASK")
    p.add_argument("--width", type=int, default=900, help="Demo mask width (pixels)")
    p.add_argument("--height", type=int, default=600, help="Demo mask height (pixels)")
    p.add_argument("--outer-frac", type=float, default=0.60, help="Demo ring outer size / min(H, W)")
    p.add_argument("--inner-frac", type=float, default=0.38, help="Demo ring inner size / min(H, W)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    if (args.mask is None) == (not args.demo_ring):
        p.error("give exactly one of MASK or --demo-ring")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        config = StereogramConfig(
            mask_transparent_color=Color.from_hex(args.transparent_color) if args.transparent_color else None,
            palette=tuple(args.palette or ()),
            mu=args.mu,
            dpi=args.dpi,
            e_ratio=args.eye_ratio,
            seed=args.seed,
            workers=args.workers,
        )
        if args.demo_ring:
            source = square_ring_mask(args.width, args.height, args.outer_frac, args.inner_frac)
        else:
            source = args.mask
        img = new_stereogram_from_mask(source, config=config)

        out_dir = os.path.dirname(args.out)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        if os.path.splitext(args.out)[1].lower() in (".jpg", ".jpeg"):
            img = img.convert("RGB")
        img.save(args.out)
    except (StereogramError, ValueError, OSError) as err:
        raise SystemExit(f"sirds: {err}")

    print("Saved:")
    print("  ", os.path.basename(args.out), f"({img.width}x{img.height})")
    print("Folder:", os.path.abspath(out_dir or "."))


if __name__ == "__main__":
    main()
