"""Render zone overlays for a folder of hand pictures.

For every image: scale down to fit the configured box, segment the hand,
split it into zones and save a two-panel PNG with the zone ratios and the
pointing arrow (or a neutral ring when nothing was found).

Usage:
    python generate_zone_overlay.py HandPictures/ --zones 3 --out overlays/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from handpoint.config import settings
from handpoint.engine import PipelineConfig, analyze_image
from handpoint.utils.imaging import VALID_IMAGE_EXTENSIONS, load_image, resize_to_fit
from handpoint.utils.overlay import render_overlay


def _image_paths(folder: Path) -> list[Path]:
    # Numeric stems (1.jpg, 2.jpg, ...) sort numerically, others alphabetically
    paths = [p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in VALID_IMAGE_EXTENSIONS]
    return sorted(paths, key=lambda p: (not p.stem.isdigit(), int(p.stem) if p.stem.isdigit() else 0, p.name))


def main() -> None:
    parser = argparse.ArgumentParser(description="HandPoint zone overlays")
    parser.add_argument("input", help="Folder of hand pictures")
    parser.add_argument("-o", "--out", default="overlays", help="Output folder")
    parser.add_argument("-z", "--zones", type=int, default=settings.default_zone_count, help="Zone count")
    parser.add_argument("--arc", type=float, default=settings.default_arc, help="Angle-mode arc (degrees)")
    parser.add_argument("--smooth", action="store_true", help="Spectral smoothing before segmentation")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.handpoint_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    folder = Path(args.input)
    if not folder.is_dir():
        print(f"Not a folder: {folder}")
        sys.exit(1)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    config = PipelineConfig(zone_count=args.zones, arc=args.arc, smooth=args.smooth, blur_ksize=settings.blur_ksize)

    paths = _image_paths(folder)
    if not paths:
        print(f"No images found in {folder}")
        sys.exit(1)

    for path in paths:
        image = resize_to_fit(load_image(path), settings.max_image_width, settings.max_image_height)
        ctx = analyze_image(image, config)

        fig = render_overlay(ctx, title=path.name)
        out_png = out_dir / f"zones_{path.stem}.png"
        fig.savefig(out_png, dpi=100, facecolor=fig.get_facecolor())
        plt.close(fig)

        ratios = ", ".join(f"{r:.2f}" for r in ctx.ratios)
        print(f"{path.name}: [{ratios}] direction={ctx.direction.value} -> {out_png}")


if __name__ == "__main__":
    main()
