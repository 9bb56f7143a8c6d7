"""CLI for rendering a sequence of frames from in focus to fully defocused."""

import argparse
from pathlib import Path

import numpy as np
from tqdm import tqdm

from defocus import CompositePipeline, ImageFileDisplay, make_readable
from defocus.cli.common import add_config_args, config_from_args, setup_logging


def main():
    parser = argparse.ArgumentParser(description="Render defocus frames over ratios 0..1")
    add_config_args(parser)
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output directory")
    parser.add_argument("-n", "--steps", type=int, default=11, help="Number of frames")
    parser.add_argument("--no-progress", action="store_true", help="Disable progress bar")

    args = parser.parse_args()
    setup_logging(args.verbose)

    cfg = config_from_args(args)
    display = ImageFileDisplay(args.output / "frame_{index:04d}.png")
    # Decode the file once; every frame reads the same pixels.
    source = make_readable(args.image)
    pipeline = CompositePipeline(cfg, source=source, display=display)

    ratios = np.linspace(0.0, 1.0, max(args.steps, 1))
    for ratio in tqdm(ratios, desc="Rendering", disable=args.no_progress):
        pipeline.update(float(ratio))

    print("\nSweep complete:")
    print(f"  Frames requested: {len(ratios)}")
    print(f"  Frames written: {display.shown}")
    print(f"  Output: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
