"""CLI for rendering one defocused composite to a PNG."""

import argparse
from pathlib import Path

from defocus import CompositePipeline, ImageFileDisplay, focus_to_ratio
from defocus.cli.common import add_config_args, config_from_args, setup_logging


def main():
    parser = argparse.ArgumentParser(description="Render a defocused double image")
    add_config_args(parser)
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output PNG path")
    parser.add_argument("--ratio", type=float, default=None, help="Defocus ratio (0 = in focus)")
    parser.add_argument("--focus", type=float, default=None, help="Current focus reading (0-100)")
    parser.add_argument("--target", type=float, default=50.0, help="Target focus reading (0-100)")

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.ratio is not None:
        ratio = args.ratio
    elif args.focus is not None:
        ratio = focus_to_ratio(args.focus, args.target)
    else:
        parser.error("one of --ratio or --focus is required")

    cfg = config_from_args(args)
    display = ImageFileDisplay(args.output)
    pipeline = CompositePipeline(cfg, source=args.image, display=display)
    pipeline.update(ratio)

    if display.last_path is None:
        print("Nothing rendered (see warnings above)")
        return 1

    image = pipeline.published
    print(f"Rendered ratio {ratio:.3f}: {image.width}x{image.height} -> {display.last_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
