"""Shared argparse options for the defocus CLIs."""

import argparse
import logging
from dataclasses import replace

from defocus import PipelineConfig, BlendMode


def add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("image", type=str, help="Source image path")
    parser.add_argument("--config", type=str, default=None, help="YAML pipeline configuration")
    parser.add_argument("--separation", type=float, default=None, help="Separation in pixels at ratio 1.0")
    parser.add_argument("--blend", type=str, default=None, choices=[m.value for m in BlendMode], help="Blend mode")
    parser.add_argument("--blur-radius", type=int, default=None, help="Blur radius at ratio 1.0")
    parser.add_argument("--fast-blur", action="store_true", help="Use the fast approximate blur")
    parser.add_argument("--no-blur", action="store_true", help="Disable blurring")
    parser.add_argument("--max-size", type=int, default=None, help="Longest source edge in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    """Config file (or defaults) with command-line overrides applied."""
    cfg = PipelineConfig.from_yaml(args.config) if args.config else PipelineConfig()

    overrides = {}
    if args.separation is not None:
        overrides["max_separation_distance"] = args.separation
    if args.blend is not None:
        overrides["blend_mode"] = BlendMode(args.blend)
    if args.blur_radius is not None:
        overrides["blur_radius_base"] = args.blur_radius
    if args.fast_blur:
        overrides["use_fast_blur"] = True
    if args.no_blur:
        overrides["blur_enabled"] = False
    if args.max_size is not None:
        overrides["max_image_size"] = args.max_size
    return replace(cfg, **overrides)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
