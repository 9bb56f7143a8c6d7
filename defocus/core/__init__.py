"""Defocus Core: image compositing and blur pipeline."""

from .buffer import ImageBuffer, GeometryError
from .config import BlendMode, PipelineConfig
from .normalize import make_readable, fit_size, resize, normalize
from .compositor import blend, composite, composite_size, placement_offsets, get_blend_fn
from .blur import blur, box_blur, fast_blur, fast_blur_scale, downsample, upsample
from .pipeline import CompositePipeline, focus_to_ratio

__all__ = [
    "ImageBuffer",
    "GeometryError",
    "BlendMode",
    "PipelineConfig",
    "make_readable",
    "fit_size",
    "resize",
    "normalize",
    "blend",
    "composite",
    "composite_size",
    "placement_offsets",
    "get_blend_fn",
    "blur",
    "box_blur",
    "fast_blur",
    "fast_blur_scale",
    "downsample",
    "upsample",
    "CompositePipeline",
    "focus_to_ratio",
]
