"""Defocus: double-image compositing and blur for focus puzzles.

Main components:
- core: ImageBuffer, compositor, blur and the CompositePipeline
- display: targets that receive finished images
- cli: render and sweep entry points
"""

from .core import (
    ImageBuffer,
    GeometryError,
    BlendMode,
    PipelineConfig,
    make_readable,
    normalize,
    composite,
    blur,
    CompositePipeline,
    focus_to_ratio,
)
from .display import MemoryDisplay, ImageFileDisplay

__version__ = "0.1.0"
__all__ = [
    # Core
    "ImageBuffer",
    "GeometryError",
    "BlendMode",
    "PipelineConfig",
    "make_readable",
    "normalize",
    "composite",
    "blur",
    "CompositePipeline",
    "focus_to_ratio",
    # Display
    "MemoryDisplay",
    "ImageFileDisplay",
]
