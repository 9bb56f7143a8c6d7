"""Compositing pipeline configuration."""

from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Union

import yaml


class BlendMode(str, Enum):
    """Per-pixel rule for laying one copy over the canvas."""
    ADDITIVE = "additive"
    MULTIPLY = "multiply"
    ALPHA = "alpha"


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the defocus compositor.

    Distances are in pixels and describe the result at ratio 1.0;
    intermediate ratios scale them linearly.
    """
    # Placement
    max_separation_distance: float = 200.0
    blend_mode: BlendMode = BlendMode.ALPHA

    # Blur
    blur_radius_base: int = 5
    use_fast_blur: bool = False
    blur_enabled: bool = True

    # Source
    max_image_size: int = 512  # longest edge before compositing

    # Ratio cache
    cache_tolerance: float = 1e-5

    def __post_init__(self):
        if not isinstance(self.blend_mode, BlendMode):
            object.__setattr__(self, "blend_mode", BlendMode(str(self.blend_mode).lower()))

    def separation_for(self, ratio: float) -> float:
        """Horizontal distance between the two copies for a defocus ratio."""
        return ratio * self.max_separation_distance

    def blur_radius_for(self, ratio: float) -> int:
        """Blur radius for a defocus ratio, clamped to [0, blur_radius_base]."""
        radius = int(round(ratio * self.blur_radius_base))
        return max(0, min(radius, self.blur_radius_base))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["blend_mode"] = self.blend_mode.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PipelineConfig":
        return cls(**d)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PipelineConfig":
        """Load config from a YAML mapping; missing keys keep their defaults."""
        with open(path) as f:
            d = yaml.safe_load(f) or {}
        return cls.from_dict(d)
