"""CompositePipeline: defocus ratio in, blurred double image out."""

import logging
import math
from typing import Optional

from PIL import UnidentifiedImageError

from .buffer import ImageBuffer, GeometryError
from .config import PipelineConfig
from .normalize import SourceLike, normalize
from .compositor import composite
from .blur import blur
from ..display.targets import DisplayTarget, CENTER

logger = logging.getLogger(__name__)


def focus_to_ratio(current: float, target: float, span: float = 100.0) -> float:
    """Defocus ratio for a focus reading: 0 when on target, 1 at a full span away."""
    return abs(current - target) / span


class CompositePipeline:
    """Renders the defocused double image for a ratio and publishes it.

    The last rendered ratio is cached; an update whose ratio is within
    cfg.cache_tolerance of it does nothing.
    """

    def __init__(
        self,
        cfg: Optional[PipelineConfig] = None,
        source: Optional[SourceLike] = None,
        display: Optional[DisplayTarget] = None,
    ):
        self.cfg = cfg if cfg is not None else PipelineConfig()
        self.source = source
        self.display = display
        self.last_ratio: Optional[float] = None
        self.published: Optional[ImageBuffer] = None
        self.render_count = 0

    def set_source(self, source: Optional[SourceLike]) -> None:
        """Swap the source image and render it in focus straight away."""
        self.source = source
        if source is not None:
            self.update(0.0, force=True)

    def is_cached(self, ratio: float) -> bool:
        return self.last_ratio is not None and abs(ratio - self.last_ratio) <= self.cfg.cache_tolerance

    def render(self, ratio: float) -> ImageBuffer:
        """Compute the finished image for ratio without publishing it.

        Raises:
            GeometryError: if the source or separation gives an empty image
        """
        cfg = self.cfg
        normalized = normalize(self.source, cfg.max_image_size)

        separation = cfg.separation_for(ratio)
        composited = composite(normalized, separation, cfg.blend_mode)
        logger.debug("ratio=%.4f separation=%.2fpx composite=%dx%d",
                     ratio, separation, composited.width, composited.height)

        radius = cfg.blur_radius_for(ratio)
        if not cfg.blur_enabled or radius <= 0:
            return composited
        logger.debug("Blurring with radius %d (%s)", radius, "fast" if cfg.use_fast_blur else "box")
        return blur(composited, radius, cfg.use_fast_blur)

    def update(self, ratio: float, force: bool = False) -> None:
        """Re-render and publish for a new defocus ratio.

        Never raises for missing inputs, unreadable files, failed display
        writes or degenerate geometry; those are logged and the update is
        skipped without touching the cache.

        Args:
            ratio: 0 = in focus (copies overlap), 1 = fully separated and blurred
            force: render even if ratio matches the cached one
        """
        if not math.isfinite(ratio):
            logger.warning("Skipping update for non-finite ratio %r", ratio)
            return

        if not force and self.is_cached(ratio):
            return

        if self.source is None:
            logger.warning("No source image configured; skipping update")
            return

        try:
            final = self.render(ratio)
        except (GeometryError, OSError, UnidentifiedImageError) as e:
            logger.warning("Skipping update for ratio %.4f: %s", ratio, e)
            return

        if self.display is not None:
            try:
                self.display.show(final, CENTER)
            except OSError as e:
                logger.warning("Display failed for ratio %.4f: %s", ratio, e)
                return
        else:
            logger.warning("No display target configured; image not shown")

        self.published = final
        self.last_ratio = ratio
        self.render_count += 1
