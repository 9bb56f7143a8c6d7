"""Display targets that receive finished composites."""

import logging
from pathlib import Path
from typing import Optional, Protocol, Tuple, Union

from ..core.buffer import ImageBuffer

logger = logging.getLogger(__name__)

Pivot = Tuple[float, float]
CENTER: Pivot = (0.5, 0.5)


class DisplayTarget(Protocol):
    """Anything that can show an ImageBuffer anchored at a pivot."""

    def show(self, image: ImageBuffer, pivot: Pivot = CENTER) -> None:
        ...


class MemoryDisplay:
    """Keeps the most recently shown image in memory."""

    def __init__(self):
        self.image: Optional[ImageBuffer] = None
        self.pivot: Pivot = CENTER
        self.shown = 0

    def show(self, image: ImageBuffer, pivot: Pivot = CENTER) -> None:
        self.image = image
        self.pivot = pivot
        self.shown += 1


class ImageFileDisplay:
    """Writes every shown image as an RGBA PNG.

    The path may contain an ``{index}`` field (e.g. ``frame_{index:04d}.png``)
    to write numbered frames instead of overwriting one file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self.shown = 0
        self.last_path: Optional[Path] = None

    def show(self, image: ImageBuffer, pivot: Pivot = CENTER) -> None:
        out = Path(self.path.format(index=self.shown))
        out.parent.mkdir(parents=True, exist_ok=True)
        image.to_pil().save(out)
        logger.debug("Wrote %dx%d image to %s", image.width, image.height, out)
        self.last_path = out
        self.shown += 1
