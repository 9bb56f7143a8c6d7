"""ImageBuffer: immutable RGBA pixel grid."""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from PIL import Image


class GeometryError(ValueError):
    """Raised when a computed image dimension is zero or negative."""


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """Row-major grid of RGBA samples in [0, 1].

    pixels: [H, W, 4] float32, read-only once built.
    """
    pixels: np.ndarray

    def __post_init__(self):
        arr = np.asarray(self.pixels, dtype=np.float32)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected [H, W, 4] pixels, got shape {arr.shape}")
        if arr.shape[0] <= 0 or arr.shape[1] <= 0:
            raise GeometryError(f"Invalid buffer size {arr.shape[1]}x{arr.shape[0]}")
        arr = np.clip(arr, 0.0, 1.0)
        arr.flags.writeable = False
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> Tuple[float, float, float, float]:
        r, g, b, a = self.pixels[y, x]
        return float(r), float(g), float(b), float(a)

    def flat(self) -> np.ndarray:
        """[W*H, 4] view, index = y * width + x."""
        return self.pixels.reshape(-1, 4)

    def copy(self) -> "ImageBuffer":
        return ImageBuffer(self.pixels.copy())

    @classmethod
    def transparent(cls, width: int, height: int) -> "ImageBuffer":
        _check_size(width, height)
        return cls(np.zeros((height, width, 4), dtype=np.float32))

    @classmethod
    def filled(cls, width: int, height: int, color: Sequence[float]) -> "ImageBuffer":
        _check_size(width, height)
        arr = np.empty((height, width, 4), dtype=np.float32)
        arr[...] = np.asarray(color, dtype=np.float32)
        return cls(arr)

    @classmethod
    def from_pil(cls, img: Image.Image) -> "ImageBuffer":
        """Convert a PIL image of any mode to a float RGBA buffer."""
        arr = np.array(img.convert("RGBA"), dtype=np.float32) / 255.0
        return cls(arr)

    def to_pil(self) -> Image.Image:
        arr = (self.pixels * 255.0 + 0.5).astype(np.uint8)
        return Image.fromarray(arr)


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise GeometryError(f"Invalid buffer size {width}x{height}")
