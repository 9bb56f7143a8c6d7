"""Source normalization: readable float RGBA copy, capped in size."""

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F
from PIL import Image

from .buffer import ImageBuffer, GeometryError

logger = logging.getLogger(__name__)

SourceLike = Union[ImageBuffer, Image.Image, np.ndarray, torch.Tensor, str, Path]


def _array_to_rgba(arr: np.ndarray) -> np.ndarray:
    """[H, W], [H, W, 1|3|4] of any numeric dtype -> [H, W, 4] float32."""
    if np.issubdtype(arr.dtype, np.integer):
        arr = arr.astype(np.float32) / float(np.iinfo(arr.dtype).max)
    else:
        arr = arr.astype(np.float32)

    if arr.ndim == 2:
        arr = arr[..., None]
    if arr.ndim != 3 or arr.shape[2] not in (1, 3, 4):
        raise ValueError(f"Unsupported image array shape {arr.shape}")

    H, W, C = arr.shape
    if C == 4:
        return arr
    out = np.ones((H, W, 4), dtype=np.float32)
    out[..., :3] = arr if C == 3 else np.repeat(arr, 3, axis=2)
    return out


def make_readable(source: SourceLike) -> ImageBuffer:
    """Copy any supported source into a fresh ImageBuffer at full resolution.

    Args:
        source: ImageBuffer, PIL image, numpy array ([H, W] or [H, W, C]),
            torch tensor ([C, H, W]) or path to an image file

    Returns:
        new ImageBuffer with the source's exact pixel values
    """
    if isinstance(source, ImageBuffer):
        return source.copy()
    if isinstance(source, (str, Path)):
        with Image.open(source) as img:
            return ImageBuffer.from_pil(img)
    if isinstance(source, Image.Image):
        return ImageBuffer.from_pil(source)
    if isinstance(source, torch.Tensor):
        t = source.detach().cpu()
        if t.dim() == 3:
            t = t.permute(1, 2, 0)
        return ImageBuffer(_array_to_rgba(t.numpy()))
    if isinstance(source, np.ndarray):
        return ImageBuffer(_array_to_rgba(source))
    raise TypeError(f"Unsupported image source: {type(source).__name__}")


def fit_size(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """Size after capping the longest edge at max_size, aspect preserved."""
    if max(width, height) <= max_size:
        return width, height
    scale = min(max_size / width, max_size / height)
    new_w, new_h = int(round(width * scale)), int(round(height * scale))
    if new_w <= 0 or new_h <= 0:
        raise GeometryError(
            f"Resizing {width}x{height} to fit {max_size} gives {new_w}x{new_h}"
        )
    return new_w, new_h


@torch.no_grad()
def resize(image: ImageBuffer, width: int, height: int) -> ImageBuffer:
    """Bilinear resample (antialiased when shrinking)."""
    if width <= 0 or height <= 0:
        raise GeometryError(f"Invalid resize target {width}x{height}")
    x = torch.from_numpy(image.pixels.transpose(2, 0, 1).copy()).unsqueeze(0)
    shrinking = width < image.width or height < image.height
    x = F.interpolate(x, size=(height, width), mode="bilinear",
                      align_corners=False, antialias=shrinking)
    return ImageBuffer(x[0].permute(1, 2, 0).numpy())


def normalize(source: SourceLike, max_size: int) -> ImageBuffer:
    """Readable copy of source, downsized so its longest edge is <= max_size."""
    readable = make_readable(source)
    width, height = fit_size(readable.width, readable.height, max_size)
    if (width, height) == readable.size:
        return readable

    logger.debug("Resizing source %dx%d -> %dx%d", readable.width, readable.height, width, height)
    return resize(readable, width, height)
