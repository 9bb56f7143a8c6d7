"""Blur: exact box blur and a downsample/blur/upsample approximation."""

import numpy as np
import torch
import torch.nn.functional as F

from .buffer import ImageBuffer

# Radius of the box blur run on the downsampled image.
FAST_BLUR_RADIUS = 1


def _to_tensor(pixels: np.ndarray) -> torch.Tensor:
    """[H, W, 4] array -> [1, 4, H, W] tensor."""
    return torch.from_numpy(pixels.transpose(2, 0, 1).copy()).unsqueeze(0)


def _to_pixels(x: torch.Tensor) -> np.ndarray:
    return x[0].permute(1, 2, 0).numpy()


@torch.no_grad()
def box_blur(image: ImageBuffer, radius: int) -> ImageBuffer:
    """Mean over the (2r+1) x (2r+1) window, edge pixels replicated."""
    if radius <= 0:
        return image
    x = _to_tensor(image.pixels)
    x = F.pad(x, (radius, radius, radius, radius), mode="replicate")
    x = F.avg_pool2d(x, kernel_size=2 * radius + 1, stride=1)
    return ImageBuffer(_to_pixels(x))


def fast_blur_scale(radius: int) -> int:
    return max(1, radius // 2)


def downsample(image: ImageBuffer, scale: int) -> ImageBuffer:
    """Nearest-neighbour point sampling every `scale` pixels."""
    return ImageBuffer(image.pixels[::scale, ::scale])


def upsample(small: ImageBuffer, width: int, height: int, scale: int) -> ImageBuffer:
    """Nearest-neighbour expansion of small back to width x height."""
    ys = np.minimum(np.arange(height) // scale, small.height - 1)
    xs = np.minimum(np.arange(width) // scale, small.width - 1)
    return ImageBuffer(small.pixels[ys[:, None], xs[None, :]])


def fast_blur(image: ImageBuffer, radius: int) -> ImageBuffer:
    """Approximate a large box blur at reduced resolution.

    Cost no longer grows with radius^2: the image is point-sampled down by
    max(1, radius // 2), box blurred with radius 1 and expanded back with
    nearest-neighbour lookups. The result is blockier than `box_blur`.
    """
    if radius <= 0:
        return image
    scale = fast_blur_scale(radius)
    small = box_blur(downsample(image, scale), FAST_BLUR_RADIUS)
    return upsample(small, image.width, image.height, scale)


def blur(image: ImageBuffer, radius: int, fast: bool = False) -> ImageBuffer:
    """Blur image by radius; radius <= 0 returns the same buffer."""
    if radius <= 0:
        return image
    return fast_blur(image, radius) if fast else box_blur(image, radius)
