"""Compositor: two offset copies of one image blended onto a wide canvas."""

import logging
import math
from typing import Callable, Dict, Tuple

import numpy as np

from .buffer import ImageBuffer, GeometryError
from .config import BlendMode

logger = logging.getLogger(__name__)

# Source pixels at or below this alpha leave the canvas untouched.
ALPHA_EPSILON = 0.01

BlendFn = Callable[[np.ndarray, np.ndarray], np.ndarray]


def blend_alpha(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    """Straight-alpha "over" compositing of src onto dst."""
    sa, da = src[..., 3:4], dst[..., 3:4]
    out_a = sa + da * (1.0 - sa)
    num = src[..., :3] * sa + dst[..., :3] * da * (1.0 - sa)
    out = np.zeros_like(dst)
    np.divide(num, out_a, out=out[..., :3], where=out_a > 0)
    out[..., 3:4] = out_a
    return out


def blend_additive(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    return np.clip(dst + src, 0.0, 1.0)


def blend_multiply(dst: np.ndarray, src: np.ndarray) -> np.ndarray:
    out = np.empty_like(dst)
    out[..., :3] = dst[..., :3] * src[..., :3] + src[..., :3] * (1.0 - dst[..., 3:4])
    out[..., 3] = np.clip(dst[..., 3] + src[..., 3], 0.0, 1.0)
    return out


BLEND_FUNCS: Dict[BlendMode, BlendFn] = {
    BlendMode.ALPHA: blend_alpha,
    BlendMode.ADDITIVE: blend_additive,
    BlendMode.MULTIPLY: blend_multiply,
}


def get_blend_fn(mode: BlendMode) -> BlendFn:
    return BLEND_FUNCS[BlendMode(mode)]


def _apply(dst: np.ndarray, src: np.ndarray, fn: BlendFn) -> np.ndarray:
    visible = src[..., 3:4] > ALPHA_EPSILON
    return np.where(visible, np.clip(fn(dst, src), 0.0, 1.0), dst)


def blend(dst: np.ndarray, src: np.ndarray, mode: BlendMode) -> np.ndarray:
    """Blend src RGBA samples onto dst RGBA samples (same shape [..., 4]).

    Returns a new array; neither input is modified.
    """
    dst = np.asarray(dst, dtype=np.float32)
    src = np.asarray(src, dtype=np.float32)
    return _apply(dst, src, get_blend_fn(mode))


def composite_size(width: int, height: int, separation: float) -> Tuple[int, int]:
    """Canvas size holding both copies with a margin on each side."""
    if not math.isfinite(separation):
        raise GeometryError(f"Non-finite separation {separation}")
    out_w = width + 2 * int(round(separation))
    if out_w <= 0 or height <= 0:
        raise GeometryError(
            f"Separation {separation} gives a {out_w}x{height} canvas for a {width}px source"
        )
    return out_w, height


def placement_offsets(width: int, out_width: int, separation: float) -> Tuple[int, int]:
    """Left and right x offsets of the two copies, centred on the canvas."""
    center_x = out_width // 2
    half = int(round(separation / 2))
    return center_x - half - width // 2, center_x + half - width // 2


def place(canvas: np.ndarray, src: np.ndarray, offset_x: int, fn: BlendFn) -> None:
    """Blend src onto canvas at column offset_x in place; off-canvas columns are dropped."""
    out_w = canvas.shape[1]
    x0 = max(0, -offset_x)
    x1 = min(src.shape[1], out_w - offset_x)
    if x0 >= x1:
        return
    h = min(src.shape[0], canvas.shape[0])
    region = canvas[:h, offset_x + x0:offset_x + x1]
    canvas[:h, offset_x + x0:offset_x + x1] = _apply(region, src[:h, x0:x1], fn)


def composite(source: ImageBuffer, separation: float, mode: BlendMode) -> ImageBuffer:
    """Blend two copies of source separated horizontally by `separation` pixels.

    Args:
        source: image to duplicate
        separation: distance between the copies in pixels
        mode: blend rule; the right copy is blended over the left one

    Returns:
        new ImageBuffer of size (source.width + 2 * round(separation), source.height)
    """
    out_w, out_h = composite_size(source.width, source.height, separation)
    left, right = placement_offsets(source.width, out_w, separation)
    fn = get_blend_fn(mode)

    canvas = np.zeros((out_h, out_w, 4), dtype=np.float32)
    place(canvas, source.pixels, left, fn)
    place(canvas, source.pixels, right, fn)

    logger.debug("Composited %dx%d at offsets %d/%d (%s)", out_w, out_h, left, right, BlendMode(mode).value)
    return ImageBuffer(canvas)
