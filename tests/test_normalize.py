"""Tests for source normalization."""

import pytest
import numpy as np
import torch
from PIL import Image

from defocus.core import ImageBuffer, GeometryError, make_readable, fit_size, resize, normalize


class TestMakeReadable:
    def test_buffer_is_copied(self):
        src = ImageBuffer.filled(3, 3, (0.1, 0.2, 0.3, 0.4))
        out = make_readable(src)

        assert out is not src
        assert np.array_equal(out.pixels, src.pixels)

    def test_uint8_rgb_array(self):
        arr = np.full((2, 3, 3), 51, dtype=np.uint8)
        out = make_readable(arr)

        assert out.size == (3, 2)
        assert out.get_pixel(0, 0) == pytest.approx((0.2, 0.2, 0.2, 1.0))

    def test_grayscale_array(self):
        arr = np.array([[0.0, 0.5], [1.0, 0.25]], dtype=np.float64)
        out = make_readable(arr)

        assert out.get_pixel(1, 0) == pytest.approx((0.5, 0.5, 0.5, 1.0))
        assert out.get_pixel(0, 1) == pytest.approx((1.0, 1.0, 1.0, 1.0))

    def test_rgba_float_array_exact(self):
        arr = np.random.default_rng(0).random((4, 5, 4)).astype(np.float32)
        out = make_readable(arr)
        assert np.array_equal(out.pixels, arr)

    def test_tensor_chw(self):
        t = torch.zeros(3, 2, 4)
        t[0] = 1.0
        out = make_readable(t)

        assert out.size == (4, 2)
        assert out.get_pixel(3, 1) == pytest.approx((1.0, 0.0, 0.0, 1.0))

    def test_pil_image(self):
        img = Image.new("RGBA", (3, 2), (0, 255, 0, 128))
        out = make_readable(img)
        assert out.get_pixel(1, 1) == pytest.approx((0.0, 1.0, 0.0, 128 / 255))

    def test_path(self, tmp_path):
        path = tmp_path / "src.png"
        Image.new("RGBA", (6, 4), (255, 0, 0, 255)).save(path)

        out = make_readable(path)
        assert out.size == (6, 4)
        assert out.get_pixel(5, 3) == pytest.approx((1.0, 0.0, 0.0, 1.0))

        out = make_readable(str(path))
        assert out.size == (6, 4)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            make_readable([[0.0, 1.0]])

    def test_unsupported_shape(self):
        with pytest.raises(ValueError):
            make_readable(np.zeros((2, 2, 2)))


class TestFitSize:
    def test_no_resize_when_small(self):
        assert fit_size(300, 200, 400) == (300, 200)
        assert fit_size(400, 400, 400) == (400, 400)

    def test_landscape(self):
        assert fit_size(1000, 500, 400) == (400, 200)

    def test_portrait(self):
        assert fit_size(300, 900, 300) == (100, 300)

    def test_degenerate(self):
        with pytest.raises(GeometryError):
            fit_size(1000, 1, 400)


class TestNormalize:
    def test_resize_preserves_aspect(self):
        src = ImageBuffer.filled(1000, 500, (0.2, 0.4, 0.6, 1.0))
        out = normalize(src, 400)

        assert out.size == (400, 200)
        assert np.allclose(out.pixels, (0.2, 0.4, 0.6, 1.0), atol=1e-5)

    def test_no_resize_exact_copy(self):
        arr = np.random.default_rng(1).random((8, 6, 4)).astype(np.float32)
        src = ImageBuffer(arr)
        out = normalize(src, 64)

        assert out is not src
        assert np.array_equal(out.pixels, src.pixels)

    def test_source_untouched(self):
        src = ImageBuffer.filled(20, 10, (1.0, 0.0, 0.0, 1.0))
        before = src.pixels.copy()
        normalize(src, 5)
        assert np.array_equal(src.pixels, before)

    def test_resize_upscale(self):
        src = ImageBuffer.filled(2, 2, (0.5, 0.5, 0.5, 1.0))
        out = resize(src, 4, 6)
        assert out.size == (4, 6)
        assert np.allclose(out.pixels, (0.5, 0.5, 0.5, 1.0), atol=1e-6)

    def test_resize_invalid(self):
        with pytest.raises(GeometryError):
            resize(ImageBuffer.transparent(2, 2), 0, 2)
