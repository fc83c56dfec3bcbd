"""Tests for PixelBuffer and image decoding."""

import numpy as np
import pytest

from chromaqa.extraction.exceptions import ExtractionError, ImageDecodeError
from chromaqa.extraction.pixel_buffer import PixelBuffer, decode_image, decode_image_async
from conftest import BLUE, RED, solid_rgba


class TestPixelBuffer:
    """Tests for PixelBuffer construction and accessors."""

    def test_dimensions(self) -> None:
        buffer = PixelBuffer(solid_rgba(7, 3, RED))

        assert buffer.width == 7
        assert buffer.height == 3
        assert buffer.total_pixels == 21
        assert buffer.rgb.shape == (3, 7, 3)
        assert buffer.alpha.shape == (3, 7)

    def test_is_read_only_copy(self) -> None:
        array = solid_rgba(2, 2, RED)
        buffer = PixelBuffer(array)

        array[0, 0, :3] = BLUE

        assert tuple(buffer.data[0, 0, :3]) == RED
        with pytest.raises(ValueError):
            buffer.data[0, 0, 0] = 1

    @pytest.mark.parametrize(
        "array",
        [
            np.zeros((4, 4, 3), dtype=np.uint8),
            np.zeros((4, 4), dtype=np.uint8),
            np.zeros((4, 4, 4), dtype=np.float32),
        ],
    )
    def test_rejects_invalid_arrays(self, array) -> None:
        with pytest.raises(ValueError):
            PixelBuffer(array)

    def test_from_array_adds_opaque_alpha(self) -> None:
        rgb = np.zeros((2, 3, 3), dtype=np.uint8)
        rgb[:, :] = BLUE

        buffer = PixelBuffer.from_array(rgb)

        assert buffer.data.shape == (2, 3, 4)
        assert (buffer.alpha == 255).all()
        assert tuple(buffer.data[1, 2, :3]) == BLUE

    def test_from_array_rejects_grayscale(self) -> None:
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))


class TestDownscaled:
    """Tests for PixelBuffer.downscaled."""

    def test_small_buffer_is_returned_unchanged(self) -> None:
        buffer = PixelBuffer(solid_rgba(100, 50, RED))

        small, scale = buffer.downscaled(500)

        assert small is buffer
        assert scale == 1.0

    def test_longer_side_is_bounded(self) -> None:
        buffer = PixelBuffer(solid_rgba(1000, 800, RED))

        small, scale = buffer.downscaled(500)

        assert scale == pytest.approx(0.5)
        assert (small.width, small.height) == (500, 400)

    def test_sizes_round_half_up(self) -> None:
        buffer = PixelBuffer(solid_rgba(8, 5, RED))

        small, scale = buffer.downscaled(4)

        # 5 * 0.5 = 2.5 rounds up to 3
        assert scale == pytest.approx(0.5)
        assert (small.width, small.height) == (4, 3)

    def test_solid_color_survives_resampling(self) -> None:
        buffer = PixelBuffer(solid_rgba(600, 300, BLUE))

        small, _ = buffer.downscaled(200)

        assert (small.rgb == np.array(BLUE, dtype=np.uint8)).all()

    def test_invalid_max_dimension(self) -> None:
        with pytest.raises(ValueError):
            PixelBuffer(solid_rgba(2, 2, RED)).downscaled(0)


class TestDecodeImage:
    """Tests for decode_image and decode_image_async."""

    def test_decodes_rgba_png(self, red_with_blue_corner, png_factory) -> None:
        buffer = decode_image(png_factory(red_with_blue_corner))

        assert (buffer.width, buffer.height) == (10, 10)
        assert np.array_equal(buffer.data, red_with_blue_corner)

    def test_decodes_rgb_png_as_opaque(self, png_factory) -> None:
        rgb = solid_rgba(4, 4, RED)[:, :, :3]

        buffer = decode_image(png_factory(rgb))

        assert (buffer.alpha == 255).all()

    def test_empty_bytes_raise(self) -> None:
        with pytest.raises(ImageDecodeError) as exc_info:
            decode_image(b"")

        assert exc_info.value.error_code == "DECODE_FAILED"

    def test_corrupt_bytes_raise(self) -> None:
        with pytest.raises(ImageDecodeError) as exc_info:
            decode_image(b"not an image")

        assert isinstance(exc_info.value, ExtractionError)
        assert exc_info.value.context == {"size": 12}

    @pytest.mark.asyncio
    async def test_async_decode(self, png_factory) -> None:
        buffer = await decode_image_async(png_factory(solid_rgba(3, 2, BLUE)))

        assert (buffer.width, buffer.height) == (3, 2)
