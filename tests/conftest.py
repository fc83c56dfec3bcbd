"""Pytest configuration and fixtures."""

import io

import numpy as np
import pytest
from PIL import Image

from chromaqa.config import ChromaQASettings, reset_settings
from chromaqa.extraction import PixelBuffer

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def solid_rgba(
    width: int, height: int, color: tuple[int, int, int], alpha: int = 255
) -> np.ndarray:
    """Create a (height, width, 4) array filled with one color."""
    array = np.zeros((height, width, 4), dtype=np.uint8)
    array[:, :, :3] = color
    array[:, :, 3] = alpha
    return array


def encode_png(array: np.ndarray) -> bytes:
    """Encode an RGB or RGBA array as PNG bytes."""
    out = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8)).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the settings singleton and environment from leaking between tests."""
    for name in ("CHROMAQA_ENV", "CHROMAQA_MAX_DIMENSION", "CHROMAQA_SAMPLE_RATE"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> ChromaQASettings:
    """Settings that read no .env file."""
    return ChromaQASettings(_env_file=None)


@pytest.fixture
def red_with_blue_corner() -> np.ndarray:
    """10x10 solid red with a 2x2 blue square in the top-left corner."""
    array = solid_rgba(10, 10, RED)
    array[0:2, 0:2, :3] = BLUE
    return array


@pytest.fixture
def red_with_blue_corner_buffer(red_with_blue_corner) -> PixelBuffer:
    return PixelBuffer(red_with_blue_corner)


@pytest.fixture
def checkerboard_buffer() -> PixelBuffer:
    """8x8 board alternating red and white every pixel."""
    array = solid_rgba(8, 8, WHITE)
    ys, xs = np.indices((8, 8))
    array[(xs + ys) % 2 == 0, :3] = RED
    return PixelBuffer(array)


@pytest.fixture
def png_factory():
    """Return a helper that encodes arrays as PNG bytes."""
    return encode_png
