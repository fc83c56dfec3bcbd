"""
Color histogram extraction.

Samples a sparse grid of pixels, ignores transparent ones and counts exact
colors. Sampling every Nth pixel trades a little accuracy for speed on large
captures.
"""

import logging

import numpy as np

from ..matching.delta_e import delta_e_2000, rgb_to_lab
from ..model.color import RGB
from .models import ColorSample
from .pixel_buffer import PixelBuffer, decode_image_async

logger = logging.getLogger(__name__)

ALPHA_THRESHOLD = 128


def extract_colors_from_buffer(
    buffer: PixelBuffer,
    sample_rate: int = 4,
    max_colors: int = 64,
) -> list[ColorSample]:
    """
    Count the unique colors of a pixel buffer.

    Args:
        buffer: Decoded RGBA pixels
        sample_rate: Visit every Nth pixel on both axes
        max_colors: Maximum number of colors to return

    Returns:
        Colors sorted by descending share of sampled pixels. Equal shares
        keep the order in which the colors were first met, scanning rows
        top to bottom. Empty when no pixel is opaque enough to sample.
    """
    if sample_rate < 1:
        raise ValueError(f"sample_rate must be >= 1, got {sample_rate}")
    if max_colors < 1:
        raise ValueError(f"max_colors must be >= 1, got {max_colors}")

    grid = buffer.data[::sample_rate, ::sample_rate].reshape(-1, 4)
    opaque = grid[grid[:, 3] >= ALPHA_THRESHOLD]

    total_sampled = len(opaque)
    if total_sampled == 0:
        logger.debug("No opaque pixels sampled; returning no colors")
        return []

    rgb = opaque[:, :3].astype(np.uint32)
    keys = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]

    unique_keys, first_index, counts = np.unique(keys, return_index=True, return_counts=True)

    # Descending count, then scan order of first appearance
    order = np.lexsort((first_index, -counts))[:max_colors]

    samples = []
    for idx in order:
        key = int(unique_keys[idx])
        color = RGB((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF)
        samples.append(
            ColorSample(
                hex=color.to_hex(),
                rgb=color,
                percentage=int(counts[idx]) / total_sampled * 100,
            )
        )

    logger.debug(
        f"Sampled {total_sampled} pixels, found {len(unique_keys)} unique colors, "
        f"returning {len(samples)}"
    )
    return samples


async def extract_unique_colors(
    image_bytes: bytes,
    sample_rate: int = 4,
    max_colors: int = 64,
) -> list[ColorSample]:
    """
    Decode an image and extract its unique colors.

    Raises:
        ImageDecodeError: If the image cannot be decoded
    """
    buffer = await decode_image_async(image_bytes)
    return extract_colors_from_buffer(buffer, sample_rate=sample_rate, max_colors=max_colors)


def merge_similar_colors(samples: list[ColorSample], threshold: float) -> list[ColorSample]:
    """
    Fold perceptually indistinguishable colors together.

    Each sample is merged into the first kept sample within ``threshold``
    CIEDE2000 of it, adding its share. Input order decides which hex
    survives, so pass samples sorted by coverage.
    """
    if threshold <= 0:
        return list(samples)

    kept: list[ColorSample] = []
    kept_labs = []

    for sample in samples:
        lab = rgb_to_lab(sample.rgb)
        for i, kept_lab in enumerate(kept_labs):
            if delta_e_2000(lab, kept_lab) <= threshold:
                target = kept[i]
                kept[i] = ColorSample(
                    hex=target.hex,
                    rgb=target.rgb,
                    percentage=target.percentage + sample.percentage,
                )
                break
        else:
            kept.append(sample)
            kept_labs.append(lab)

    if len(kept) < len(samples):
        logger.debug(f"Merged {len(samples)} colors into {len(kept)} (threshold {threshold})")

    return sorted(kept, key=lambda s: s.percentage, reverse=True)
