"""
Region detection: find where a color appears on an image.

Algorithm:
1. Build a binary mask of pixels within a Euclidean RGB tolerance of the
   target color.
2. Label 4-connected components with an iterative flood fill driven by an
   explicit stack, so a full-bleed background of hundreds of thousands of
   pixels cannot exhaust the call stack.
3. Compute bounds, centroid and size for each component and drop those
   below ``min_region_percent`` of the image.
4. Return components sorted by size, largest first.

The mask uses plain RGB distance rather than CIEDE2000 because it runs once
per pixel per color.
"""

import logging

import numpy as np

from ..model.color import RGB
from .models import BoundingBox, ColorRegion, ColorSample, LocatedColor, Point, round_half_up
from .pixel_buffer import PixelBuffer, decode_image_async

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 10.0
DEFAULT_MIN_REGION_PERCENT = 0.1
DEFAULT_MAX_DIMENSION = 500


def build_color_mask(buffer: PixelBuffer, target: RGB, tolerance: float) -> np.ndarray:
    """Boolean ``(height, width)`` mask of pixels within ``tolerance`` of ``target``."""
    diff = buffer.rgb.astype(np.int32) - np.array(target.to_tuple(), dtype=np.int32)
    dist_sq = np.einsum("ijk,ijk->ij", diff, diff)
    return dist_sq <= tolerance * tolerance


def _flood_fill(
    mask: bytearray,
    visited: bytearray,
    width: int,
    height: int,
    start: int,
) -> ColorRegion:
    """Collect the 4-connected component containing flat index ``start``."""
    stack = [start]
    visited[start] = 1

    start_y, start_x = divmod(start, width)
    min_x = max_x = start_x
    min_y = max_y = start_y
    sum_x = sum_y = count = 0
    last_row = (height - 1) * width

    while stack:
        idx = stack.pop()
        y, x = divmod(idx, width)

        count += 1
        sum_x += x
        sum_y += y
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

        # Right, left, down, up; no diagonals
        if x + 1 < width:
            n = idx + 1
            if mask[n] and not visited[n]:
                visited[n] = 1
                stack.append(n)
        if x > 0:
            n = idx - 1
            if mask[n] and not visited[n]:
                visited[n] = 1
                stack.append(n)
        if idx < last_row:
            n = idx + width
            if mask[n] and not visited[n]:
                visited[n] = 1
                stack.append(n)
        if idx >= width:
            n = idx - width
            if mask[n] and not visited[n]:
                visited[n] = 1
                stack.append(n)

    return ColorRegion(
        bounds=BoundingBox(x=min_x, y=min_y, width=max_x - min_x + 1, height=max_y - min_y + 1),
        centroid=Point(round_half_up(sum_x / count), round_half_up(sum_y / count)),
        pixel_count=count,
    )


def detect_color_regions(
    buffer: PixelBuffer,
    target_rgb: RGB,
    tolerance: float = DEFAULT_TOLERANCE,
    min_region_percent: float = DEFAULT_MIN_REGION_PERCENT,
) -> list[ColorRegion]:
    """
    Find every connected region where ``target_rgb`` appears.

    Args:
        buffer: Pixels to search
        target_rgb: Color to look for
        tolerance: Maximum Euclidean RGB distance for a pixel to match
        min_region_percent: Drop regions smaller than this percent of the image

    Returns:
        Regions sorted by descending pixel count; equal sizes keep scan order
    """
    width, height = buffer.width, buffer.height
    total_pixels = width * height
    if total_pixels == 0:
        return []

    mask_array = build_color_mask(buffer, target_rgb, tolerance)
    seeds = np.flatnonzero(mask_array)
    if seeds.size == 0:
        return []

    mask = bytearray(mask_array.astype(np.uint8).tobytes())
    visited = bytearray(total_pixels)
    regions: list[ColorRegion] = []

    for seed in seeds.tolist():
        if visited[seed]:
            continue
        region = _flood_fill(mask, visited, width, height, seed)
        percentage = region.pixel_count / total_pixels * 100
        if percentage >= min_region_percent:
            region.percentage = percentage
            regions.append(region)

    regions.sort(key=lambda r: r.pixel_count, reverse=True)
    return regions


def _largest_region(
    buffer: PixelBuffer,
    color: ColorSample,
    tolerance: float,
    min_region_percent: float,
) -> ColorRegion | None:
    regions = detect_color_regions(
        buffer, color.rgb, tolerance=tolerance, min_region_percent=min_region_percent
    )
    return regions[0] if regions else None


def _full_image(color: ColorSample, width: int, height: int) -> LocatedColor:
    return LocatedColor.from_sample(
        color,
        bounds=BoundingBox(0, 0, width, height),
        centroid=Point(round_half_up(width / 2), round_half_up(height / 2)),
    )


def locate_colors(
    buffer: PixelBuffer,
    colors: list[ColorSample],
    tolerance: float = DEFAULT_TOLERANCE,
    min_region_percent: float = DEFAULT_MIN_REGION_PERCENT,
) -> list[LocatedColor]:
    """
    Attach the bounds and centroid of each color's largest region.

    A color with no surviving region is placed over the whole image so that
    every color always has a location.
    """
    located = []
    for color in colors:
        region = _largest_region(buffer, color, tolerance, min_region_percent)
        if region is None:
            located.append(_full_image(color, buffer.width, buffer.height))
        else:
            located.append(LocatedColor.from_sample(color, region.bounds, region.centroid))
    return located


def locate_colors_scaled(
    buffer: PixelBuffer,
    colors: list[ColorSample],
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    tolerance: float = DEFAULT_TOLERANCE,
    min_region_percent: float = DEFAULT_MIN_REGION_PERCENT,
) -> list[LocatedColor]:
    """
    Locate colors on a copy of ``buffer`` shrunk to ``max_dimension``.

    Bounding the longer side bounds the cost of flood fill on arbitrarily
    large captures. Bounds and centroids are scaled back to the original
    image; colors without a surviving region cover the full original image.
    """
    small, scale = buffer.downscaled(max_dimension)
    inv_scale = 1 / scale

    located = []
    for color in colors:
        region = _largest_region(small, color, tolerance, min_region_percent)
        if region is None:
            located.append(_full_image(color, buffer.width, buffer.height))
            continue
        located.append(
            LocatedColor.from_sample(
                color,
                bounds=region.bounds.scaled(inv_scale),
                centroid=region.centroid.scaled(inv_scale),
            )
        )

    logger.debug(
        f"Located {len(colors)} colors on {small.width}x{small.height} "
        f"(original {buffer.width}x{buffer.height})"
    )
    return located


async def locate_colors_optimized(
    image: bytes | PixelBuffer,
    colors: list[ColorSample],
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    tolerance: float = DEFAULT_TOLERANCE,
    min_region_percent: float = DEFAULT_MIN_REGION_PERCENT,
) -> list[LocatedColor]:
    """
    Decode if needed, then locate colors on a downscaled copy.

    Raises:
        ImageDecodeError: If ``image`` is bytes that cannot be decoded
    """
    buffer = image if isinstance(image, PixelBuffer) else await decode_image_async(image)
    return locate_colors_scaled(
        buffer,
        colors,
        max_dimension=max_dimension,
        tolerance=tolerance,
        min_region_percent=min_region_percent,
    )
