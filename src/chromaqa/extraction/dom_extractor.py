"""
Structural extraction from captured element metadata.

When an asset comes from a live, inspectable page, colors and fonts are read
directly from each element's computed styles with exact bounds, so no pixel
analysis is needed.
"""

import logging

from .css_values import parse_css_color
from .font_extractor import TEXT_PREVIEW_LENGTH, extract_fonts
from .models import CapturedElement, ExtractionResult, LocatedColor

logger = logging.getLogger(__name__)


def extract_colors_from_dom(elements: list[CapturedElement]) -> list[LocatedColor]:
    """
    Collect background colors, one entry per distinct hex.

    For each hex the largest-area element wins, which favors section and
    container backgrounds over small accents. A later element replaces an
    earlier one only when it is strictly larger.
    """
    colors: dict[str, LocatedColor] = {}

    for element in elements:
        background = parse_css_color(element.styles.background_color)
        if background is None:
            continue

        existing = colors.get(background.hex)
        if existing is None or element.bounds.area > existing.bounds.area:
            colors[background.hex] = LocatedColor(
                hex=background.hex,
                rgb=background.rgb,
                percentage=0.0,
                bounds=element.bounds,
                centroid=element.centroid,
            )

    return list(colors.values())


def extract_from_dom(
    elements: list[CapturedElement],
    preview_length: int = TEXT_PREVIEW_LENGTH,
) -> ExtractionResult:
    """Extract background colors and text fonts from captured elements."""
    result = ExtractionResult(
        colors=extract_colors_from_dom(elements),
        fonts=extract_fonts(elements, preview_length=preview_length),
    )
    logger.debug(
        f"DOM extraction: {len(elements)} elements -> "
        f"{len(result.colors)} colors, {len(result.fonts)} fonts"
    )
    return result
