"""
Font extraction from captured element metadata.

Reads family, size, weight and color straight from computed styles; no
pixel analysis and no OCR.
"""

import logging
from typing import Any

from .css_values import parse_css_color
from .models import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_TEXT_COLOR,
    CapturedElement,
    LocatedFont,
)

logger = logging.getLogger(__name__)

TEXT_PREVIEW_LENGTH = 50


def clean_font_family(family: str | None) -> str:
    """Reduce a CSS font stack to its first family name.

    ``'"Inter", sans-serif'`` becomes ``'Inter'``; the remaining names are
    fallbacks and are not reported.
    """
    if not family:
        return DEFAULT_FONT_FAMILY
    first = family.replace('"', "").replace("'", "").split(",")[0].strip()
    return first or DEFAULT_FONT_FAMILY


def font_from_element(
    element: CapturedElement, preview_length: int = TEXT_PREVIEW_LENGTH
) -> LocatedFont:
    """Build a LocatedFont from one element, applying style defaults."""
    styles = element.styles
    color = parse_css_color(styles.color)

    return LocatedFont(
        font_family=clean_font_family(styles.font_family),
        font_size=styles.font_size or "",
        font_weight=styles.font_weight or DEFAULT_FONT_WEIGHT,
        color=color.hex if color else DEFAULT_TEXT_COLOR,
        selector=element.selector,
        text_preview=element.text_content[:preview_length],
        bounds=element.bounds,
        centroid=element.centroid,
    )


def extract_fonts(
    elements: list[CapturedElement] | None = None,
    design_nodes: list[dict[str, Any]] | None = None,
    preview_length: int = TEXT_PREVIEW_LENGTH,
) -> list[LocatedFont]:
    """
    Extract one font entry per element that has visible text.

    Args:
        elements: Captured elements with computed styles
        design_nodes: Design-tool nodes. Accepted so vector sources can be
            wired in later; they currently produce no fonts.
        preview_length: Characters of text kept in ``text_preview``

    Returns:
        Fonts in element order, without deduplication
    """
    fonts = [
        font_from_element(element, preview_length)
        for element in elements or []
        if element.text_content and element.text_content.strip()
    ]

    if design_nodes:
        logger.debug(f"Ignoring {len(design_nodes)} design nodes; no font reader for them yet")

    return fonts
