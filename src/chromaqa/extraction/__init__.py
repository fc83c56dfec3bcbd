"""
Color and typography extraction for visual QA.

Turns a captured asset into located colors and fonts, each with a bounding
box and centroid on the source image.

The framework consists of:
1. Structural extraction: reads computed styles of captured elements
2. Raster extraction: histogram sampling plus connected-region detection
3. Font extraction: text styling from element metadata

The ExtractionOrchestrator chooses between them by asset provenance.
"""

from .color_extractor import extract_colors_from_buffer, extract_unique_colors, merge_similar_colors
from .css_values import ParsedColor, parse_css_color
from .dom_extractor import extract_colors_from_dom, extract_from_dom
from .exceptions import ExtractionError, ImageDecodeError
from .font_extractor import clean_font_family, extract_fonts
from .models import (
    BoundingBox,
    CapturedAsset,
    CapturedElement,
    ColorRegion,
    ColorSample,
    ElementStyles,
    ExtractionResult,
    LocatedColor,
    LocatedFont,
    Point,
    Provenance,
)
from .orchestrator import ExtractionOrchestrator, extract_all
from .pixel_buffer import PixelBuffer, decode_image, decode_image_async
from .region_detector import (
    build_color_mask,
    detect_color_regions,
    locate_colors,
    locate_colors_optimized,
    locate_colors_scaled,
)

__all__ = [
    # Orchestration
    "ExtractionOrchestrator",
    "extract_all",
    # Extractors
    "extract_colors_from_buffer",
    "extract_unique_colors",
    "merge_similar_colors",
    "build_color_mask",
    "detect_color_regions",
    "locate_colors",
    "locate_colors_scaled",
    "locate_colors_optimized",
    "extract_from_dom",
    "extract_colors_from_dom",
    "extract_fonts",
    "clean_font_family",
    "parse_css_color",
    "ParsedColor",
    # Pixel access
    "PixelBuffer",
    "decode_image",
    "decode_image_async",
    # Models
    "BoundingBox",
    "Point",
    "Provenance",
    "CapturedAsset",
    "CapturedElement",
    "ElementStyles",
    "ColorSample",
    "ColorRegion",
    "LocatedColor",
    "LocatedFont",
    "ExtractionResult",
    # Errors
    "ExtractionError",
    "ImageDecodeError",
]
