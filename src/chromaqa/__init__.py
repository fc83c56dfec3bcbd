"""chromaqa: color and typography extraction for visual QA.

Extracts located colors and fonts from captured webpages, screenshots and
design exports, and judges perceptual color equality with CIEDE2000.
"""

from .base_exceptions import ChromaQAException
from .config import ChromaQASettings, get_settings
from .extraction import (
    CapturedAsset,
    CapturedElement,
    ExtractionOrchestrator,
    ExtractionResult,
    ImageDecodeError,
    LocatedColor,
    LocatedFont,
    Provenance,
    extract_all,
)
from .matching import delta_e_2000, delta_e_2000_hex, lab_to_rgb, rgb_to_lab
from .model import LAB, RGB

__version__ = "0.1.0"

__all__ = [
    "ChromaQAException",
    "ChromaQASettings",
    "get_settings",
    "CapturedAsset",
    "CapturedElement",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "ImageDecodeError",
    "LocatedColor",
    "LocatedFont",
    "Provenance",
    "extract_all",
    "delta_e_2000",
    "delta_e_2000_hex",
    "lab_to_rgb",
    "rgb_to_lab",
    "LAB",
    "RGB",
]
