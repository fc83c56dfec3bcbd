"""
Data models for color and typography extraction.

These models represent captured assets handed over by the capture layer and
the located colors and fonts produced from them. Every located item carries
a bounding box and centroid in original-image pixel coordinates.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..model.color import RGB

DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_WEIGHT = "400"
DEFAULT_TEXT_COLOR = "#000000"


class Provenance(Enum):
    """How a visual asset was captured."""

    STRUCTURAL = "structural"  # Live, inspectable page with element metadata
    IMAGE = "image"  # Flattened raster screenshot or upload
    DESIGN = "design"  # Vector design-tool export rendered to raster

    @classmethod
    def parse(cls, value: "str | Provenance") -> "Provenance":
        if isinstance(value, cls):
            return value
        # Capture layer tags live-page captures as "url"
        if value == "url":
            return cls.STRUCTURAL
        if value == "figma":
            return cls.DESIGN
        return cls(value)


@dataclass
class BoundingBox:
    """Axis-aligned bounding box for a region or element."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> "Point":
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def scaled(self, factor: float) -> "BoundingBox":
        """Return a copy scaled by ``factor`` with coordinates rounded."""
        return BoundingBox(
            x=round_half_up(self.x * factor),
            y=round_half_up(self.y * factor),
            width=round_half_up(self.width * factor),
            height=round_half_up(self.height * factor),
        )

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoundingBox":
        return cls(
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data.get("width", data.get("w", 0)),
            height=data.get("height", data.get("h", 0)),
        )


@dataclass
class Point:
    """A position on the image."""

    x: float
    y: float

    def scaled(self, factor: float) -> "Point":
        return Point(round_half_up(self.x * factor), round_half_up(self.y * factor))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class ColorSample:
    """A color found by histogram sampling.

    ``percentage`` is the share of sampled, non-transparent pixels with
    exactly this color.
    """

    hex: str
    rgb: RGB
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {"hex": self.hex, "rgb": self.rgb.to_dict(), "percentage": self.percentage}


@dataclass
class ColorRegion:
    """One 4-connected component of pixels matching a target color."""

    bounds: BoundingBox
    centroid: Point
    pixel_count: int
    percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "bounds": self.bounds.to_dict(),
            "centroid": self.centroid.to_dict(),
            "pixel_count": self.pixel_count,
            "percentage": self.percentage,
        }


@dataclass
class LocatedColor:
    """A color sample positioned at its largest region on the image."""

    hex: str
    rgb: RGB
    percentage: float
    bounds: BoundingBox
    centroid: Point

    @classmethod
    def from_sample(
        cls, sample: ColorSample, bounds: BoundingBox, centroid: Point
    ) -> "LocatedColor":
        return cls(
            hex=sample.hex,
            rgb=sample.rgb,
            percentage=sample.percentage,
            bounds=bounds,
            centroid=centroid,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hex": self.hex,
            "rgb": self.rgb.to_dict(),
            "percentage": self.percentage,
            "bounds": self.bounds.to_dict(),
            "centroid": self.centroid.to_dict(),
        }


@dataclass
class LocatedFont:
    """Text styling read from one captured element."""

    font_family: str
    font_size: str
    font_weight: str
    color: str  # hex
    selector: str
    text_preview: str
    bounds: BoundingBox
    centroid: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            "font_family": self.font_family,
            "font_size": self.font_size,
            "font_weight": self.font_weight,
            "color": self.color,
            "selector": self.selector,
            "text_preview": self.text_preview,
            "bounds": self.bounds.to_dict(),
            "centroid": self.centroid.to_dict(),
        }


@dataclass
class ElementStyles:
    """Computed styles captured for one element.

    Any field may be missing; extractors apply the documented defaults
    (weight "400", color black, family "sans-serif").
    """

    color: str | None = None
    background_color: str | None = None
    font_family: str | None = None
    font_size: str | None = None
    font_weight: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ElementStyles":
        data = data or {}
        return cls(
            color=_first(data, "color"),
            background_color=_first(data, "background_color", "backgroundColor"),
            font_family=_first(data, "font_family", "fontFamily"),
            # Capture records sometimes report size and weight as numbers
            font_size=_text(_first(data, "font_size", "fontSize")),
            font_weight=_text(_first(data, "font_weight", "fontWeight")),
        )


@dataclass
class CapturedElement:
    """An element captured from an inspectable page."""

    selector: str
    bounds: BoundingBox
    styles: ElementStyles = field(default_factory=ElementStyles)
    text_content: str = ""

    @property
    def centroid(self) -> Point:
        return self.bounds.center

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapturedElement":
        return cls(
            selector=data.get("selector", ""),
            bounds=BoundingBox.from_dict(data.get("bounds") or {}),
            styles=ElementStyles.from_dict(data.get("styles")),
            text_content=_first(data, "text_content", "textContent") or "",
        )


@dataclass
class CapturedAsset:
    """A visual asset produced by the capture layer.

    Carries raw image bytes, captured element metadata, or both.
    ``design_nodes`` holds raw design-tool nodes for vector exports.
    """

    provenance: Provenance
    image_bytes: bytes | None = None
    elements: list[CapturedElement] | None = None
    design_nodes: list[dict[str, Any]] | None = None
    id: str = ""

    def __post_init__(self):
        self.provenance = Provenance.parse(self.provenance)

    @property
    def has_elements(self) -> bool:
        return bool(self.elements)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapturedAsset":
        raw_elements = _first(data, "elements", "dom_elements", "domElements")
        return cls(
            id=data.get("id", ""),
            provenance=Provenance.parse(_first(data, "provenance", "input_type", "inputType")),
            image_bytes=_first(data, "image_bytes", "imageBytes"),
            elements=(
                [CapturedElement.from_dict(e) for e in raw_elements]
                if raw_elements is not None
                else None
            ),
            design_nodes=_first(data, "design_nodes", "figma_nodes", "figmaNodes"),
        )


@dataclass
class ExtractionResult:
    """Colors and fonts extracted from one asset."""

    colors: list[LocatedColor] = field(default_factory=list)
    fonts: list[LocatedFont] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.colors and not self.fonts

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": [c.to_dict() for c in self.colors],
            "fonts": [f.to_dict() for f in self.fonts],
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def _text(value: Any) -> str | None:
    return str(value) if value is not None else None


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None
