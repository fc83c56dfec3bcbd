"""Parsing of computed CSS color values reported by the capture layer."""

import re
from dataclasses import dataclass

from ..model.color import RGB

_RGB_FUNC = re.compile(
    r"rgba?\(\s*(\d+(?:\.\d+)?)[\s,]+(\d+(?:\.\d+)?)[\s,]+(\d+(?:\.\d+)?)"
    r"(?:\s*[,/]\s*(\d*\.?\d+)(%?))?\s*\)",
    re.IGNORECASE,
)
_HEX = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedColor:
    hex: str
    rgb: RGB


def parse_css_color(value: str | None) -> ParsedColor | None:
    """
    Parse a computed CSS color into hex and RGB.

    Accepts ``rgb()``/``rgba()`` in comma or space syntax and ``#rgb`` /
    ``#rrggbb``. Returns None for missing, ``transparent``, fully transparent
    or unrecognized values.
    """
    if not value:
        return None

    value = value.strip()
    if not value or value.lower() == "transparent":
        return None

    match = _RGB_FUNC.search(value)
    if match:
        red, green, blue, alpha, alpha_pct = match.groups()
        if alpha is not None:
            opacity = float(alpha) / 100 if alpha_pct else float(alpha)
            if opacity == 0:
                return None
        rgb = RGB(float(red), float(green), float(blue))
        return ParsedColor(hex=rgb.to_hex(), rgb=rgb)

    if _HEX.match(value):
        rgb = RGB.from_hex(value)
        return ParsedColor(hex=rgb.to_hex(), rgb=rgb)

    return None
