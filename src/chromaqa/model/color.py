"""Color models.

Represents colors in the sRGB and CIELAB color spaces.
"""

import math
import re
from dataclasses import dataclass

_HEX6 = re.compile(r"^([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_HEX3 = re.compile(r"^([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)


@dataclass(frozen=True)
class RGB:
    """RGB color representation.

    Each component ranges from 0 to 255. Out-of-range or fractional inputs
    are rounded and clamped on construction.
    """

    r: int = 0
    """Red component (0-255)."""

    g: int = 0
    """Green component (0-255)."""

    b: int = 0
    """Blue component (0-255)."""

    def __post_init__(self):
        """Clamp components into range."""
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, _clamp_channel(getattr(self, name)))

    @classmethod
    def from_hex(cls, hex_string: str) -> "RGB":
        """Create RGB from a hex string.

        Accepts 3- and 6-digit forms with or without a leading ``#``.
        Malformed input yields black; callers that need validation must
        check the string themselves.

        Args:
            hex_string: Hex color string (e.g., "#FF0000", "f00")

        Returns:
            RGB instance
        """
        clean = (hex_string or "").strip()
        if clean.startswith("#"):
            clean = clean[1:]

        match = _HEX6.match(clean)
        if match:
            return cls(*(int(part, 16) for part in match.groups()))

        match = _HEX3.match(clean)
        if match:
            return cls(*(int(part * 2, 16) for part in match.groups()))

        return cls(0, 0, 0)

    @classmethod
    def from_tuple(cls, values) -> "RGB":
        """Create RGB from any (r, g, b[, a]) sequence."""
        return cls(int(values[0]), int(values[1]), int(values[2]))

    def to_hex(self) -> str:
        """Convert to a lowercase ``#rrggbb`` string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_tuple(self) -> tuple[int, int, int]:
        """Convert to an (r, g, b) tuple."""
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}

    def distance_to(self, other: "RGB") -> float:
        """Euclidean distance in RGB space.

        Cheap and not perceptual; use CIEDE2000 to judge whether two colors
        look the same.
        """
        dr = self.r - other.r
        dg = self.g - other.g
        db = self.b - other.b
        return math.sqrt(dr * dr + dg * dg + db * db)

    def __str__(self) -> str:
        return f"RGB({self.r},{self.g},{self.b})"


@dataclass(frozen=True)
class LAB:
    """CIELAB color (D65 reference white).

    Only used as an intermediate for perceptual distance.
    """

    L: float
    a: float
    b: float

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.L, self.a, self.b)

    def to_dict(self) -> dict[str, float]:
        return {"L": self.L, "a": self.a, "b": self.b}


def _clamp_channel(value) -> int:
    # Round half up so 127.5 -> 128 like the usual 8-bit encoders
    return max(0, min(255, int(math.floor(float(value) + 0.5))))
