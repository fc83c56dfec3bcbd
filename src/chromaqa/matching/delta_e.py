"""
Perceptual color difference using CIEDE2000.

Converts sRGB to CIELAB (D65) and computes the CIEDE2000 color difference,
the CIE's standard perceptual distance. Reference: Sharma, Wu and Dalal,
"The CIEDE2000 Color-Difference Formula: Implementation Notes,
Supplementary Test Data, and Mathematical Observations" (2005).

Interpretation of the returned distance:
    <= 1   not perceptible by human eyes
    <= 3   perceptible through close observation
    <= 10  perceptible at a glance
    > 10   colors are dissimilar
"""

import math

from ..model.color import LAB, RGB

IMPERCEPTIBLE = 1.0
CLOSE_INSPECTION = 3.0
AT_A_GLANCE = 10.0

# D65 reference white
_XN = 0.95047
_YN = 1.0
_ZN = 1.08883

_EPSILON = 0.008856
_KAPPA_SLOPE = 7.787
_POW25_7 = 25.0**7


def _linearize(channel: float) -> float:
    c = channel / 255.0
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def _gamma_encode(channel: float) -> float:
    if channel > 0.0031308:
        return 1.055 * channel ** (1 / 2.4) - 0.055
    return 12.92 * channel


def _f(t: float) -> float:
    return t ** (1 / 3) if t > _EPSILON else _KAPPA_SLOPE * t + 16 / 116


def _f_inv(t: float) -> float:
    t3 = t**3
    return t3 if t3 > _EPSILON else (t - 16 / 116) / _KAPPA_SLOPE


def rgb_to_lab(rgb: RGB) -> LAB:
    """Convert an sRGB color (0-255 per channel) to CIELAB."""
    r = _linearize(rgb.r)
    g = _linearize(rgb.g)
    b = _linearize(rgb.b)

    x = (r * 0.4124 + g * 0.3576 + b * 0.1805) / _XN
    y = (r * 0.2126 + g * 0.7152 + b * 0.0722) / _YN
    z = (r * 0.0193 + g * 0.1192 + b * 0.9505) / _ZN

    fx, fy, fz = _f(x), _f(y), _f(z)

    return LAB(L=116 * fy - 16, a=500 * (fx - fy), b=200 * (fy - fz))


def lab_to_rgb(lab: LAB) -> RGB:
    """Convert CIELAB back to sRGB.

    Out-of-gamut values are clipped to [0, 255] per channel.
    """
    fy = (lab.L + 16) / 116
    fx = lab.a / 500 + fy
    fz = fy - lab.b / 200

    x = _f_inv(fx) * _XN
    y = _f_inv(fy) * _YN
    z = _f_inv(fz) * _ZN

    r = x * 3.2406 + y * -1.5372 + z * -0.4986
    g = x * -0.9689 + y * 1.8758 + z * 0.0415
    b = x * 0.0557 + y * -0.2040 + z * 1.0570

    # RGB() clamps and rounds
    return RGB(
        _gamma_encode(max(0.0, r)) * 255,
        _gamma_encode(max(0.0, g)) * 255,
        _gamma_encode(max(0.0, b)) * 255,
    )


def delta_e_2000(lab1: LAB, lab2: LAB) -> float:
    """Calculate the CIEDE2000 difference between two LAB colors.

    Returns:
        Non-negative distance; 0.0 for identical colors.
    """
    d_l = lab2.L - lab1.L
    avg_l = (lab1.L + lab2.L) / 2

    c1 = math.hypot(lab1.a, lab1.b)
    c2 = math.hypot(lab2.a, lab2.b)
    avg_c = (c1 + c2) / 2

    avg_c7 = avg_c**7
    g = 0.5 * (1 - math.sqrt(avg_c7 / (avg_c7 + _POW25_7)))

    a1p = lab1.a * (1 + g)
    a2p = lab2.a * (1 + g)

    c1p = math.hypot(a1p, lab1.b)
    c2p = math.hypot(a2p, lab2.b)
    d_cp = c2p - c1p
    avg_cp = (c1p + c2p) / 2

    h1p = math.degrees(math.atan2(lab1.b, a1p)) % 360
    h2p = math.degrees(math.atan2(lab2.b, a2p)) % 360

    # Hue is undefined when either chroma is zero
    chroma_product = c1p * c2p
    if chroma_product == 0:
        d_hp = 0.0
    elif abs(h2p - h1p) <= 180:
        d_hp = h2p - h1p
    elif h2p - h1p > 180:
        d_hp = h2p - h1p - 360
    else:
        d_hp = h2p - h1p + 360

    d_hp_big = 2 * math.sqrt(chroma_product) * math.sin(math.radians(d_hp / 2))

    if chroma_product == 0:
        avg_hp = h1p + h2p
    elif abs(h1p - h2p) <= 180:
        avg_hp = (h1p + h2p) / 2
    elif h1p + h2p < 360:
        avg_hp = (h1p + h2p + 360) / 2
    else:
        avg_hp = (h1p + h2p - 360) / 2

    t = (
        1
        - 0.17 * math.cos(math.radians(avg_hp - 30))
        + 0.24 * math.cos(math.radians(2 * avg_hp))
        + 0.32 * math.cos(math.radians(3 * avg_hp + 6))
        - 0.20 * math.cos(math.radians(4 * avg_hp - 63))
    )

    avg_l_50 = (avg_l - 50) ** 2
    s_l = 1 + (0.015 * avg_l_50) / math.sqrt(20 + avg_l_50)
    s_c = 1 + 0.045 * avg_cp
    s_h = 1 + 0.015 * avg_cp * t

    d_theta = 30 * math.exp(-(((avg_hp - 275) / 25) ** 2))
    avg_cp7 = avg_cp**7
    r_c = 2 * math.sqrt(avg_cp7 / (avg_cp7 + _POW25_7))
    r_t = -r_c * math.sin(math.radians(2 * d_theta))

    l_term = d_l / s_l
    c_term = d_cp / s_c
    h_term = d_hp_big / s_h

    return math.sqrt(max(0.0, l_term**2 + c_term**2 + h_term**2 + r_t * c_term * h_term))


def hex_to_rgb(hex_string: str) -> RGB:
    """Parse a hex color; malformed input returns black."""
    return RGB.from_hex(hex_string)


def rgb_to_hex(rgb: RGB) -> str:
    """Format an RGB color as lowercase ``#rrggbb``."""
    return rgb.to_hex()


def delta_e_2000_hex(hex1: str, hex2: str) -> float:
    """CIEDE2000 distance between two hex colors."""
    return delta_e_2000(rgb_to_lab(hex_to_rgb(hex1)), rgb_to_lab(hex_to_rgb(hex2)))
