"""
Perceptual color matching.

CIEDE2000 distance plus token matchers that compare extracted colors and
fonts against a design system.
"""

from .delta_e import (
    AT_A_GLANCE,
    CLOSE_INSPECTION,
    IMPERCEPTIBLE,
    delta_e_2000,
    delta_e_2000_hex,
    hex_to_rgb,
    lab_to_rgb,
    rgb_to_hex,
    rgb_to_lab,
)
from .color_matcher import (
    ColorMatch,
    ColorToken,
    MatchStats,
    MatchStatus,
    TokenInfo,
    calculate_match_stats,
    find_matching_tokens,
    get_status,
    match_colors,
    path_to_css_variable,
)
from .font_matcher import (
    FontMatch,
    TypographyToken,
    calculate_font_match_stats,
    match_fonts,
    normalize_font_family,
)

__all__ = [
    # CIEDE2000
    "rgb_to_lab",
    "lab_to_rgb",
    "delta_e_2000",
    "delta_e_2000_hex",
    "hex_to_rgb",
    "rgb_to_hex",
    "IMPERCEPTIBLE",
    "CLOSE_INSPECTION",
    "AT_A_GLANCE",
    # Token matching
    "ColorToken",
    "TokenInfo",
    "ColorMatch",
    "MatchStatus",
    "MatchStats",
    "match_colors",
    "find_matching_tokens",
    "calculate_match_stats",
    "get_status",
    "path_to_css_variable",
    "TypographyToken",
    "FontMatch",
    "match_fonts",
    "calculate_font_match_stats",
    "normalize_font_family",
]
