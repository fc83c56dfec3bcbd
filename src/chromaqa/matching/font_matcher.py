"""
Match extracted fonts to typography tokens.

A token scores 3 points for the same family (compared case-insensitively
after dropping fallbacks), 2 for a size within 2px and 1 for the same weight.
The best-scoring token is reported together with the remaining mismatches:
no issue passes, one issue warns, more fail.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..extraction.models import DEFAULT_FONT_FAMILY, DEFAULT_FONT_WEIGHT, LocatedFont
from .color_matcher import MatchStats, MatchStatus, calculate_match_stats

FONT_SIZE_TOLERANCE = 2.0

_LEADING_NUMBER = re.compile(r"^\s*([\d.]+)")


@dataclass
class TypographyToken:
    role: str
    font_family: str
    font_size: str
    font_weight: str = DEFAULT_FONT_WEIGHT

    @property
    def css_variable(self) -> str:
        return role_to_css_variable(self.role)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypographyToken":
        value = data.get("value") if isinstance(data.get("value"), dict) else data
        return cls(
            role=data.get("role") or data.get("name") or data.get("path") or "unknown",
            font_family=value.get("font_family") or value.get("fontFamily") or DEFAULT_FONT_FAMILY,
            font_size=value.get("font_size") or value.get("fontSize") or "16px",
            font_weight=str(
                value.get("font_weight") or value.get("fontWeight") or DEFAULT_FONT_WEIGHT
            ),
        )


@dataclass
class FontMatch:
    source: LocatedFont
    token: TypographyToken | None
    status: MatchStatus
    issues: list[str] = field(default_factory=list)


def normalize_font_family(family: str | None) -> str:
    if not family:
        return DEFAULT_FONT_FAMILY
    first = family.replace('"', "").replace("'", "").split(",")[0].strip().lower()
    return first or DEFAULT_FONT_FAMILY


def parse_font_size(font_size: str | None) -> float:
    """Leading number of a CSS size (``"16px"`` -> 16.0); 0 when absent."""
    match = _LEADING_NUMBER.match(font_size or "")
    if not match:
        return 0.0
    try:
        return float(match.group(1))
    except ValueError:
        return 0.0


def role_to_css_variable(role: str) -> str:
    """``"Heading LG"`` -> ``"var(--font-heading-lg)"``."""
    normalized = re.sub(r"\s+", "-", role.lower())
    return f"var(--font-{normalized})"


def _size_matches(font: LocatedFont, token: TypographyToken) -> bool:
    difference = parse_font_size(font.font_size) - parse_font_size(token.font_size)
    return abs(difference) <= FONT_SIZE_TOLERANCE


def _score(font: LocatedFont, token: TypographyToken) -> int:
    score = 0
    if normalize_font_family(font.font_family) == normalize_font_family(token.font_family):
        score += 3
    if _size_matches(font, token):
        score += 2
    if font.font_weight == token.font_weight:
        score += 1
    return score


def _issues(font: LocatedFont, token: TypographyToken | None) -> list[str]:
    if token is None:
        return ["No matching typography token found"]

    issues = []
    if normalize_font_family(font.font_family) != normalize_font_family(token.font_family):
        issues.append(f"Font family mismatch: {font.font_family} vs {token.font_family}")
    if not _size_matches(font, token):
        issues.append(f"Font size mismatch: {font.font_size} vs {token.font_size}")
    if font.font_weight != token.font_weight:
        issues.append(f"Font weight mismatch: {font.font_weight} vs {token.font_weight}")
    return issues


def _status(issues: list[str]) -> MatchStatus:
    if not issues:
        return MatchStatus.PASS
    if len(issues) == 1:
        return MatchStatus.WARN
    return MatchStatus.FAIL


def match_fonts(fonts: list[LocatedFont], tokens: list[TypographyToken]) -> list[FontMatch]:
    """Pick the best-scoring token for each font; ties keep the earlier token."""
    matches = []
    for font in fonts:
        best: TypographyToken | None = None
        best_score = 0
        for token in tokens:
            score = _score(font, token)
            if score > best_score:
                best_score = score
                best = token

        issues = _issues(font, best)
        matches.append(FontMatch(source=font, token=best, status=_status(issues), issues=issues))
    return matches


def calculate_font_match_stats(matches: list[FontMatch]) -> MatchStats:
    return calculate_match_stats([m.status for m in matches])
