"""
Match extracted colors to design-system color tokens.

Uses CIEDE2000 to find the perceptually closest token for each color.

Status thresholds:
- pass (<= 3): difference only visible on close inspection
- warn (<= 10): close but noticeably different
- fail (> 10): significantly different
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..extraction.models import LocatedColor
from ..model.color import LAB, RGB
from .delta_e import AT_A_GLANCE, CLOSE_INSPECTION, delta_e_2000, hex_to_rgb, rgb_to_lab

PASS_THRESHOLD = CLOSE_INSPECTION
WARN_THRESHOLD = AT_A_GLANCE


class MatchStatus(Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass
class ColorToken:
    """A color token from the design system."""

    path: str
    hex: str

    @property
    def css_variable(self) -> str:
        return path_to_css_variable(self.path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorToken":
        """Build from a token record whose value is a hex string or ``{"hex": ...}``."""
        value = data.get("value")
        if isinstance(value, str):
            hex_value = value
        elif isinstance(value, dict) and value.get("hex"):
            hex_value = value["hex"]
        else:
            hex_value = data.get("hex") or "#000000"
        return cls(path=data.get("path", ""), hex=hex_value)


@dataclass
class TokenInfo:
    path: str
    hex: str
    css_variable: str

    @classmethod
    def from_token(cls, token: ColorToken) -> "TokenInfo":
        return cls(path=token.path, hex=token.hex, css_variable=token.css_variable)


@dataclass
class ColorMatch:
    """Best token for one extracted color."""

    source: LocatedColor
    token: TokenInfo | None
    delta_e: float
    status: MatchStatus


@dataclass
class MatchStats:
    total: int = 0
    passed: int = 0
    warned: int = 0
    failed: int = 0
    pass_rate: float = 100.0
    by_status: dict[str, int] = field(default_factory=dict)


def get_status(delta_e: float) -> MatchStatus:
    """Classify a CIEDE2000 distance."""
    if delta_e <= PASS_THRESHOLD:
        return MatchStatus.PASS
    if delta_e <= WARN_THRESHOLD:
        return MatchStatus.WARN
    return MatchStatus.FAIL


def path_to_css_variable(path: str) -> str:
    """``"Color/Primary/500"`` -> ``"var(--color-primary-500)"``."""
    normalized = re.sub(r"\s+", "-", path.replace("/", "-")).lower()
    return f"var(--{normalized})"


def _token_labs(tokens: list[ColorToken]) -> list[tuple[ColorToken, LAB]]:
    return [(token, rgb_to_lab(hex_to_rgb(token.hex))) for token in tokens]


def match_colors(colors: list[LocatedColor], tokens: list[ColorToken]) -> list[ColorMatch]:
    """
    Find the closest token for each color.

    With no tokens every color fails with an infinite distance.
    """
    token_labs = _token_labs(tokens)
    matches = []

    for color in colors:
        source_lab = rgb_to_lab(color.rgb)
        best_token: ColorToken | None = None
        best_delta = math.inf

        for token, token_lab in token_labs:
            delta = delta_e_2000(source_lab, token_lab)
            if delta < best_delta:
                best_delta = delta
                best_token = token

        matches.append(
            ColorMatch(
                source=color,
                token=TokenInfo.from_token(best_token) if best_token else None,
                delta_e=best_delta,
                status=get_status(best_delta),
            )
        )

    return matches


def find_matching_tokens(
    rgb: RGB, tokens: list[ColorToken], max_delta_e: float = WARN_THRESHOLD
) -> list[tuple[TokenInfo, float]]:
    """All tokens within ``max_delta_e`` of ``rgb``, closest first."""
    source_lab = rgb_to_lab(rgb)
    found = []
    for token, token_lab in _token_labs(tokens):
        delta = delta_e_2000(source_lab, token_lab)
        if delta <= max_delta_e:
            found.append((TokenInfo.from_token(token), delta))
    found.sort(key=lambda item: item[1])
    return found


def calculate_match_stats(statuses: list[MatchStatus]) -> MatchStats:
    """Count statuses and compute the pass rate (100 when there is nothing to match)."""
    total = len(statuses)
    passed = sum(1 for s in statuses if s == MatchStatus.PASS)
    warned = sum(1 for s in statuses if s == MatchStatus.WARN)
    failed = sum(1 for s in statuses if s == MatchStatus.FAIL)
    return MatchStats(
        total=total,
        passed=passed,
        warned=warned,
        failed=failed,
        pass_rate=passed / total * 100 if total else 100.0,
        by_status={"pass": passed, "warn": warned, "fail": failed},
    )
