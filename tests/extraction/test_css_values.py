"""Tests for computed CSS color parsing."""

import pytest

from chromaqa.extraction.css_values import parse_css_color
from chromaqa.model.color import RGB


class TestParseCssColor:
    """Tests for parse_css_color."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("rgb(59, 130, 246)", "#3b82f6"),
            ("rgba(255, 255, 255, 0.5)", "#ffffff"),
            ("rgb(59 130 246)", "#3b82f6"),
            ("rgb(59 130 246 / 50%)", "#3b82f6"),
            ("RGBA(0,0,0,1)", "#000000"),
            ("  rgb(1, 2, 3)  ", "#010203"),
            ("#3B82F6", "#3b82f6"),
            ("#fff", "#ffffff"),
        ],
    )
    def test_parses_supported_forms(self, value: str, expected: str) -> None:
        parsed = parse_css_color(value)

        assert parsed is not None
        assert parsed.hex == expected

    def test_returns_rgb(self) -> None:
        assert parse_css_color("rgb(59, 130, 246)").rgb == RGB(59, 130, 246)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "   ",
            "transparent",
            "TRANSPARENT",
            "rgba(0, 0, 0, 0)",
            "rgb(0 0 0 / 0%)",
            "currentcolor",
            "hsl(0, 100%, 50%)",
            "#12",
        ],
    )
    def test_rejects_missing_transparent_and_unknown(self, value) -> None:
        assert parse_css_color(value) is None
