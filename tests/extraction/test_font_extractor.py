"""Tests for font extraction from captured element metadata."""

from chromaqa.extraction.font_extractor import (
    TEXT_PREVIEW_LENGTH,
    clean_font_family,
    extract_fonts,
    font_from_element,
)
from chromaqa.extraction.models import BoundingBox, CapturedElement, ElementStyles, Point


def element(text: str = "Submit", **styles) -> CapturedElement:
    return CapturedElement(
        selector="button.primary",
        bounds=BoundingBox(10, 20, 100, 40),
        styles=ElementStyles(**styles),
        text_content=text,
    )


class TestCleanFontFamily:
    """Tests for clean_font_family."""

    def test_first_family_of_stack(self) -> None:
        assert clean_font_family('"Inter", sans-serif') == "Inter"
        assert clean_font_family("'Helvetica Neue', Arial") == "Helvetica Neue"

    def test_missing_family_defaults(self) -> None:
        assert clean_font_family(None) == "sans-serif"
        assert clean_font_family("") == "sans-serif"
        assert clean_font_family(' "" , serif') == "sans-serif"


class TestFontFromElement:
    """Tests for font_from_element."""

    def test_reads_computed_styles(self) -> None:
        font = font_from_element(
            element(
                font_family="Inter, sans-serif",
                font_size="16px",
                font_weight="600",
                color="rgb(255, 255, 255)",
            )
        )

        assert font.font_family == "Inter"
        assert font.font_size == "16px"
        assert font.font_weight == "600"
        assert font.color == "#ffffff"
        assert font.selector == "button.primary"
        assert font.text_preview == "Submit"
        assert font.bounds == BoundingBox(10, 20, 100, 40)
        assert font.centroid == Point(60, 40)

    def test_defaults_for_missing_styles(self) -> None:
        font = font_from_element(element())

        assert font.font_family == "sans-serif"
        assert font.font_weight == "400"
        assert font.color == "#000000"
        assert font.font_size == ""

    def test_unparseable_color_defaults_to_black(self) -> None:
        assert font_from_element(element(color="transparent")).color == "#000000"

    def test_preview_is_truncated(self) -> None:
        font = font_from_element(element(text="x" * 80))

        assert len(font.text_preview) == TEXT_PREVIEW_LENGTH

    def test_custom_preview_length(self) -> None:
        assert font_from_element(element(text="Submit"), preview_length=3).text_preview == "Sub"


class TestExtractFonts:
    """Tests for extract_fonts."""

    def test_skips_elements_without_text(self) -> None:
        elements = [element(text=""), element(text="   \n"), element(text="Hello")]

        fonts = extract_fonts(elements)

        assert [f.text_preview for f in fonts] == ["Hello"]

    def test_keeps_duplicates_in_order(self) -> None:
        elements = [element(text="One"), element(text="Two"), element(text="One")]

        assert [f.text_preview for f in extract_fonts(elements)] == ["One", "Two", "One"]

    def test_no_elements(self) -> None:
        assert extract_fonts(None) == []
        assert extract_fonts([]) == []

    def test_design_nodes_produce_no_fonts(self) -> None:
        nodes = [{"type": "TEXT", "characters": "Hi", "style": {"fontFamily": "Inter"}}]

        assert extract_fonts(design_nodes=nodes) == []
