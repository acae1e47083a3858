"""
Unit tests for front-matter splitting, parsing and coercion.

Tests folio.contexts.authoring.front_matter.
"""

from datetime import date, datetime
from pathlib import Path

import pytest

from folio.contexts.authoring.document import PAGE, POST
from folio.contexts.authoring.exceptions import FrontMatterError
from folio.contexts.authoring.front_matter import (
    coerce_front_matter,
    parse_date,
    parse_front_matter,
    split_front_matter,
)

pytestmark = pytest.mark.unit

SOURCE = Path("content/posts/2019-06-02-sphere.md")


class TestSplitFrontMatter:
    """Tests for split_front_matter function."""

    def test_basic_split(self):
        text = "---\ntitle: Sphere fitting\n---\nBody line\n"
        yaml_text, body, offset = split_front_matter(text)

        assert yaml_text == "title: Sphere fitting\n"
        assert body == "Body line\n"
        assert offset == 3

    def test_dots_close_block(self):
        yaml_text, body, offset = split_front_matter("---\ntitle: A\n...\nBody\n")

        assert yaml_text == "title: A\n"
        assert body == "Body\n"

    def test_byte_order_mark_ignored(self):
        yaml_text, _, _ = split_front_matter("\ufeff---\ntitle: A\n---\n")
        assert yaml_text == "title: A\n"

    def test_horizontal_rule_in_body_kept(self):
        """Only the first closing delimiter ends the block."""
        _, body, _ = split_front_matter("---\ntitle: A\n---\nabove\n\n---\n\nbelow\n")
        assert body == "above\n\n---\n\nbelow\n"

    def test_missing_opening_delimiter(self):
        with pytest.raises(FrontMatterError) as exc_info:
            split_front_matter("title: A\n", source_path=SOURCE)

        assert exc_info.value.line == 1
        assert str(SOURCE) in str(exc_info.value)

    def test_unclosed_block(self):
        with pytest.raises(FrontMatterError, match="Unclosed"):
            split_front_matter("---\ntitle: A\nBody without a closing line\n")


class TestParseFrontMatter:
    """Tests for parse_front_matter function."""

    def test_mapping(self):
        data = parse_front_matter("title: Sphere fitting\nkeywords: [a, b]\ndraft: true\n")

        assert data["title"] == "Sphere fitting"
        assert data["keywords"] == ["a", "b"]
        assert data["draft"] is True

    def test_empty_block(self):
        assert parse_front_matter("") == {}
        assert parse_front_matter("\n  \n") == {}

    def test_latex_kept_verbatim(self):
        data = parse_front_matter("title: Estimating $\\hat{\\beta}$ by maximum likelihood\n")
        assert data["title"] == "Estimating $\\hat{\\beta}$ by maximum likelihood"

    def test_interpolation_syntax_not_resolved(self):
        data = parse_front_matter("title: Cost ${dollars}\n")
        assert data["title"] == "Cost ${dollars}"

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError) as exc_info:
            parse_front_matter("title: [unclosed\n", source_path=SOURCE)

        assert exc_info.value.original_error is not None
        assert "Invalid YAML" in str(exc_info.value)

    def test_duplicate_keys_rejected(self):
        with pytest.raises(FrontMatterError):
            parse_front_matter("title: A\ntitle: B\n")

    def test_list_rejected(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("- title\n- date\n")


class TestParseDate:
    """Tests for parse_date function."""

    @pytest.mark.parametrize(
        "value",
        [
            "2019-06-02",
            "2019-06-02 10:30",
            "2019-06-02T10:30:00",
            "2019-06-02T10:30:00Z",
            "2019-06-02 10:30:00 +01:00",
            date(2019, 6, 2),
            datetime(2019, 6, 2, 10, 30),
        ],
    )
    def test_accepted_forms(self, value):
        assert parse_date(value) == date(2019, 6, 2)

    def test_unrecognized_date(self):
        with pytest.raises(FrontMatterError) as exc_info:
            parse_date("June 2nd", source_path=SOURCE)

        assert exc_info.value.field == "date"

    def test_impossible_date(self):
        with pytest.raises(FrontMatterError):
            parse_date("2019-02-30")


class TestCoerceFrontMatter:
    """Tests for coerce_front_matter function."""

    def test_full_post(self):
        fm = coerce_front_matter(
            {
                "title": "  Least-squares sphere fitting ",
                "date": "2019-06-02",
                "description": "Linear fit of a sphere.",
                "keywords": "least squares, geometry,  ",
                "series": "fitting",
            },
            POST,
        )

        assert fm.title == "Least-squares sphere fitting"
        assert fm.date == date(2019, 6, 2)
        assert fm.keywords == ["least squares", "geometry"]
        assert fm.draft is False
        assert fm.extra == {"series": "fitting"}

    def test_keyword_list_values_become_strings(self):
        fm = coerce_front_matter({"title": "A", "keywords": ["ols", 3]}, PAGE)
        assert fm.keywords == ["ols", "3"]

    def test_nested_keywords_rejected(self):
        with pytest.raises(FrontMatterError) as exc_info:
            coerce_front_matter({"title": "A", "keywords": {"a": 1}}, PAGE)
        assert exc_info.value.field == "keywords"

    def test_missing_title(self):
        with pytest.raises(FrontMatterError) as exc_info:
            coerce_front_matter({"date": "2019-06-02"}, POST, source_path=SOURCE)

        assert exc_info.value.field == "title"
        assert "Field: title" in str(exc_info.value)

    def test_blank_title(self):
        with pytest.raises(FrontMatterError):
            coerce_front_matter({"title": "   "}, PAGE)

    def test_post_requires_date(self):
        with pytest.raises(FrontMatterError) as exc_info:
            coerce_front_matter({"title": "A"}, POST)
        assert exc_info.value.field == "date"

    def test_post_date_from_fallback(self):
        fm = coerce_front_matter({"title": "A"}, POST, fallback_date=date(2019, 3, 17))
        assert fm.date == date(2019, 3, 17)

    def test_front_matter_date_beats_fallback(self):
        fm = coerce_front_matter(
            {"title": "A", "date": "2019-06-02"}, POST, fallback_date=date(2019, 3, 17)
        )
        assert fm.date == date(2019, 6, 2)

    def test_page_without_date(self):
        fm = coerce_front_matter({"title": "CV"}, PAGE)
        assert fm.date is None

    def test_relative_permalink_rejected(self):
        with pytest.raises(FrontMatterError) as exc_info:
            coerce_front_matter({"title": "CV", "permalink": "cv/"}, PAGE)
        assert exc_info.value.field == "permalink"

    def test_non_boolean_draft_rejected(self):
        with pytest.raises(FrontMatterError) as exc_info:
            coerce_front_matter({"title": "A", "draft": "maybe"}, PAGE)
        assert exc_info.value.field == "draft"

    def test_list_title_rejected(self):
        with pytest.raises(FrontMatterError):
            coerce_front_matter({"title": ["a", "b"]}, PAGE)
