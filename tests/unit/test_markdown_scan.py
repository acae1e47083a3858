"""
Unit tests for markdown scanning helpers.

Tests folio.contexts.authoring.markdown_scan.
"""

import pytest

from folio.contexts.authoring.markdown_scan import (
    find_fenced_blocks,
    find_math_spans,
    mask_code,
    mask_math,
)

pytestmark = pytest.mark.unit


class TestFindFencedBlocks:
    """Tests for find_fenced_blocks function."""

    def test_closed_block(self):
        text = "Intro\n```python\nx = 1\n```\nafter\n"
        blocks = find_fenced_blocks(text)

        assert len(blocks) == 1
        block = blocks[0]
        assert block.closed
        assert block.line == 2
        assert block.fence == "```"
        assert text[block.start:block.end] == "```python\nx = 1\n```\n"

    def test_unclosed_block_runs_to_end(self):
        text = "Intro\n```\ncode\n"
        blocks = find_fenced_blocks(text)

        assert len(blocks) == 1
        assert not blocks[0].closed
        assert blocks[0].end == len(text)

    def test_info_string_does_not_close(self):
        blocks = find_fenced_blocks("```\na\n```python\n")
        assert not blocks[0].closed

    def test_other_fence_character_does_not_close(self):
        blocks = find_fenced_blocks("~~~\n```\n~~~\n")

        assert len(blocks) == 1
        assert blocks[0].closed
        assert blocks[0].fence == "~~~"

    def test_longer_closing_fence(self):
        blocks = find_fenced_blocks("````\n```\nstill code\n`````\n")

        assert len(blocks) == 1
        assert blocks[0].closed


class TestMaskCode:
    """Tests for mask_code function."""

    def test_fences_and_inline_code_blanked(self):
        text = "Use `$x$` here.\n```\n$$\n```\nDone $y$\n"
        masked = mask_code(text)

        assert len(masked) == len(text)
        assert masked.count("\n") == text.count("\n")
        assert "$x$" not in masked
        assert "$$" not in masked
        assert "$y$" in masked

    def test_double_backtick_span(self):
        masked = mask_code("Run ``a ` b`` now")
        assert "`" not in masked
        assert masked.endswith("now")


class TestFindMathSpans:
    """Tests for find_math_spans function."""

    def test_kinds_in_document_order(self):
        text = "Inline $a+b$, paren \\(c\\), bracket \\[d\\] and\n$$\nx^2\n$$\n"
        spans = find_math_spans(text)

        assert [span.kind for span in spans] == ["inline", "paren", "bracket", "display"]
        assert [span.body for span in spans] == ["a+b", "c", "d", "\nx^2\n"]
        assert [span.is_display for span in spans] == [False, False, True, True]

    def test_offsets_cover_delimiters(self):
        text = "Let $x_i$ be"
        (span,) = find_math_spans(text)
        assert text[span.start:span.end] == "$x_i$"

    def test_currency_is_not_math(self):
        assert find_math_spans("It costs $5 and $10 today.") == []

    def test_escaped_dollar(self):
        assert find_math_spans(r"Price \$3 and \$4") == []

    def test_space_after_opening_dollar(self):
        assert find_math_spans("a $ b $ c") == []

    def test_inline_math_does_not_cross_lines(self):
        assert find_math_spans("$a\nb$") == []

    def test_math_in_code_ignored(self):
        text = "`$x$` and\n```\n$$y$$\n```\n"
        assert find_math_spans(text) == []

    def test_body_taken_from_unmasked_text(self):
        text = "$a$"
        spans = find_math_spans(mask_code(text), code_masked=True)
        assert spans[0].body == "a"


def test_mask_math_removes_spans():
    """Masking math keeps surrounding text and offsets."""
    text = "See $[a](b)$ and [c](/d/)"
    masked = mask_math(text, find_math_spans(text))

    assert len(masked) == len(text)
    assert "[a](b)" not in masked
    assert masked.endswith("[c](/d/)")
