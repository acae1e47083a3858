"""
Markdown scanning helpers.

Locates code regions and LaTeX math spans in a markdown body without
rendering it. Rendering uses these to keep math away from the markdown
converter; verification uses them to check math and to skip code when
collecting links.

All positions are character offsets into the text that was scanned.
Masking replaces characters with spaces but keeps newlines, so offsets and
line numbers computed on masked text are valid for the original.
"""

from dataclasses import dataclass
from typing import List

from folio.contexts.authoring.content_patterns import ContentRegex
from folio.utils.text_processing import blank_out

# Alternatives of ContentRegex.MATH_SPAN, in match priority order
MATH_KINDS = ("display", "bracket", "paren", "inline")


@dataclass
class FencedBlock:
    """A fenced code block; closed is False when the fence runs to end of text."""

    start: int
    end: int
    line: int
    fence: str
    closed: bool = True


@dataclass
class MathSpan:
    """
    A LaTeX math span.

    Attributes:
        start: Offset of the opening delimiter
        end: Offset just after the closing delimiter
        kind: "display", "bracket", "paren" or "inline"
        body: Text between the delimiters
    """

    start: int
    end: int
    kind: str
    body: str

    @property
    def is_display(self) -> bool:
        return self.kind in ("display", "bracket")


def find_fenced_blocks(text: str) -> List[FencedBlock]:
    """
    Find fenced code blocks (``` or ~~~), including an unclosed trailing one.

    A closing fence uses the same character as the opening fence, is at least
    as long, and carries no info string.
    """
    blocks: List[FencedBlock] = []
    current = None
    pos = 0

    for line_number, line in enumerate(text.splitlines(keepends=True), 1):
        match = ContentRegex.FENCE.match(line.rstrip("\r\n"))
        if current is None:
            if match:
                current = FencedBlock(
                    start=pos, end=-1, line=line_number, fence=match.group("fence")
                )
        elif (
            match
            and match.group("fence")[0] == current.fence[0]
            and len(match.group("fence")) >= len(current.fence)
            and not match.group("info").strip()
        ):
            current.end = pos + len(line)
            blocks.append(current)
            current = None
        pos += len(line)

    if current is not None:
        current.end = len(text)
        current.closed = False
        blocks.append(current)

    return blocks


def mask_code(text: str) -> str:
    """Blank out fenced code blocks and inline code spans."""
    for block in find_fenced_blocks(text):
        text = blank_out(text, block.start, block.end)

    for match in list(ContentRegex.INLINE_CODE.finditer(text)):
        text = blank_out(text, match.start(), match.end())

    return text


def find_math_spans(text: str, code_masked: bool = False) -> List[MathSpan]:
    """
    Find math spans outside code.

    Args:
        text: Markdown body
        code_masked: Set when text has already been through mask_code()

    Returns:
        Spans in document order
    """
    scan_text = text if code_masked else mask_code(text)
    spans = []

    for match in ContentRegex.MATH_SPAN.finditer(scan_text):
        kind = next(name for name in MATH_KINDS if match.group(name) is not None)
        spans.append(
            MathSpan(
                start=match.start(),
                end=match.end(),
                kind=kind,
                body=text[match.start(f"{kind}_body"):match.end(f"{kind}_body")],
            )
        )

    return spans


def mask_math(text: str, spans: List[MathSpan]) -> str:
    """Blank out the given math spans."""
    for span in spans:
        text = blank_out(text, span.start, span.end)
    return text
