"""
Markdown to HTML conversion with LaTeX math preserved.

Python-Markdown would treat "_" and "*" inside formulas as emphasis and eat
backslashes, so math spans are swapped for opaque placeholders before
conversion and put back (HTML-escaped, original delimiters kept) afterwards.
MathJax typesets the restored delimiters in the browser.
"""

import html
import re
from typing import List, Tuple

import markdown
from markdown.extensions.toc import slugify as toc_slugify

from folio.contexts.authoring.markdown_scan import MathSpan, find_math_spans

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc"]

# No markdown syntax characters; the X terminator keeps index 1 from matching inside index 12
PLACEHOLDER = "@@FOLIOMATH{index}X@@"
PLACEHOLDER_PATTERN = re.compile(r"@@FOLIOMATH\d+X@@")


def protect_math(text: str) -> Tuple[str, List[MathSpan]]:
    """
    Replace math spans outside code with placeholders.

    Args:
        text: Markdown body

    Returns:
        (protected_text, spans); the i-th placeholder stands for spans[i]
    """
    spans = find_math_spans(text)
    parts = []
    pos = 0
    for index, span in enumerate(spans):
        parts.append(text[pos:span.start])
        parts.append(PLACEHOLDER.format(index=index))
        pos = span.end
    parts.append(text[pos:])
    return "".join(parts), spans


def restore_math(rendered: str, original: str, spans: List[MathSpan]) -> str:
    """Put math back into rendered HTML, escaped, with its original delimiters."""
    for index, span in enumerate(spans):
        math_source = html.escape(original[span.start:span.end], quote=False)
        rendered = rendered.replace(PLACEHOLDER.format(index=index), math_source)
    return rendered


def heading_slug(value: str, separator: str) -> str:
    """Heading id for the toc extension, ignoring math placeholders."""
    return toc_slugify(PLACEHOLDER_PATTERN.sub(" ", value), separator) or "section"


class MarkdownRenderer:
    """
    Reusable markdown converter.

    One Markdown instance is kept and reset between documents; the toc
    extension's table of contents for the last rendered document is exposed
    as last_toc, with its math restored.
    """

    def __init__(self, extensions: List[str] = None):
        self.extensions = extensions or MARKDOWN_EXTENSIONS
        self._md = markdown.Markdown(
            extensions=self.extensions,
            extension_configs={"toc": {"slugify": heading_slug}},
            output_format="html",
        )
        self.last_toc = ""

    def render(self, text: str) -> str:
        """
        Render a markdown body to HTML.

        Args:
            text: Markdown (may contain $..$, $$..$$, \\(..\\) and \\[..\\] math)

        Returns:
            HTML fragment
        """
        protected, spans = protect_math(text)
        self._md.reset()
        rendered = self._md.convert(protected)
        self.last_toc = restore_math(getattr(self._md, "toc", ""), text, spans)
        return restore_math(rendered, text, spans)
