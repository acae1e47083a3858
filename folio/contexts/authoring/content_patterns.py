"""
Content Pattern Constants

Centralized patterns for content files: front-matter delimiters, file names,
markdown references and LaTeX math. Organized into frozen dataclasses by
category; compiled regexes live next to the strings they are built from.
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FrontMatterPatterns:
    """
    Front-matter block delimiters.

    The block opens with OPEN on the first line and closes with any of CLOSE.
    """
    OPEN: str = '---'
    CLOSE: Tuple[str, ...] = ('---', '...')
    BOM: str = '\ufeff'


@dataclass(frozen=True)
class FileNamePatterns:
    """
    Content file naming conventions.

    Posts are named YYYY-MM-DD-slug.md; the date prefix is optional.
    """
    MARKDOWN_GLOB: str = '*.md'
    DATED_STEM: str = r'^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$'


@dataclass(frozen=True)
class DatePatterns:
    """Accepted front-matter date formats (after any timezone suffix is removed)."""
    FORMATS: Tuple[str, ...] = (
        '%Y-%m-%d',
        '%Y-%m-%d %H:%M',
        '%Y-%m-%d %H:%M:%S',
        '%Y-%m-%dT%H:%M',
        '%Y-%m-%dT%H:%M:%S',
    )
    TIMEZONE_SUFFIX: str = r'\s*(?:Z|[+-]\d{2}:?\d{2})$'


@dataclass(frozen=True)
class MarkdownPatterns:
    """
    Markdown structures relevant to rendering and link checking.

    FENCE matches an opening/closing code fence line (up to 3 spaces indent).
    """
    FENCE: str = r'^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^\n]*)$'
    INLINE_CODE: str = r'(?P<ticks>`+)(?!`).+?(?<!`)(?P=ticks)(?!`)'
    INLINE_LINK: str = (
        r'(?P<bang>!?)\[(?P<text>[^\]\n]*)\]'
        r'\(\s*(?:<(?P<angled>[^>\n]*)>|(?P<target>[^)\s]*))(?:\s+(?:"[^"\n]*"|\'[^\'\n]*\'))?\s*\)'
    )
    REFERENCE_DEFINITION: str = r'^ {0,3}\[(?!\^)(?P<label>[^\]\n]+)\]:[ \t]*<?(?P<target>[^\s>]+)>?'
    HTML_ANCHOR: str = r'<a\s[^>]*?\bhref\s*=\s*(?P<quote>["\'])(?P<target>.*?)(?P=quote)'
    HTML_IMAGE: str = r'<img\s[^>]*?\bsrc\s*=\s*(?P<quote>["\'])(?P<target>.*?)(?P=quote)'
    URL_SCHEME: str = r'^[a-zA-Z][a-zA-Z0-9+.\-]*:'


@dataclass(frozen=True)
class MathPatterns:
    """
    LaTeX math delimiters and structure markers.

    Display forms ($$..$$, \\[..\\]) may span lines; inline $..$ may not.
    An inline $ is not preceded by a backslash or another $, does not open
    onto whitespace, does not close after whitespace or a backslash, and is
    not followed by a digit (so "$5 and $10" is not math).
    """
    SPAN: str = (
        r'(?P<display>\$\$(?P<display_body>.+?)\$\$)'
        r'|(?P<bracket>\\\[(?P<bracket_body>.+?)\\\])'
        r'|(?P<paren>\\\((?P<paren_body>.+?)\\\))'
        r'|(?P<inline>(?<![\\$])\$(?![\s$])(?P<inline_body>[^$\n]*?[^\s\\$])\$(?!\d))'
    )
    DISPLAY_DELIMITER: str = '$$'
    ENVIRONMENT: str = r'\\(?P<kind>begin|end)\{(?P<name>[^}]+)\}'
    LEFT: str = r'\\left(?![a-zA-Z])'
    RIGHT: str = r'\\right(?![a-zA-Z])'


class ContentRegex:
    """Compiled versions of the patterns above."""

    DATED_STEM = re.compile(FileNamePatterns.DATED_STEM)
    TIMEZONE_SUFFIX = re.compile(DatePatterns.TIMEZONE_SUFFIX)
    FENCE = re.compile(MarkdownPatterns.FENCE)
    INLINE_CODE = re.compile(MarkdownPatterns.INLINE_CODE)
    INLINE_LINK = re.compile(MarkdownPatterns.INLINE_LINK)
    REFERENCE_DEFINITION = re.compile(MarkdownPatterns.REFERENCE_DEFINITION, re.MULTILINE)
    HTML_ANCHOR = re.compile(MarkdownPatterns.HTML_ANCHOR, re.IGNORECASE | re.DOTALL)
    HTML_IMAGE = re.compile(MarkdownPatterns.HTML_IMAGE, re.IGNORECASE | re.DOTALL)
    URL_SCHEME = re.compile(MarkdownPatterns.URL_SCHEME)
    MATH_SPAN = re.compile(MathPatterns.SPAN, re.DOTALL)
    ENVIRONMENT = re.compile(MathPatterns.ENVIRONMENT)
    LEFT = re.compile(MathPatterns.LEFT)
    RIGHT = re.compile(MathPatterns.RIGHT)
