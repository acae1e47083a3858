"""
Text processing utilities shared by the authoring and verification contexts.
"""

import re
import unicodedata
from typing import List


def find_unbalanced_delimiter(
    text: str,
    open_char: str = '{',
    close_char: str = '}',
    escape_char: str = '\\'
) -> int:
    """
    Find the first delimiter that breaks balance.

    Returns:
        Position of the first unmatched closing delimiter, or of the outermost
        unclosed opening delimiter, or -1 if the text is balanced.

    Example:
        >>> find_unbalanced_delimiter(r"\\frac{a}{b")
        8
        >>> find_unbalanced_delimiter(r"\\{ a \\}")
        -1
    """
    stack: List[int] = []
    pos = 0

    while pos < len(text):
        char = text[pos]
        if char == escape_char:
            pos += 2
            continue
        if char == open_char:
            stack.append(pos)
        elif char == close_char:
            if not stack:
                return pos
            stack.pop()
        pos += 1

    return stack[0] if stack else -1


def line_number_at(text: str, pos: int) -> int:
    """Return 1-based line number of character position pos in text."""
    return text.count("\n", 0, pos) + 1


def blank_out(text: str, start: int, end: int) -> str:
    """
    Replace text[start:end] with spaces, keeping newlines.

    Keeps positions and line numbers stable for later scanning.
    """
    segment = re.sub(r"[^\n]", " ", text[start:end])
    return text[:start] + segment + text[end:]


def slugify(text: str) -> str:
    """
    Convert text to a URL slug.

    ASCII-folds accented characters, lowercases, and collapses every run of
    non-alphanumeric characters into a single hyphen.

    Example:
        >>> slugify("Least-Squares Sphere Fitting, Revisited!")
        'least-squares-sphere-fitting-revisited'
        >>> slugify("Régression polynomiale")
        'regression-polynomiale'
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")


def truncate(text: str, limit: int = 200) -> str:
    """Truncate text to limit characters, appending an ellipsis when cut."""
    return text[:limit] + "..." if len(text) > limit else text
