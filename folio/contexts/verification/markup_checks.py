"""
Markdown and LaTeX well-formedness checks.

Markdown itself never fails to parse, so the checks target the mistakes that
silently wreck a rendered post: a code fence left open (everything after it
becomes code) and broken math (MathJax shows raw LaTeX or an error box).
"""

from typing import List

from folio.contexts.authoring.content_patterns import ContentRegex, MathPatterns
from folio.contexts.authoring.document import Document
from folio.contexts.authoring.markdown_scan import (
    MathSpan,
    find_fenced_blocks,
    find_math_spans,
    mask_code,
    mask_math,
)
from folio.contexts.verification.issues import ERROR, Issue
from folio.utils.text_processing import find_unbalanced_delimiter, line_number_at, truncate


def check_code_fences(doc: Document) -> List[Issue]:
    """Report a fenced code block that is never closed."""
    return [
        Issue(
            severity=ERROR,
            code="markup.unclosed_fence",
            message=f"Code fence '{block.fence}' is never closed",
            source=doc.source_path,
            line=doc.file_line(block.line),
        )
        for block in find_fenced_blocks(doc.body)
        if not block.closed
    ]


def check_math_span(doc: Document, span: MathSpan) -> List[Issue]:
    """
    Check one math span for balanced braces, environments and \\left/\\right pairs.

    Args:
        doc: Document the span belongs to
        span: Math span found by find_math_spans()

    Returns:
        Issues found (empty if the span is well-formed)
    """
    issues = []
    line = doc.file_line(line_number_at(doc.body, span.start))
    snippet = truncate(span.body.strip(), 60)

    def issue(code: str, message: str) -> Issue:
        return Issue(
            severity=ERROR, code=code, message=f"{message} in '{snippet}'",
            source=doc.source_path, line=line,
        )

    bad_brace = find_unbalanced_delimiter(span.body)
    if bad_brace != -1:
        kind = "Unclosed '{'" if span.body[bad_brace] == "{" else "Unmatched '}'"
        issues.append(issue("math.unbalanced_braces", kind))

    open_environments: List[str] = []
    for match in ContentRegex.ENVIRONMENT.finditer(span.body):
        name = match.group("name")
        if match.group("kind") == "begin":
            open_environments.append(name)
        elif not open_environments or open_environments[-1] != name:
            issues.append(
                issue("math.mismatched_environment", f"\\end{{{name}}} without matching \\begin")
            )
            break
        else:
            open_environments.pop()
    else:
        if open_environments:
            issues.append(
                issue("math.mismatched_environment", f"\\begin{{{open_environments[-1]}}} never ended")
            )

    lefts = len(ContentRegex.LEFT.findall(span.body))
    rights = len(ContentRegex.RIGHT.findall(span.body))
    if lefts != rights:
        issues.append(issue("math.left_right", f"{lefts} \\left vs {rights} \\right"))

    return issues


def check_math(doc: Document) -> List[Issue]:
    """Check every math span in a document, and report stray $$ delimiters."""
    masked = mask_code(doc.body)
    spans = find_math_spans(masked, code_masked=True)

    issues = []
    for span in spans:
        issues.extend(check_math_span(doc, span))

    leftover = mask_math(masked, spans)
    stray = leftover.find(MathPatterns.DISPLAY_DELIMITER)
    if stray != -1:
        issues.append(
            Issue(
                severity=ERROR,
                code="math.unclosed_display",
                message="Display math '$$' is never closed",
                source=doc.source_path,
                line=doc.file_line(line_number_at(doc.body, stray)),
            )
        )

    return issues


def check_markup(doc: Document) -> List[Issue]:
    """Run all markup checks on one document."""
    return check_code_fences(doc) + check_math(doc)
