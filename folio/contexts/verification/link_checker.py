"""
Internal link and image reference checking.

References are collected from the markdown source (inline links and images,
reference definitions, raw <a href> and <img src>), skipping code. Relative
targets resolve against the page URL the way a browser resolves them, so a
reference is judged by where it will point on the published site.
"""

from dataclasses import dataclass
from typing import Iterable, List, Set
from urllib.parse import unquote, urljoin, urlsplit

from folio.contexts.authoring.content_patterns import ContentRegex
from folio.contexts.authoring.document import GENERATED_URLS, Document, SiteContent, canonical_url
from folio.contexts.authoring.markdown_scan import find_math_spans, mask_code, mask_math
from folio.contexts.verification.issues import ERROR, Issue
from folio.utils.text_processing import line_number_at

LINK = "link"
IMAGE = "image"


@dataclass
class Reference:
    """A link or image target found in a markdown body (line is body-relative)."""

    kind: str
    target: str
    line: int


def extract_references(body: str) -> List[Reference]:
    """
    Collect link and image targets from a markdown body, in document order.

    Code blocks, code spans and math are ignored.
    """
    text = mask_code(body)
    text = mask_math(text, find_math_spans(text, code_masked=True))
    found = []

    for match in ContentRegex.INLINE_LINK.finditer(text):
        target = match.group("angled")
        if target is None:
            target = match.group("target")
        kind = IMAGE if match.group("bang") else LINK
        found.append((match.start(), Reference(kind, target.strip(), 0)))

    for match in ContentRegex.REFERENCE_DEFINITION.finditer(text):
        found.append((match.start(), Reference(LINK, match.group("target"), 0)))

    for regex, kind in ((ContentRegex.HTML_ANCHOR, LINK), (ContentRegex.HTML_IMAGE, IMAGE)):
        for match in regex.finditer(text):
            found.append((match.start(), Reference(kind, match.group("target").strip(), 0)))

    found.sort(key=lambda item: item[0])
    for position, reference in found:
        reference.line = line_number_at(text, position)
    return [reference for _, reference in found]


def is_internal(target: str) -> bool:
    """
    True for targets that point into the site.

    Excludes empty targets, URLs with a scheme (https:, mailto:, ...),
    protocol-relative URLs and bare #fragments.

    Examples:
        >>> is_internal("/images/fit.svg")
        True
        >>> is_internal("https://example.org")
        False
        >>> is_internal("#derivation")
        False
    """
    if not target or target.startswith("#") or target.startswith("//"):
        return False
    return not ContentRegex.URL_SCHEME.match(target)


def resolve_target(page_url: str, target: str) -> str:
    """
    Resolve a reference against the URL of the page containing it.

    Fragment and query are dropped and percent-escapes decoded.

    Examples:
        >>> resolve_target("/blog/sphere-fit/", "../../images/fit.svg")
        '/images/fit.svg'
        >>> resolve_target("/cv/", "/blog/mle/#likelihood")
        '/blog/mle/'
    """
    return unquote(urlsplit(urljoin(page_url, target)).path)


def site_targets(site: SiteContent) -> Set[str]:
    """Canonical URLs of every page (authored or generated) on the site."""
    urls: Iterable[str] = [doc.url for doc in site.documents] + list(GENERATED_URLS)
    return {canonical_url(url) for url in urls}


def check_references(doc: Document, pages: Set[str], assets: Set[str]) -> List[Issue]:
    """
    Check every internal reference in one document.

    Args:
        doc: Document to check
        pages: Canonical page URLs (from site_targets())
        assets: Static asset URLs

    Returns:
        "link.broken" and "image.missing" issues
    """
    issues = []

    for reference in extract_references(doc.body):
        if not is_internal(reference.target):
            continue

        resolved = resolve_target(doc.url, reference.target)
        if reference.kind == IMAGE:
            if resolved in assets:
                continue
            code, message = "image.missing", f"Image '{reference.target}' not found"
        else:
            if resolved in assets or canonical_url(resolved) in pages:
                continue
            code, message = "link.broken", f"Link '{reference.target}' does not resolve"

        issues.append(
            Issue(
                severity=ERROR,
                code=code,
                message=f"{message} (resolved to {resolved})",
                source=doc.source_path,
                line=doc.file_line(reference.line),
            )
        )

    return issues
