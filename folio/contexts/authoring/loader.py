"""
Content discovery and loading.

Walks content/pages and content/posts for markdown files, loads each into a
Document, and lists the static assets. Files that fail to load are collected
as errors so one bad post does not hide problems in the others.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from folio.contexts.authoring.content_patterns import ContentRegex, FileNamePatterns
from folio.contexts.authoring.document import PAGE, POST, Document, FrontMatter, SiteContent
from folio.contexts.authoring.exceptions import FrontMatterError
from folio.contexts.authoring.front_matter import (
    coerce_front_matter,
    parse_date,
    parse_front_matter,
    split_front_matter,
)
from folio.contexts.authoring.logger import _log_debug, log_site_loaded
from folio.utils.site_config import SiteConfig


def split_dated_stem(stem: str) -> Tuple[Optional[date], str]:
    """
    Split a "YYYY-MM-DD-slug" file stem into its date and slug.

    Returns:
        (date, slug); date is None when the stem has no valid date prefix

    Example:
        >>> split_dated_stem("2019-06-02-sphere-fitting")
        (datetime.date(2019, 6, 2), 'sphere-fitting')
        >>> split_dated_stem("cv")
        (None, 'cv')
    """
    match = ContentRegex.DATED_STEM.match(stem)
    if not match:
        return None, stem
    try:
        return parse_date(match.group("date")), match.group("slug")
    except FrontMatterError:
        # Looks dated but is not a real date (e.g., 2019-13-45-...): keep the whole stem
        return None, stem


def page_slug(path: Path, pages_path: Path) -> str:
    """
    Slug for a page from its path under the pages directory.

    Subdirectories stay in the slug and a trailing "index" names its directory.
    A page outside pages_path falls back to its file stem.

    Example:
        >>> page_slug(Path("pages/notes/setup.md"), Path("pages"))
        'notes/setup'
        >>> page_slug(Path("pages/notes/index.md"), Path("pages"))
        'notes'
    """
    try:
        parts = list(path.relative_to(pages_path).with_suffix("").parts)
    except ValueError:
        parts = [path.stem]

    parts[-1] = split_dated_stem(parts[-1])[1]
    if len(parts) > 1 and parts[-1] == "index":
        parts.pop()
    return "/".join(parts)


def derive_url(kind: str, slug: str, front_matter: FrontMatter, config: SiteConfig) -> str:
    """
    Work out a document's URL.

    An explicit permalink wins; otherwise the configured pattern for the
    document kind is filled in. A page whose slug is "index" becomes "/".
    """
    if front_matter.permalink:
        return front_matter.permalink

    if kind == POST:
        doc_date = front_matter.date
        return config.post_permalink.format(
            slug=slug,
            year=f"{doc_date.year:04d}",
            month=f"{doc_date.month:02d}",
            day=f"{doc_date.day:02d}",
        )

    if slug == "index":
        return "/"
    return config.page_permalink.format(slug=slug)


def load_document(path: Path, kind: str, config: SiteConfig) -> Document:
    """
    Load one content file.

    Args:
        path: Markdown file
        kind: PAGE or POST
        config: Site configuration (for URL patterns)

    Returns:
        Document

    Raises:
        FrontMatterError: If the file cannot be read, is not UTF-8, or its front-matter is invalid
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(
            "File is not valid UTF-8", source_path=path, original_error=e
        ) from e
    except OSError as e:
        raise FrontMatterError(
            "File cannot be read", source_path=path, original_error=e
        ) from e

    file_date, slug = split_dated_stem(path.stem)
    if kind == PAGE:
        slug = page_slug(path, config.pages_path)
    yaml_text, body, body_line_offset = split_front_matter(text, source_path=path)
    data = parse_front_matter(yaml_text, source_path=path)
    front_matter = coerce_front_matter(
        data, kind, source_path=path, fallback_date=file_date if kind == POST else None
    )

    return Document(
        source_path=path,
        kind=kind,
        front_matter=front_matter,
        body=body,
        body_line_offset=body_line_offset,
        slug=slug,
        url=derive_url(kind, slug, front_matter, config),
    )


def list_static_assets(static_path: Path) -> List[str]:
    """Return site-relative URLs of every file under the static directory."""
    if not static_path.is_dir():
        return []
    return [
        "/" + path.relative_to(static_path).as_posix()
        for path in sorted(static_path.rglob("*"))
        if path.is_file()
    ]


def load_site(config: SiteConfig, include_drafts: bool = False) -> SiteContent:
    """
    Load every page and post of the site.

    Args:
        config: Site configuration
        include_drafts: Keep documents marked draft: true

    Returns:
        SiteContent with documents, per-file load errors, and static assets
    """
    site = SiteContent(assets=list_static_assets(config.static_path))

    for kind, directory in ((PAGE, config.pages_path), (POST, config.posts_path)):
        if not directory.is_dir():
            _log_debug(f"No {kind} directory at {directory}")
            continue

        for path in sorted(directory.rglob(FileNamePatterns.MARKDOWN_GLOB)):
            try:
                document = load_document(path, kind, config)
            except FrontMatterError as e:
                site.load_errors.append(e)
                continue

            if document.front_matter.draft and not include_drafts:
                site.drafts_skipped += 1
                _log_debug(f"Skipping draft: {path.name}")
                continue

            site.documents.append(document)

    log_site_loaded(site, config.content_path)
    return site
