"""
Document data structures.

A site is a set of documents (pages and posts). Each document is one markdown
file with a front-matter block; the loader turns files into Document objects
and groups them in a SiteContent.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from folio.contexts.authoring.exceptions import FrontMatterError

PAGE = "page"
POST = "post"
DOCUMENT_KINDS = (PAGE, POST)

# Pages generated by the builder rather than authored
GENERATED_URLS = ("/", "/sitemap.xml", "/feed.xml")


@dataclass
class FrontMatter:
    """
    Parsed and type-checked front-matter.

    Attributes:
        title: Document title (required)
        date: Publication date (required for posts)
        description: Summary used for meta tags, listings and the feed
        keywords: Keyword list used for meta tags
        permalink: Explicit URL path, overriding the configured pattern
        layout: Layout name (defaults to the document kind)
        draft: Drafts are skipped unless explicitly included
        extra: All other keys, passed through to layouts
    """

    title: str
    date: Optional[date] = None
    description: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    permalink: Optional[str] = None
    layout: Optional[str] = None
    draft: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Document:
    """
    One content file.

    Attributes:
        source_path: Markdown file on disk
        kind: PAGE or POST
        front_matter: Parsed front-matter
        body: Markdown text after the front-matter block
        body_line_offset: Number of file lines preceding the body
        slug: URL slug (file stem without date prefix; pages keep their subdirectory)
        url: Site-relative URL path the document is published at
    """

    source_path: Path
    kind: str
    front_matter: FrontMatter
    body: str
    body_line_offset: int
    slug: str
    url: str

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def date(self) -> Optional[date]:
        return self.front_matter.date

    @property
    def layout(self) -> str:
        return self.front_matter.layout or self.kind

    @property
    def output_relpath(self) -> str:
        return output_relpath_for(self.url)

    def file_line(self, body_line: int) -> int:
        """Convert a 1-based body line number into a 1-based file line number."""
        return body_line + self.body_line_offset


@dataclass
class SiteContent:
    """
    Everything the loader found.

    Attributes:
        documents: Successfully loaded documents (drafts removed unless requested)
        load_errors: One FrontMatterError per file that failed to load
        assets: Site-relative URLs of files in the static directory
        drafts_skipped: Number of drafts left out
    """

    documents: List[Document] = field(default_factory=list)
    load_errors: List[FrontMatterError] = field(default_factory=list)
    assets: List[str] = field(default_factory=list)
    drafts_skipped: int = 0

    @property
    def pages(self) -> List[Document]:
        return [doc for doc in self.documents if doc.kind == PAGE]

    @property
    def posts(self) -> List[Document]:
        """Posts, newest first (ties broken by slug)."""
        posts = [doc for doc in self.documents if doc.kind == POST]
        posts.sort(key=lambda doc: doc.slug)
        posts.sort(key=lambda doc: doc.date or date.min, reverse=True)
        return posts


def output_relpath_for(url: str) -> str:
    """
    Map a URL path to an output file path relative to the output directory.

    Examples:
        >>> output_relpath_for("/")
        'index.html'
        >>> output_relpath_for("/cv/")
        'cv/index.html'
        >>> output_relpath_for("/cv")
        'cv/index.html'
        >>> output_relpath_for("/blog/post.html")
        'blog/post.html'
        >>> output_relpath_for("/feed.xml")
        'feed.xml'
    """
    path = url.lstrip("/")
    if not path or path.endswith("/"):
        return f"{path}index.html"
    if "." in path.rsplit("/", 1)[-1]:
        return path
    return f"{path}/index.html"


def canonical_url(url: str) -> str:
    """
    Normalize a URL path for comparison.

    "/cv", "/cv/" and "/cv/index.html" all name the same page.

    Examples:
        >>> canonical_url("/cv/index.html")
        '/cv'
        >>> canonical_url("/")
        '/'
    """
    if url.endswith("/index.html"):
        url = url[: -len("index.html")]
    url = url.rstrip("/")
    return url or "/"
