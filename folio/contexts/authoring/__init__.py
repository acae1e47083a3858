"""
Authoring Context

Responsibilities:
- Discovers content files (pages, posts) and static assets
- Splits, parses and type-checks front-matter
- Derives slugs, dates and URLs
- Scaffolds new posts

Owns: Document model, front-matter format, content directory layout
Never: Renders HTML or judges link validity
"""

from folio.contexts.authoring.document import (
    PAGE,
    POST,
    Document,
    FrontMatter,
    SiteContent,
)
from folio.contexts.authoring.exceptions import FrontMatterError
from folio.contexts.authoring.loader import load_document, load_site
from folio.contexts.authoring.scaffold import new_post

__all__ = [
    # Data structures
    "PAGE",
    "POST",
    "Document",
    "FrontMatter",
    "SiteContent",
    "FrontMatterError",
    # Loading and scaffolding
    "load_document",
    "load_site",
    "new_post",
]
