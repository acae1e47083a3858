"""Shared fixtures: isolated log locations, document and temporary site factories."""

from datetime import date
from pathlib import Path

import pytest
from loguru import logger

from folio.contexts.authoring.document import POST, Document, FrontMatter
from folio.contexts.rendering import builder
from folio.contexts.verification import validator
from folio.utils import event_logging

SITE_YAML = """\
title: Test Site
author: Test Author
base_url: https://test.example.org
"""

CV_PAGE = """\
---
title: CV
permalink: /cv/
---

See [the post](/blog/first-post/).
"""

FIRST_POST = """\
---
title: First post
description: A post with an image and some math.
keywords: [testing]
---

Inline $x_1 + x_2$ and a figure:

![Plot](/images/plot.svg)

Back to the [CV](/cv/).
"""


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Send run logs and site events into the test's tmp_path."""
    logs_path = tmp_path / "logs"
    monkeypatch.setattr(event_logging, "SITE_EVENTS_FILE", logs_path / "site_events.log")
    monkeypatch.setattr(validator, "LOGS_PATH", logs_path)
    monkeypatch.setattr(builder, "LOGS_PATH", logs_path)
    yield logs_path
    logger.remove()


@pytest.fixture
def make_doc():
    """Factory for in-memory documents."""

    def _make(
        body: str,
        kind: str = POST,
        url: str = "/blog/test/",
        source_path: Path = Path("content/posts/2020-01-01-test.md"),
        body_line_offset: int = 5,
        **front_matter,
    ) -> Document:
        front_matter.setdefault("title", "Test")
        front_matter.setdefault("date", date(2020, 1, 1))
        return Document(
            source_path=source_path,
            kind=kind,
            front_matter=FrontMatter(**front_matter),
            body=body,
            body_line_offset=body_line_offset,
            slug=source_path.stem,
            url=url,
        )

    return _make


@pytest.fixture
def write_content():
    """Write a content file under <root>/content/<relpath>."""

    def _write(root: Path, relpath: str, text: str) -> Path:
        path = root / "content" / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def tmp_site(tmp_path, write_content):
    """A small valid site: one page, one post, one image."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "site.yaml").write_text(SITE_YAML, encoding="utf-8")

    image = root / "static" / "images" / "plot.svg"
    image.parent.mkdir(parents=True)
    image.write_text('<svg xmlns="http://www.w3.org/2000/svg"/>', encoding="utf-8")

    write_content(root, "pages/cv.md", CV_PAGE)
    write_content(root, "posts/2020-01-01-first-post.md", FIRST_POST)
    return root
