"""
Integration tests for building a site on disk.

Each test builds a small temporary site (see the tmp_site fixture) through
build_site() and inspects the output tree, the run log and the site events.
"""

import pytest

from folio.contexts.rendering.builder import build_site
from folio.contexts.verification.validator import verify_site
from folio.utils.event_logging import get_recent_events
from folio.utils.site_config import load_site_config

BROKEN_LINK_POST = """\
---
title: Broken
description: Links to a post that does not exist.
keywords: [broken]
---

See [the missing post](/blog/missing/).
"""


@pytest.fixture
def config(tmp_site):
    return load_site_config(tmp_site / "site.yaml")


@pytest.mark.integration
def test_build_writes_documents_generated_pages_and_assets(config, tmp_path):
    result = build_site(config, log_dir=tmp_path / "run")

    assert result.success, f"Build failed with errors: {result.errors}"
    assert result.pages_written == 5
    assert result.assets_copied == 1

    out = config.output_path
    for relpath in [
        "index.html",
        "cv/index.html",
        "blog/first-post/index.html",
        "sitemap.xml",
        "feed.xml",
        "images/plot.svg",
    ]:
        assert (out / relpath).is_file(), relpath

    assert (tmp_path / "run" / "build.log").is_file()


@pytest.mark.integration
def test_post_page_content(config, tmp_path):
    build_site(config, log_dir=tmp_path / "run")
    html = (config.output_path / "blog" / "first-post" / "index.html").read_text()

    assert "<title>First post | Test Site</title>" in html
    assert "$x_1 + x_2$" in html
    assert 'src="/images/plot.svg"' in html
    assert '<meta name="description" content="A post with an image and some math.">' in html
    assert '<a href="/cv/">CV</a>' in html


@pytest.mark.integration
def test_feed_and_sitemap_use_absolute_urls(config, tmp_path):
    build_site(config, log_dir=tmp_path / "run")

    feed = (config.output_path / "feed.xml").read_text()
    sitemap = (config.output_path / "sitemap.xml").read_text()

    assert "<id>https://test.example.org/blog/first-post/</id>" in feed
    assert "<updated>2020-01-01T00:00:00+00:00</updated>" in feed
    assert "<loc>https://test.example.org/cv/</loc>" in sitemap
    assert "<lastmod>2020-01-01</lastmod>" in sitemap


@pytest.mark.integration
def test_verification_errors_abort_before_writing(config, tmp_site, tmp_path, write_content):
    write_content(tmp_site, "posts/2020-02-01-broken.md", BROKEN_LINK_POST)

    result = build_site(config, log_dir=tmp_path / "run")

    assert result.success is False
    assert any("[link.broken]" in error for error in result.errors)
    assert not config.output_path.exists()

    (event,) = get_recent_events(event_type="build_failed")
    assert event["error_count"] == 1


@pytest.mark.integration
def test_skip_verify_still_rejects_bad_front_matter(config, tmp_site, tmp_path, write_content):
    write_content(tmp_site, "posts/2020-02-01-broken.md", BROKEN_LINK_POST)
    assert build_site(config, verify=False, log_dir=tmp_path / "a").success

    write_content(tmp_site, "posts/2020-02-02-untitled.md", "---\ndate: 2020-02-02\n---\n")
    result = build_site(config, verify=False, log_dir=tmp_path / "b")

    assert result.success is False
    assert any("[front_matter.invalid]" in error for error in result.errors)


@pytest.mark.integration
def test_drafts_built_only_on_request(config, tmp_site, tmp_path, write_content):
    write_content(
        tmp_site,
        "posts/2020-03-01-wip.md",
        "---\ntitle: WIP\ndescription: d\nkeywords: k\ndraft: true\n---\n\nDraft.\n",
    )

    build_site(config, log_dir=tmp_path / "a")
    assert not (config.output_path / "blog" / "wip").exists()

    result = build_site(config, include_drafts=True, log_dir=tmp_path / "b")
    assert result.success
    assert (config.output_path / "blog" / "wip" / "index.html").is_file()


@pytest.mark.integration
def test_clean_removes_stale_output(config, tmp_path):
    stale = config.output_path / "old" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale")

    build_site(config, clean=False, log_dir=tmp_path / "a")
    assert stale.exists()

    build_site(config, log_dir=tmp_path / "b")
    assert not stale.exists()


@pytest.mark.integration
@pytest.mark.parametrize("output_dir", [".", "content"])
def test_refuses_to_clean_site_sources(tmp_site, tmp_path, output_dir):
    config = load_site_config(tmp_site / "site.yaml", output_dir=output_dir)

    with pytest.raises(ValueError, match="Refusing to clean"):
        build_site(config, log_dir=tmp_path / "run")

    assert (tmp_site / "content" / "pages" / "cv.md").exists()


@pytest.mark.integration
def test_site_layouts_override_builtin(tmp_site, tmp_path):
    layouts = tmp_site / "layouts"
    layouts.mkdir()
    (layouts / "page.html.jinja").write_text(
        '{% extends "base.html.jinja" %}{% block main %}CUSTOM {{ page.title }}{% endblock %}'
    )
    config = load_site_config(tmp_site / "site.yaml", layouts_dir="layouts")

    assert build_site(config, log_dir=tmp_path / "run").success
    assert "CUSTOM CV" in (config.output_path / "cv" / "index.html").read_text()


@pytest.mark.integration
def test_missing_layout_fails_build(config, tmp_site, tmp_path, write_content):
    write_content(tmp_site, "pages/talk.md", "---\ntitle: Talk\nlayout: slides\n---\n")

    result = build_site(config, log_dir=tmp_path / "run")

    assert result.success is False
    assert any("Template error" in error and "slides" in error for error in result.errors)


@pytest.mark.integration
def test_verify_site_records_event(config, tmp_site, write_content, isolated_logs):
    report = verify_site(config)

    assert report.is_valid
    assert report.documents_checked == 2
    assert report.log_dir.parent == isolated_logs
    assert (report.log_dir / "verify.log").is_file()

    write_content(tmp_site, "posts/2020-02-01-broken.md", BROKEN_LINK_POST)
    assert not verify_site(config).is_valid

    events = get_recent_events()
    assert [e["event_type"] for e in events] == ["verification_completed", "verification_failed"]
