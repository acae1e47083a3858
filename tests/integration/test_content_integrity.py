"""
Integration tests for the shipped site content.

The CV page and the two posts must load, pass verification with no errors or
warnings, and render with their math intact.
"""

from pathlib import Path

import pytest

from folio.contexts.authoring.loader import load_site
from folio.contexts.rendering.builder import build_site
from folio.contexts.verification.validator import check_site
from folio.utils.site_config import load_site_config

ROOT = Path(__file__).resolve().parents[2]

MLE_URL = "/blog/maximum-likelihood-polynomial-regression/"
SPHERE_URL = "/blog/least-squares-sphere-fitting/"


@pytest.fixture
def config(tmp_path):
    return load_site_config(ROOT / "site.yaml", output_dir=str(tmp_path / "_site"))


@pytest.mark.integration
def test_shipped_content_loads(config):
    site = load_site(config)

    assert site.load_errors == []
    assert [doc.url for doc in site.pages] == ["/cv/"]
    assert [doc.url for doc in site.posts] == [SPHERE_URL, MLE_URL]


@pytest.mark.integration
def test_shipped_content_verifies_cleanly(config):
    report = check_site(load_site(config))

    assert report.documents_checked == 3
    assert report.issues == [], "\n".join(str(issue) for issue in report.issues)


@pytest.mark.integration
def test_cv_links_every_post(config):
    site = load_site(config)
    (cv,) = site.pages

    for post in site.posts:
        assert f"]({post.url})" in cv.body


@pytest.mark.integration
def test_shipped_site_builds(config, tmp_path):
    result = build_site(config, log_dir=tmp_path / "run")

    assert result.success, f"Build failed with errors: {result.errors}"
    assert result.pages_written == 6
    assert result.assets_copied == 3

    out = config.output_path
    mle_html = (out / "blog" / "maximum-likelihood-polynomial-regression" / "index.html").read_text()
    sphere_html = (out / "blog" / "least-squares-sphere-fitting" / "index.html").read_text()

    assert r"\varepsilon_i \sim \mathcal{N}(0, \sigma^2)" in mle_html
    assert r"\begin{aligned}" in mle_html
    assert r"\begin{bmatrix}" in sphere_html
    assert 'src="/images/sphere-fit.svg"' in sphere_html
    assert "FOLIOMATH" not in mle_html + sphere_html

    index_html = (out / "index.html").read_text()
    assert index_html.index(SPHERE_URL) < index_html.index(MLE_URL)

    assert (out / "css" / "site.css").is_file()
    assert "https://example.github.io/cv/" in (out / "sitemap.xml").read_text()


@pytest.mark.integration
def test_builds_are_deterministic(tmp_path):
    """Two builds of the same content produce identical trees."""
    trees = []
    for name in ("first", "second"):
        config = load_site_config(ROOT / "site.yaml", output_dir=str(tmp_path / name))
        assert build_site(config, log_dir=tmp_path / f"{name}_logs").success

        out = config.output_path
        trees.append(
            {
                path.relative_to(out).as_posix(): path.read_bytes()
                for path in sorted(out.rglob("*"))
                if path.is_file()
            }
        )

    assert trees[0] == trees[1]
