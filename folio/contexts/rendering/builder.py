"""
Site Build Module

Renders loaded content into a static HTML tree: one file per document, the
generated home page, sitemap.xml and feed.xml, plus a verbatim copy of the
static directory.
"""

import shutil
import time
from dataclasses import dataclass, field
from datetime import date, datetime, time as dt_time, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from jinja2 import TemplateError

from folio.contexts.authoring.document import Document, SiteContent, output_relpath_for
from folio.contexts.authoring.loader import load_site
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_build_result,
    log_build_start,
    setup_rendering_logger,
)
from folio.contexts.rendering.markdown_renderer import MarkdownRenderer
from folio.contexts.rendering.template_registry import TemplateRegistry
from folio.contexts.verification.issues import VerificationReport
from folio.contexts.verification.validator import check_site, load_error_issues
from folio.utils.event_logging import LOGS_PATH, log_site_event
from folio.utils.site_config import FOLIO_SITE_CONFIG, SiteConfig
from folio.utils.timestamp import now

INDEX_LAYOUT = "index"
SITEMAP_TEMPLATE = "sitemap.xml.jinja"
FEED_TEMPLATE = "feed.xml.jinja"


@dataclass
class BuildResult:
    """
    Result of a site build.

    Attributes:
        success: Whether the site was written
        output_dir: Build output directory
        pages_written: Number of HTML/XML files rendered
        assets_copied: Number of static files copied
        errors: Error messages (verification errors or rendering failures)
        warnings: Verification warnings
        log_dir: Directory containing the build log
    """

    success: bool
    output_dir: Optional[Path] = None
    pages_written: int = 0
    assets_copied: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    log_dir: Optional[Path] = None


def feed_timestamp(value: Optional[date]) -> str:
    """RFC 3339 timestamp (midnight UTC) for a post date, as Atom requires."""
    value = value or date.today()
    return datetime.combine(value, dt_time.min, tzinfo=timezone.utc).isoformat()


def render_document(
    doc: Document,
    site: SiteContent,
    config: SiteConfig,
    renderer: MarkdownRenderer,
    registry: TemplateRegistry,
) -> str:
    """
    Render one document to a full HTML page.

    Args:
        doc: Document to render
        site: Whole site (layouts may list posts)
        config: Site configuration
        renderer: Markdown renderer
        registry: Layout registry

    Returns:
        HTML page text
    """
    content = renderer.render(doc.body)
    return registry.get_layout(doc.layout).render(
        site=config,
        page=doc,
        content=content,
        toc=renderer.last_toc,
        posts=site.posts,
        pages=site.pages,
    )


def render_generated(site: SiteContent, config: SiteConfig, registry: TemplateRegistry) -> dict:
    """
    Render the generated pages.

    Returns:
        Mapping of output relpath to text for the home page, sitemap and feed
    """
    posts = site.posts
    updated = feed_timestamp(posts[0].date if posts else None)

    return {
        output_relpath_for("/"): registry.get_layout(INDEX_LAYOUT).render(
            site=config, page=None, posts=posts, pages=site.pages
        ),
        output_relpath_for("/sitemap.xml"): registry.get_template(SITEMAP_TEMPLATE).render(
            site=config, documents=site.documents
        ),
        output_relpath_for("/feed.xml"): registry.get_template(FEED_TEMPLATE).render(
            site=config,
            posts=posts[: config.feed_size],
            updated=updated,
            feed_timestamp=feed_timestamp,
        ),
    }


def _write(output_path: Path, relpath: str, text: str) -> None:
    target = output_path / relpath
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


def write_site(
    site: SiteContent,
    config: SiteConfig,
    output_path: Path,
    renderer: Optional[MarkdownRenderer] = None,
    registry: Optional[TemplateRegistry] = None,
) -> Tuple[int, int]:
    """
    Write the rendered site to output_path.

    Pure rendering function - assumes content has been verified.

    Args:
        site: Loaded content
        config: Site configuration
        output_path: Output directory (created if missing)
        renderer: Markdown renderer (default: new MarkdownRenderer)
        registry: Layout registry (default: built-in layouts plus config.layouts_path)

    Returns:
        (pages_written, assets_copied)
    """
    renderer = renderer or MarkdownRenderer()
    registry = registry or TemplateRegistry(config.layouts_path)
    output_path.mkdir(parents=True, exist_ok=True)

    pages_written = 0
    for doc in site.documents:
        html = render_document(doc, site, config, renderer, registry)
        _write(output_path, doc.output_relpath, html)
        _log_debug(f"  {doc.source_path.name} -> {doc.output_relpath}")
        pages_written += 1

    for relpath, text in render_generated(site, config, registry).items():
        _write(output_path, relpath, text)
        pages_written += 1

    assets_copied = 0
    if site.assets:
        shutil.copytree(config.static_path, output_path, dirs_exist_ok=True)
        assets_copied = len(site.assets)

    return pages_written, assets_copied


def ensure_safe_to_clean(output_path: Path, config: SiteConfig) -> None:
    """
    Refuse to delete an output directory that holds site sources.

    Raises:
        ValueError: If output_path is, or contains, the site root, content or static directory
    """
    output_path = output_path.resolve()
    for protected in (Path(config.root_dir).resolve(), config.content_path, config.static_path):
        if protected == output_path or protected.is_relative_to(output_path):
            raise ValueError(
                f"Refusing to clean {output_path}: it contains site sources ({protected})"
            )


def build_site(
    config: SiteConfig,
    include_drafts: bool = False,
    clean: bool = True,
    verify: bool = True,
    log_dir: Optional[Path] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> BuildResult:
    """
    Build the site with verification and logging.

    Orchestration function that wraps write_site():
    1. Sets up a timestamped logging session
    2. Loads the content and verifies it (errors abort before anything is written)
    3. Cleans the output directory (optional)
    4. Renders every document and the generated pages, copies static assets
    5. Logs to both Tier 1 (build.log) and Tier 2 (site events)

    Args:
        config: Site configuration
        include_drafts: Build drafts too
        clean: Delete the output directory first
        verify: Run link/markup verification (front-matter errors always abort)
        log_dir: Log directory (default: LOGS_PATH/build_<timestamp>)
        config_path: Config file path, for the provenance header
        verbose: Show per-document DEBUG messages on the console

    Returns:
        BuildResult

    Raises:
        ValueError: If clean is requested for an output directory holding site sources
    """
    log_dir = Path(log_dir) if log_dir else LOGS_PATH / f"build_{now()}"
    log_file = setup_rendering_logger(log_dir, config_path or FOLIO_SITE_CONFIG, verbose=verbose)
    output_path = config.output_path
    log_build_start(config.content_path, output_path, log_file)

    start_time = time.time()
    site = load_site(config, include_drafts=include_drafts)

    if verify:
        report = check_site(site)
    else:
        _log_info("Skipping verification")
        report = VerificationReport(issues=load_error_issues(site))

    result = BuildResult(
        success=False,
        output_dir=output_path,
        errors=[str(issue) for issue in report.errors],
        warnings=[str(issue) for issue in report.warnings],
        log_dir=log_dir,
    )

    if not result.errors:
        if clean and output_path.exists():
            ensure_safe_to_clean(output_path, config)
            shutil.rmtree(output_path)
            _log_debug(f"Cleaned {output_path}")

        try:
            result.pages_written, result.assets_copied = write_site(site, config, output_path)
            result.success = True
        except TemplateError as e:
            result.errors.append(f"Template error: {e}")

    elapsed_time = time.time() - start_time
    log_build_result(result, elapsed_time)

    log_site_event(
        event_type="build_completed" if result.success else "build_failed",
        source="rendering",
        build_time_s=round(elapsed_time, 2),
        pages_written=result.pages_written,
        assets_copied=result.assets_copied,
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        errors=result.errors[:5],
        drafts_included=include_drafts,
    )

    return result
