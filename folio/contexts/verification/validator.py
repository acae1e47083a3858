"""
Site verification.

check_site() is the pure check over already-loaded content; verify_site() is
the orchestration wrapper that loads the site, sets up a logging session and
records a site event.
"""

import time
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from folio.contexts.authoring.document import (
    GENERATED_URLS,
    POST,
    Document,
    SiteContent,
    canonical_url,
)
from folio.contexts.authoring.loader import load_site
from folio.contexts.verification.issues import ERROR, WARNING, Issue, VerificationReport
from folio.contexts.verification.link_checker import check_references, site_targets
from folio.contexts.verification.logger import (
    log_verification_result,
    log_verification_start,
    setup_verification_logger,
)
from folio.contexts.verification.markup_checks import check_markup
from folio.utils.event_logging import LOGS_PATH, log_site_event
from folio.utils.site_config import FOLIO_SITE_CONFIG, SiteConfig
from folio.utils.timestamp import now


def load_error_issues(site: SiteContent) -> List[Issue]:
    """Turn per-file load errors into front-matter issues."""
    return [
        Issue(
            severity=ERROR,
            code="front_matter.invalid",
            message=error.message + (f" (field '{error.field}')" if error.field else ""),
            source=error.source_path,
            line=error.line,
        )
        for error in site.load_errors
    ]


def check_duplicate_urls(documents: List[Document]) -> List[Issue]:
    """Report documents that share a URL with each other or with a generated page."""
    by_url: Dict[str, List[Document]] = defaultdict(list)
    for doc in documents:
        by_url[canonical_url(doc.url)].append(doc)

    generated = {canonical_url(url) for url in GENERATED_URLS}
    issues = []

    for url, docs in by_url.items():
        if url in generated:
            for doc in docs:
                issues.append(
                    Issue(
                        severity=ERROR,
                        code="permalink.duplicate",
                        message=f"URL {doc.url} is reserved for a generated page",
                        source=doc.source_path,
                    )
                )
        elif len(docs) > 1:
            others = ", ".join(d.source_path.name for d in docs)
            for doc in docs:
                issues.append(
                    Issue(
                        severity=ERROR,
                        code="permalink.duplicate",
                        message=f"URL {doc.url} is shared by: {others}",
                        source=doc.source_path,
                    )
                )

    return issues


def check_post_metadata(doc: Document) -> List[Issue]:
    """Warn about posts missing the metadata used by listings, meta tags and the feed."""
    if doc.kind != POST:
        return []

    issues = []
    if not doc.front_matter.description:
        issues.append(
            Issue(WARNING, "front_matter.no_description", "Post has no description", doc.source_path)
        )
    if not doc.front_matter.keywords:
        issues.append(
            Issue(WARNING, "front_matter.no_keywords", "Post has no keywords", doc.source_path)
        )
    return issues


def check_site(site: SiteContent) -> VerificationReport:
    """
    Check loaded site content.

    Checks, in order: files that failed to load, duplicate URLs, then per
    document markup (code fences, math), internal links and images, and post
    metadata.

    Args:
        site: SiteContent from load_site()

    Returns:
        VerificationReport
    """
    report = VerificationReport(documents_checked=len(site.documents) + len(site.load_errors))
    report.issues.extend(load_error_issues(site))
    report.issues.extend(check_duplicate_urls(site.documents))

    pages = site_targets(site)
    assets = set(site.assets)

    for doc in site.documents:
        report.issues.extend(check_markup(doc))
        report.issues.extend(check_references(doc, pages, assets))
        report.issues.extend(check_post_metadata(doc))

    return report


def verify_site(
    config: SiteConfig,
    include_drafts: bool = False,
    log_dir: Optional[Path] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> VerificationReport:
    """
    Load and check the site with logging.

    Orchestration function that:
    1. Sets up a timestamped logging session
    2. Loads the site content
    3. Runs check_site()
    4. Logs to both Tier 1 (verify.log) and Tier 2 (site events)

    Args:
        config: Site configuration
        include_drafts: Check drafts too
        log_dir: Log directory (default: LOGS_PATH/verify_<timestamp>)
        config_path: Config file path, for the provenance header
        verbose: Log every warning and show DEBUG messages on the console

    Returns:
        VerificationReport with log_dir set
    """
    log_dir = Path(log_dir) if log_dir else LOGS_PATH / f"verify_{now()}"
    log_file = setup_verification_logger(log_dir, config_path or FOLIO_SITE_CONFIG, verbose=verbose)
    log_verification_start(config.content_path, log_file)

    start_time = time.time()
    site = load_site(config, include_drafts=include_drafts)
    report = check_site(site)
    report.log_dir = log_dir
    elapsed_time = time.time() - start_time

    log_verification_result(report, elapsed_time, verbose=verbose)
    log_site_event(
        event_type="verification_completed" if report.is_valid else "verification_failed",
        source="verification",
        documents_checked=report.documents_checked,
        error_count=len(report.errors),
        warning_count=len(report.warnings),
        errors=[str(issue) for issue in report.errors[:5]],
    )

    return report
