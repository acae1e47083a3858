"""
Authoring context logger.

Provides logging interface for the authoring context with automatic [author] prefix.
Authoring runs inside a build or verification session, so there is no setup
function here; the session's context configures the sinks.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[author]"


def _log_info(message: str) -> None:
    """Log info message with [author] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [author] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [author] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [author] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_site_loaded(site, content_path: Path) -> None:
    """
    Log a summary of a loaded site.

    Args:
        site: SiteContent from load_site()
        content_path: Content directory that was scanned
    """
    _log_info(
        f"Loaded {len(site.pages)} pages and {len(site.posts)} posts from {content_path}"
    )
    _log_debug(f"  Static assets: {len(site.assets)}")
    if site.drafts_skipped:
        _log_info(f"  Skipped {site.drafts_skipped} drafts")
    for error in site.load_errors:
        _log_warning(f"  Could not load {error.source_path}: {error.message}")


def log_post_created(path: Path) -> None:
    _log_success(f"Created draft post: {path}")
