"""
Verification context logger.

Provides logging interface for verification context with automatic [verify] prefix.
All verification modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[verify]"


def setup_verification_logger(log_dir: Path, config_path: Path, verbose: bool = False) -> Path:
    """
    Setup logger for verification context.

    Args:
        log_dir: Directory for this verification session
        config_path: Site config in use (recorded in the provenance header)
        verbose: Also show DEBUG messages on the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="verify",
        log_dir=log_dir,
        extra_provenance={"Site config": config_path},
        verbose=verbose,
    )


def _log_info(message: str) -> None:
    """Log info message with [verify] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [verify] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [verify] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [verify] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_verification_start(content_path: Path, log_file: Path) -> None:
    _log_info(f"Verifying site content in {content_path}")
    _log_info(f"Log file: {log_file}")


def log_verification_result(report, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log verification result with issue details.

    Args:
        report: VerificationReport from check_site()
        elapsed_time: Time taken to verify
        verbose: Log every warning instead of the first few
    """
    for error in report.errors:
        _log_error(f"  {error}")

    warning_limit = len(report.warnings) if verbose else 5
    for warning in report.warnings[:warning_limit]:
        _log_warning(f"  {warning}")
    if len(report.warnings) > warning_limit:
        _log_warning(f"  ... and {len(report.warnings) - warning_limit} more warnings")

    summary = (
        f"{report.documents_checked} documents: {len(report.errors)} errors, "
        f"{len(report.warnings)} warnings ({elapsed_time:.2f}s)"
    )
    if report.is_valid:
        _log_success(f"Verification passed. {summary}")
    else:
        _log_error(f"Verification failed. {summary}")
