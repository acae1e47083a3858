"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, config_path: Path, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this build session
        config_path: Site config in use (recorded in the provenance header)
        verbose: Also show DEBUG messages on the console

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, Path("site.yaml"))
        _log_info("Starting build...")
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Site config": config_path},
        verbose=verbose,
    )


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_build_start(content_path: Path, output_path: Path, log_file: Path) -> None:
    """Log start of a build with context."""
    _log_info(f"Building site from {content_path}")
    _log_info(f"Log file: {log_file}")
    _log_debug(f"  Output: {output_path}")


def log_build_result(result, elapsed_time: float) -> None:
    """
    Log build result.

    Args:
        result: BuildResult from build_site()
        elapsed_time: Time taken to build
    """
    if result.success:
        _log_success(
            f"Build succeeded: {result.pages_written} pages, "
            f"{result.assets_copied} assets ({elapsed_time:.2f}s)"
        )
        _log_info(f"  Output: {result.output_dir}")
    else:
        _log_error(f"Build failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        error_limit = 10
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    if result.warnings:
        _log_debug(f"{len(result.warnings)} warnings")
