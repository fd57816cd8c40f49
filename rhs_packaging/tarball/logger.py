"""
Tarball context logger.

Provides logging interface for the tarball context with automatic [tarball] prefix.
All tarball modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from rhs_packaging.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[tarball]"


def setup_tarball_logger(
    log_dir: Path,
    source: Optional[Path] = None,
    target_dir: Optional[Path] = None,
    pkg_version: Optional[str] = None,
    dirs: Optional[List[str]] = None,
    manifest: Optional[Path] = None,
    verbose: bool = False,
) -> Path:
    """
    Setup logger for the tarball context.

    The command-line values are recorded as given, before defaults are
    applied, so the log shows what the user asked for.

    Args:
        log_dir: Directory for this packaging session
        source: --source value
        target_dir: --target-dir value
        pkg_version: --pkg-version value
        dirs: --dirs values
        manifest: --manifest value
        verbose: Show debug output on the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="tarball",
        log_dir=log_dir,
        provenance={
            "Source dir": source or f"{Path.cwd()} (cwd)",
            "Target dir": target_dir or "(source dir)",
            "Package version": pkg_version or "(latest git tag)",
            "Extra dirs": ",".join(dirs) if dirs else None,
            "Manifest": manifest or "(bundled)",
        },
        verbose=verbose,
    )


# Wrapper functions with automatic [tarball] prefix


def _log_info(message: str) -> None:
    """Log info message with [tarball] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [tarball] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [tarball] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [tarball] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [tarball] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level packaging helpers


def log_build_start(config, workdir: Path) -> None:
    """Log the effective configuration before any work is done."""
    _log_info("Creates a tarball containing the install package.")
    _log_info(f"  Source dir:  {config.source_dir}")
    _log_info(f"  Target dir:  {config.target_dir}")
    _log_info(f"  Extra dirs:  {' '.join(config.extra_dirs)}")
    _log_debug(f"  Working dir: {workdir}")


def log_collected_files(files: List[Path], verbose: bool = False) -> None:
    """Log a summary of the collected file set (full listing in debug)."""
    _log_info(f"Collected {len(files)} files")
    for path in files:
        if verbose:
            _log_info(f"  {path}")
        else:
            _log_debug(f"  {path}")


def log_build_result(result, verbose: bool = False) -> None:
    """
    Log the outcome of a packaging run.

    Args:
        result: TarballResult from package_release()
        verbose: Show every error rather than the first few
    """
    if result.success:
        _log_success(f"Created {result.tarball_path.name} ({result.elapsed_s:.2f}s)")
        _log_debug(f"  Tarball: {result.tarball_path}")
        return

    _log_error("Creation of tarball failed.")
    error_limit = len(result.errors) if verbose else 5
    for i, err in enumerate(result.errors[:error_limit], 1):
        _log_error(f"  Error {i}: {err}")
    if len(result.errors) > error_limit:
        _log_error(f"  ... and {len(result.errors) - error_limit} more errors")
