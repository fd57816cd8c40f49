"""
Session logger setup (Tier 1 logging).

Each CLI run gets its own directory holding <context>.log at DEBUG level,
while the console shows INFO and above (DEBUG with --verbose). The log opens
with a provenance block: how the tool was invoked plus the run settings the
caller passes in. Context-specific wrappers live in {context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

import rhs_packaging

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: Optional[Dict[str, object]] = None,
    verbose: bool = False,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Args:
        context_name: Context identifier, also the log file stem ("tarball", "delivery")
        log_dir: Directory for this session (created if missing)
        provenance: Run settings to record at the top of the log (None values shown as "-")
        verbose: Show DEBUG messages on the console too

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            "tarball",
            Path("outs/logs/tarball_20251114_123456"),
            provenance={"Source dir": "/src/rhs", "Package version": "2.0"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
    )

    log_provenance(provenance)

    return log_file


def log_provenance(provenance: Optional[Dict[str, object]] = None) -> None:
    """
    Write the provenance block: command line, working directory, interpreter,
    rhs_packaging version, then the caller's run settings. Only the command
    line reaches the console; the rest goes to the log file.
    """
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")
    logger.debug(f"rhs_packaging: {rhs_packaging.__version__}")

    for key, value in (provenance or {}).items():
        logger.debug(f"{key}: {'-' if value is None else value}")

    logger.info("=" * 80)
