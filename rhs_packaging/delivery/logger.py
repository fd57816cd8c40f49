"""
Delivery context logger.

Provides logging interface for the delivery context with automatic [delivery] prefix.
All delivery modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from rhs_packaging.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[delivery]"


def setup_delivery_logger(
    log_dir: Path, action: str, subject: Path, tool: str, destination: Optional[str] = None
) -> Path:
    """
    Setup logger for the delivery context.

    Args:
        log_dir: Directory for this session
        action: "convert" or "publish"
        subject: Document or tarball being delivered
        tool: External executable that does the work
        destination: Output directory or upload URL prefix

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="delivery",
        log_dir=log_dir,
        provenance={
            "Action": action,
            "Input": subject,
            "Tool": tool,
            "Destination": destination,
        },
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_command_output(tool: str, stdout: str, stderr: str) -> None:
    """Dump raw tool output to the log file without per-line formatting."""
    if stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\n{tool.upper()} STDOUT:\n{'=' * 80}\n{stdout}\n")
    if stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\n{tool.upper()} STDERR:\n{'=' * 80}\n{stderr}\n")
