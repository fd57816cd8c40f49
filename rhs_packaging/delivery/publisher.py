"""
Tarball Publishing Module

Uploads a finished tarball to S3-compatible object storage with the AWS CLI.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from rhs_packaging.delivery.logger import _log_error, _log_info, _log_success, log_command_output
from rhs_packaging.utils.event_logging import log_packaging_event
from rhs_packaging.utils.shell import run_command

load_dotenv()
AWS_CLI = os.getenv("AWS_CLI", "aws")
PUBLISH_DESTINATION = os.getenv("PUBLISH_DESTINATION")

TARBALL_SUFFIX = ".tar.gz"


@dataclass
class PublishResult:
    """
    Result of a tarball upload.

    Attributes:
        success: Whether the upload completed
        url: Object URL the tarball was uploaded to (None if failed)
        stdout: Standard output from the uploader
        stderr: Standard error from the uploader
        errors: Error messages
    """

    success: bool
    url: Optional[str] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)


def publish_tarball(
    tarball: Path,
    destination: Optional[str] = PUBLISH_DESTINATION,
    uploader_bin: str = AWS_CLI,
) -> PublishResult:
    """
    Upload a tarball to object storage.

    Args:
        tarball: Tarball produced by package_release()
        destination: Bucket prefix, e.g. "s3://releases/rhs-hadoop-install"
        uploader_bin: AWS CLI executable

    Returns:
        PublishResult with success status and uploader output
    """
    tarball = Path(tarball)
    if not tarball.is_file():
        return PublishResult(success=False, errors=[f"Tarball not found: {tarball}"])
    if not tarball.name.endswith(TARBALL_SUFFIX):
        return PublishResult(success=False, errors=[f"Not a {TARBALL_SUFFIX} file: {tarball}"])
    if not destination or not destination.startswith("s3://"):
        return PublishResult(
            success=False, errors=[f"Destination must be an s3:// URL, got: {destination}"]
        )

    url = f"{destination.rstrip('/')}/{tarball.name}"
    _log_info(f"Uploading {tarball.name} to {url}")
    result = run_command([uploader_bin, "s3", "cp", "--only-show-errors", tarball, url])
    log_command_output("aws", result.stdout, result.stderr)

    errors = []
    if not result.ok:
        errors.append(f"{uploader_bin} exited with status {result.returncode}")
        _log_error(f"Upload failed: {result.stderr.strip()}")
    else:
        _log_success(f"Published {url}")

    log_packaging_event(
        event_type="publish_completed" if result.ok else "publish_failed",
        package=tarball.name[: -len(TARBALL_SUFFIX)],
        source="delivery",
        url=url,
        errors=errors,
    )

    return PublishResult(
        success=result.ok,
        url=url if result.ok else None,
        stdout=result.stdout,
        stderr=result.stderr,
        errors=errors,
    )
