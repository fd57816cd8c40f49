"""Exceptions raised while building the release tarball."""

from pathlib import Path
from typing import List, Optional


class PackagingError(Exception):
    """Base class for every packaging failure. All of them are fatal."""


class ConfigurationError(PackagingError):
    """
    Exception raised when the packaging configuration is unusable.

    Covers missing source, target or extra directories and unreadable manifests.
    """


class VersionResolutionError(ConfigurationError):
    """Exception raised when no package version can be determined."""


class BuildError(PackagingError):
    """Exception raised when the archive could not be produced."""


class ArchiveCreationError(BuildError):
    """
    Exception raised when the archive utility exits with a failure.

    Attributes:
        message: Error description
        command: Command line that was executed
        stderr: Standard error captured from the archive utility
    """

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        stderr: Optional[str] = None,
    ):
        self.message = message
        self.command = command
        self.stderr = stderr

        parts = [message]
        if command:
            parts.append(f"Command: {' '.join(command)}")
        if stderr:
            parts.append(f"Output: {stderr.strip()}")

        super().__init__("\n".join(parts))


class ArchiveCountError(BuildError):
    """
    Exception raised when the build did not leave exactly one archive behind.

    Attributes:
        expected: Archive path the build should have produced
        found: Archive paths that actually exist
    """

    def __init__(self, expected: Path, found: List[Path]):
        self.expected = expected
        self.found = found
        super().__init__(
            f"creation of tarball failed: expected exactly one archive at {expected}, "
            f"found {len(found)}"
        )


class StagingError(BuildError):
    """Exception raised when files cannot be copied into the staging directory."""


class ArchiveRelocationError(BuildError):
    """
    Exception raised when the finished archive cannot be moved to the target directory.

    Attributes:
        archive: Archive that was being moved
        target_dir: Directory it was being moved to
    """

    def __init__(self, archive: Path, target_dir: Path, reason: str):
        self.archive = archive
        self.target_dir = target_dir
        super().__init__(f"could not move {archive.name} to {target_dir}: {reason}")
