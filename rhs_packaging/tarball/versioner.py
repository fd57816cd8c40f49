"""
Package Version Resolution

An explicit --pkg-version always wins. Otherwise the most recent git tag in
the source directory is used. Either way dots become underscores ("2.0" -> "2_0")
so the version is safe in file and directory names.
"""

import os
from pathlib import Path
from typing import Optional, Protocol

from dotenv import load_dotenv

from rhs_packaging.tarball.exceptions import VersionResolutionError
from rhs_packaging.tarball.logger import _log_debug, _log_info
from rhs_packaging.utils.shell import run_command

load_dotenv()
GIT_BIN = os.getenv("GIT_BIN", "git")

# Characters that would turn the version into a nested path
PATH_SEPARATORS = {"/", "\\", os.sep}


class Versioner(Protocol):
    """Source of the most recent release tag for a directory."""

    def latest_tag(self, source_dir: Path) -> Optional[str]:
        """Return the latest tag, or None if the directory is not under version control."""
        ...


class GitVersioner:
    """Reads the latest tag with `git describe --abbrev=0 --tags`."""

    def __init__(self, git_bin: str = GIT_BIN):
        self.git_bin = git_bin

    def latest_tag(self, source_dir: Path) -> Optional[str]:
        if not (Path(source_dir) / ".git").exists():
            return None

        result = run_command(
            [self.git_bin, "describe", "--abbrev=0", "--tags"],
            cwd=source_dir,
        )
        if not result.ok:
            raise VersionResolutionError(
                f"could not read the latest git tag in {source_dir}: {result.stderr.strip()}"
            )

        tag = result.stdout.strip()
        return tag or None


def normalize_version(version: str) -> str:
    """Replace every '.' with '_' (x.y -> x_y)."""
    return version.strip().replace(".", "_")


def resolve_version(
    explicit: Optional[str],
    source_dir: Path,
    versioner: Versioner,
) -> str:
    """
    Determine the package version for this run.

    Args:
        explicit: Version given on the command line (trumps the git tag)
        source_dir: Directory to query for tags
        versioner: Tag lookup implementation

    Returns:
        Normalized, non-empty version string

    Raises:
        VersionResolutionError: If no version was supplied and none can be read from git
            or the version would not be a single path component (e.g. "release/2.0")
    """
    if explicit and explicit.strip():
        version = normalize_version(explicit)
        _log_debug(f"Using supplied package version {explicit!r}")
    else:
        tag = versioner.latest_tag(source_dir)
        if not tag or not tag.strip():
            raise VersionResolutionError(
                "package version not supplied and no git environment present."
            )
        version = normalize_version(tag)
        _log_debug(f"Using latest git tag {tag!r}")

    if not version:
        raise VersionResolutionError("package version resolved to an empty string.")
    if any(sep in version for sep in PATH_SEPARATORS):
        raise VersionResolutionError(
            f"package version {version!r} contains a path separator; "
            "use --pkg-version to give a plain version"
        )

    _log_info(f"Package version: {version}")
    return version
