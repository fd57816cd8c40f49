"""
Archive Assembly

Stages the collected files under <package-name>-<version>/, compresses the
staging directory with the external tar utility, verifies that exactly one
archive was produced and relocates it to the target directory.

The archive utility and the mover are narrow protocols so tests can swap in fakes.
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence

from dotenv import load_dotenv

from rhs_packaging.tarball.config import PackageConfig
from rhs_packaging.tarball.exceptions import (
    ArchiveCountError,
    ArchiveCreationError,
    ArchiveRelocationError,
    StagingError,
)
from rhs_packaging.tarball.logger import _log_debug, _log_info
from rhs_packaging.utils.shell import run_command

load_dotenv()
TAR_BIN = os.getenv("TAR_BIN", "tar")


class Archiver(Protocol):
    """Compresses a staging directory into an archive."""

    def create(
        self, archive_path: Path, staging_dir: Path, cwd: Path, excludes: Sequence[str]
    ) -> List[Path]:
        """Create archive_path from staging_dir and return the archive files produced."""
        ...


class Mover(Protocol):
    """Relocates a finished archive."""

    def move(self, src: Path, target_dir: Path) -> Path:
        """Move src into target_dir and return the new path. Raises OSError on failure."""
        ...


class TarArchiver:
    """Runs `tar czf <archive> --exclude ... <staging-dir>` in the working directory."""

    def __init__(self, tar_bin: str = TAR_BIN):
        self.tar_bin = tar_bin

    def create(
        self, archive_path: Path, staging_dir: Path, cwd: Path, excludes: Sequence[str]
    ) -> List[Path]:
        cmd = [self.tar_bin, "czf", archive_path.name]
        for pattern in excludes:
            cmd.extend(["--exclude", pattern])
        cmd.append(staging_dir.name)

        result = run_command(cmd, cwd=cwd)
        if not result.ok:
            raise ArchiveCreationError(
                "creation of tarball failed.", command=result.args, stderr=result.stderr
            )

        return [p for p in cwd.glob(archive_path.name) if p.is_file()]


class ShutilMover:
    """Moves files with shutil.move, replacing an existing file of the same name."""

    def move(self, src: Path, target_dir: Path) -> Path:
        destination = target_dir / src.name
        # shutil.move would nest the file inside a directory of the same name
        if destination.is_dir():
            raise IsADirectoryError(f"{destination} is a directory")
        shutil.move(str(src), str(destination))
        return destination


def archive_prefix(package_name: str, version: str) -> str:
    """Name of both the staging directory and the archive stem."""
    return f"{package_name}-{version}"


def archive_name(package_name: str, version: str) -> str:
    return f"{archive_prefix(package_name, version)}.tar.gz"


def stage_files(files: Iterable[Path], source_dir: Path, staging_dir: Path) -> None:
    """
    Copy files into a fresh staging directory, keeping their relative parents.

    Any leftover staging directory from an earlier run is removed first.

    Args:
        files: Paths relative to source_dir
        source_dir: Directory the files are copied from
        staging_dir: Directory to create and fill

    Raises:
        StagingError: If the staging directory cannot be created or a copy fails
    """
    try:
        if staging_dir.exists():
            shutil.rmtree(staging_dir)
        staging_dir.mkdir(parents=True)

        for rel_path in files:
            destination = staging_dir / rel_path
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_dir / rel_path, destination)
    except OSError as e:
        raise StagingError(f"could not stage files in {staging_dir}: {e}") from e


def verify_single_archive(produced: Iterable[Path], expected: Path) -> Path:
    """
    Check that the archive utility left exactly one archive, at the expected path.

    Raises:
        ArchiveCountError: If zero or several archives exist, or the one found is elsewhere
    """
    found = list(dict.fromkeys(Path(p) for p in produced if Path(p).is_file()))
    if len(found) != 1 or found[0].resolve() != expected.resolve():
        raise ArchiveCountError(expected=expected, found=found)
    return expected


def build_tarball(
    config: PackageConfig,
    version: str,
    files: List[Path],
    archiver: Archiver,
    mover: Mover,
    workdir: Path,
) -> Path:
    """
    Stage, archive, verify and relocate.

    The staging directory lives in workdir and is removed whether or not the
    archive step succeeds. The archive is moved to config.target_dir unless
    that is workdir.

    Args:
        config: Run configuration
        version: Normalized package version
        files: Paths relative to config.source_dir
        archiver: Archive utility
        mover: File mover
        workdir: Directory where staging and archiving happen

    Returns:
        Final path of the tarball

    Raises:
        ArchiveCreationError: If the archive utility fails
        StagingError: If the files cannot be staged
        ArchiveCountError: If the build did not produce exactly one archive
        ArchiveRelocationError: If the tarball cannot be moved to the target directory
    """
    workdir = Path(workdir).resolve()
    prefix = archive_prefix(config.manifest.package_name, version)
    archive_path = workdir / archive_name(config.manifest.package_name, version)
    staging_dir = workdir / prefix

    _log_info(f"Creating {archive_path.name} tarball in {config.target_dir}")
    if archive_path.exists():
        _log_debug(f"Removing previous {archive_path}")
        archive_path.unlink()

    try:
        stage_files(files, config.source_dir, staging_dir)
        _log_debug(f"Staged {len(files)} files in {staging_dir}")
        produced = archiver.create(
            archive_path, staging_dir, workdir, config.manifest.exclude_patterns
        )
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

    verify_single_archive(produced, archive_path)

    if config.target_dir.resolve() == workdir:
        return archive_path

    try:
        final_path = mover.move(archive_path, config.target_dir)
    except OSError as e:
        # Nothing is left behind in workdir when the tarball cannot reach the target
        archive_path.unlink(missing_ok=True)
        raise ArchiveRelocationError(archive_path, config.target_dir, str(e)) from e
    _log_debug(f"Moved {archive_path.name} to {config.target_dir}")
    return final_path
