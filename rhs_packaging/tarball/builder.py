"""
Release Tarball Builder

Runs the packaging steps in order:

    resolve version -> validate directories -> collect files -> stage -> archive
    -> verify -> relocate

Packaging is all-or-nothing: the first failure stops the run and is raised.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rhs_packaging.tarball.archiver import (
    Archiver,
    Mover,
    ShutilMover,
    TarArchiver,
    archive_prefix,
    build_tarball,
)
from rhs_packaging.tarball.collector import collect_files
from rhs_packaging.tarball.config import PackageConfig, validate_config
from rhs_packaging.tarball.exceptions import PackagingError
from rhs_packaging.tarball.logger import log_build_start, log_collected_files
from rhs_packaging.tarball.versioner import GitVersioner, Versioner, resolve_version
from rhs_packaging.utils.event_logging import log_packaging_event


@dataclass
class TarballResult:
    """
    Result of a packaging run.

    Attributes:
        success: Whether the tarball was produced
        tarball_path: Final location of the tarball (None if failed)
        version: Normalized package version (None if it could not be resolved)
        files: Files packaged, relative to the source directory
        errors: Error messages
        elapsed_s: Wall-clock duration of the run
    """

    success: bool
    tarball_path: Optional[Path] = None
    version: Optional[str] = None
    files: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    elapsed_s: float = 0.0


def package_release(
    config: PackageConfig,
    versioner: Optional[Versioner] = None,
    archiver: Optional[Archiver] = None,
    mover: Optional[Mover] = None,
    workdir: Optional[Path] = None,
    verbose: bool = False,
) -> TarballResult:
    """
    Build the release tarball described by config.

    Args:
        config: Run configuration from build_config()
        versioner: Tag lookup (default: GitVersioner)
        archiver: Archive utility (default: TarArchiver)
        mover: File mover (default: ShutilMover)
        workdir: Directory for staging and archiving (default: cwd)
        verbose: List every collected file at INFO level

    Returns:
        TarballResult for a successful run

    Raises:
        PackagingError: Any configuration or build failure
    """
    versioner = versioner or GitVersioner()
    archiver = archiver or TarArchiver()
    mover = mover or ShutilMover()
    workdir = Path(workdir).resolve() if workdir else Path.cwd().resolve()
    package_name = config.manifest.package_name

    start_time = time.time()
    log_build_start(config, workdir)

    version = None
    try:
        version = resolve_version(config.pkg_version, config.source_dir, versioner)
        log_packaging_event(
            event_type="build_started",
            package=archive_prefix(package_name, version),
            source="tarball",
            source_dir=str(config.source_dir),
            target_dir=str(config.target_dir),
            extra_dirs=list(config.extra_dirs),
        )

        validate_config(config)
        files = collect_files(config)
        log_collected_files(files, verbose=verbose)

        tarball_path = build_tarball(config, version, files, archiver, mover, workdir)
    except PackagingError as e:
        log_packaging_event(
            event_type="build_failed",
            package=archive_prefix(package_name, version) if version else package_name,
            source="tarball",
            error=str(e),
            elapsed_s=round(time.time() - start_time, 2),
        )
        raise

    elapsed_s = time.time() - start_time
    log_packaging_event(
        event_type="build_completed",
        package=archive_prefix(package_name, version),
        source="tarball",
        tarball=str(tarball_path),
        file_count=len(files),
        elapsed_s=round(elapsed_s, 2),
    )

    return TarballResult(
        success=True,
        tarball_path=tarball_path,
        version=version,
        files=files,
        elapsed_s=elapsed_s,
    )
