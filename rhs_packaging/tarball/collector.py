"""
File Collection

Builds the flat list of files to package: the fixed top-level patterns from the
source directory plus the files directly inside each extra directory. Collection
inside a directory is never recursive; sub-directories are ignored.

All returned paths are relative to the source directory.
"""

from pathlib import Path
from typing import List

from rhs_packaging.tarball.config import PackageConfig, validate_extra_dirs
from rhs_packaging.tarball.logger import _log_debug, _log_warning


def _is_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in "*?[")


def _is_regular_file(path: Path) -> bool:
    # Same selection as `find -type f`: symlinks are not regular files
    return path.is_file() and not path.is_symlink()


def collect_top_level(source_dir: Path, patterns) -> List[Path]:
    """
    Match each pattern directly inside source_dir.

    Matching follows the shell: symlinks to files are included, and a pattern
    only matches dot-files when it starts with a dot itself.

    Missing literal names (e.g. VERSION) are reported as warnings; a glob that
    matches nothing is silently empty.
    """
    files = []
    for pattern in patterns:
        matches = [
            p
            for p in source_dir.glob(pattern)
            if p.is_file() and (pattern.startswith(".") or not p.name.startswith("."))
        ]
        if not matches and not _is_glob(pattern):
            _log_warning(f"{pattern} not found in {source_dir}")
        files.extend(p.relative_to(source_dir) for p in matches)
    return files


def collect_directory(source_dir: Path, directory: Path) -> List[Path]:
    """Return the regular files directly inside directory (one level only)."""
    return [
        p.resolve().relative_to(source_dir)
        for p in directory.iterdir()
        if _is_regular_file(p)
    ]


def collect_files(config: PackageConfig) -> List[Path]:
    """
    Collect every file that belongs in the tarball.

    Extra directories are validated before any collection work starts.

    Args:
        config: Run configuration

    Returns:
        De-duplicated list of paths relative to config.source_dir. Order is
        not significant.

    Raises:
        ConfigurationError: If an extra directory is missing
    """
    validate_extra_dirs(config)

    files = collect_top_level(config.source_dir, config.manifest.top_level_patterns)
    for directory in config.extra_dirs:
        dir_files = collect_directory(config.source_dir, config.resolve_dir(directory))
        _log_debug(f"{directory}: {len(dir_files)} files")
        files.extend(dir_files)

    # Drop duplicates (e.g. a pattern and a directory naming the same file)
    return list(dict.fromkeys(files))
