"""
Packaging Configuration

Builds the immutable PackageConfig that every later step receives, and loads
the package manifest (package name, file patterns, excludes) from YAML.

Examples:
    >>> manifest = load_manifest()
    >>> config = build_config(source="/src/rhs", dirs=["conf", "data"], manifest=manifest)
    >>> config.extra_dirs
    ('bin', 'conf', 'data')
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from rhs_packaging.tarball.exceptions import ConfigurationError

load_dotenv()
DEFAULT_MANIFEST_PATH = Path(__file__).resolve().parent.parent / "configs" / "manifest.yaml"
PACKAGING_MANIFEST = os.getenv("PACKAGING_MANIFEST")


@dataclass(frozen=True)
class Manifest:
    """
    What goes into the tarball.

    Attributes:
        package_name: Archive name prefix (e.g., "rhs-hadoop-install")
        top_level_patterns: Glob patterns matched directly in the source directory
        mandatory_dir: Extra directory that is always packaged
        exclude_patterns: Names excluded by the archive utility wherever they appear
    """

    package_name: str
    top_level_patterns: Tuple[str, ...]
    mandatory_dir: str
    exclude_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PackageConfig:
    """
    Effective configuration for one packaging run.

    Constructed once by build_config() and passed explicitly to every step.

    Attributes:
        source_dir: Directory holding the files to package
        target_dir: Directory that receives the finished tarball
        pkg_version: Explicit version override, or None to ask git
        extra_dirs: Directories whose top-level files are packaged (mandatory dir first)
        manifest: Package name, file patterns and excludes
    """

    source_dir: Path
    target_dir: Path
    pkg_version: Optional[str]
    extra_dirs: Tuple[str, ...]
    manifest: Manifest = field(repr=False)

    def resolve_dir(self, directory: str) -> Path:
        """Return an extra directory as an absolute path (relative ones live under source_dir)."""
        path = Path(directory)
        return path if path.is_absolute() else self.source_dir / path


def load_manifest(config_path: Optional[Path] = None) -> Manifest:
    """
    Load the package manifest.

    The bundled manifest supplies defaults; an override file (argument, or the
    PACKAGING_MANIFEST env variable) is merged on top of it. Lists are replaced,
    not appended.

    Args:
        config_path: Optional override manifest

    Returns:
        Manifest

    Raises:
        ConfigurationError: If the override file is missing or malformed
    """
    if config_path is None and PACKAGING_MANIFEST:
        config_path = Path(PACKAGING_MANIFEST)

    conf = OmegaConf.load(DEFAULT_MANIFEST_PATH)
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigurationError(f"manifest file \"{config_path}\" does not exist")
        try:
            conf = OmegaConf.merge(conf, OmegaConf.load(config_path))
        except (OmegaConfBaseException, ValueError) as e:
            raise ConfigurationError(f"manifest file \"{config_path}\" is invalid: {e}") from e

    data = OmegaConf.to_container(conf, resolve=True)

    package_name = str(data.get("package_name") or "").strip()
    if not package_name:
        raise ConfigurationError("manifest must define a non-empty package_name")

    return Manifest(
        package_name=package_name,
        top_level_patterns=tuple(str(p) for p in data.get("top_level_patterns") or []),
        mandatory_dir=_normalize_dir(str(data.get("mandatory_dir") or "bin")),
        exclude_patterns=tuple(str(p) for p in data.get("exclude_patterns") or []),
    )


def parse_dirs(values: Optional[Iterable[str]]) -> List[str]:
    """
    Split --dirs values on commas.

    Accepts the option once ("a,b") or several times (["a", "b,c"]).
    Empty entries and surrounding whitespace are dropped.
    """
    if not values:
        return []
    if isinstance(values, str):
        values = [values]

    dirs = []
    for value in values:
        dirs.extend(part.strip() for part in value.split(",") if part.strip())
    return dirs


def _normalize_dir(directory: str) -> str:
    # "bin/" and "./bin" name the same directory as "bin"
    return Path(directory).as_posix()


def merge_extra_dirs(mandatory_dir: str, user_dirs: Iterable[str]) -> Tuple[str, ...]:
    """
    Merge the mandatory directory into the user-supplied list.

    The mandatory directory comes first; duplicates are removed and the user's
    order is otherwise preserved.
    """
    merged = []
    for directory in [mandatory_dir, *user_dirs]:
        normalized = _normalize_dir(directory)
        if normalized not in merged:
            merged.append(normalized)
    return tuple(merged)


def build_config(
    source: Optional[Path] = None,
    target_dir: Optional[Path] = None,
    pkg_version: Optional[str] = None,
    dirs: Optional[Iterable[str]] = None,
    manifest: Optional[Manifest] = None,
) -> PackageConfig:
    """
    Apply defaults and build the run configuration.

    Defaults: source is the current working directory, target is the resolved
    source directory. No validation happens here; see validate_config().

    Args:
        source: Source directory (default: cwd)
        target_dir: Output directory (default: source)
        pkg_version: Explicit version override
        dirs: Raw --dirs values (comma-separated strings)
        manifest: Package manifest (default: load_manifest())

    Returns:
        PackageConfig
    """
    if manifest is None:
        manifest = load_manifest()

    source_dir = Path(source).resolve() if source else Path.cwd().resolve()
    target = Path(target_dir).resolve() if target_dir else source_dir

    if pkg_version is not None and not pkg_version.strip():
        pkg_version = None

    return PackageConfig(
        source_dir=source_dir,
        target_dir=target,
        pkg_version=pkg_version,
        extra_dirs=merge_extra_dirs(manifest.mandatory_dir, parse_dirs(dirs)),
        manifest=manifest,
    )


def validate_extra_dirs(config: PackageConfig) -> None:
    """
    Check that every extra directory exists inside the source directory.

    Raises:
        ConfigurationError: On the first missing or out-of-tree directory
    """
    for directory in config.extra_dirs:
        path = config.resolve_dir(directory)
        if not path.is_dir():
            raise ConfigurationError(
                f"extra directory \"{directory}\" does not exist in {config.source_dir}"
            )
        try:
            path.resolve().relative_to(config.source_dir)
        except ValueError:
            raise ConfigurationError(
                f"extra directory \"{directory}\" is outside the source directory "
                f"{config.source_dir}"
            )


def validate_config(config: PackageConfig) -> None:
    """
    Check that the source, target and extra directories exist.

    The target directory is never created implicitly.

    Raises:
        ConfigurationError: On the first missing directory
    """
    if not config.source_dir.is_dir():
        raise ConfigurationError(f"\"{config.source_dir}\" source directory missing.")
    if not config.target_dir.is_dir():
        raise ConfigurationError(f"\"{config.target_dir}\" target directory missing.")
    validate_extra_dirs(config)
