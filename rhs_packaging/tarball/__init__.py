"""
Tarball Context

Responsibilities:
- Builds the run configuration (defaults, mandatory directory, validation)
- Resolves the package version from an override or the latest git tag
- Collects the fixed top-level files and the shallow contents of extra directories
- Stages, archives, verifies and relocates the release tarball

Owns: release tarball layout and naming
Never: Converts documents or uploads artifacts
"""

from rhs_packaging.tarball.builder import TarballResult, package_release
from rhs_packaging.tarball.config import PackageConfig, build_config, load_manifest

__all__ = ["PackageConfig", "TarballResult", "build_config", "load_manifest", "package_release"]
