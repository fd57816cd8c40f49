#!/usr/bin/env python3
"""
Release Tarball CLI

Creates the rhs-hadoop-install tarball package. There are no required parameters.

The tarball contains the rhs-hadoop-install-<version> directory, which holds:
    - *.sh: the main scripts
    - VERSION and README.md
    - bin/: utility scripts
    - plus the top-level files of any directory given with --dirs

Examples:\n

    mk-tarball                                      # Package cwd, version from latest git tag

    mk-tarball --pkg-version 2.0                    # Explicit version -> ...-2_0.tar.gz

    mk-tarball --source ~/rhs --target-dir /tmp     # Package elsewhere, write tarball to /tmp

    mk-tarball --dirs conf,data                     # Also include conf/ and data/
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from rhs_packaging.tarball.builder import TarballResult, package_release
from rhs_packaging.tarball.config import build_config, load_manifest
from rhs_packaging.tarball.exceptions import PackagingError
from rhs_packaging.tarball.logger import log_build_result, setup_tarball_logger
from rhs_packaging.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Create the rhs-hadoop-install release tarball",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    source: Annotated[
        Optional[Path],
        typer.Option(
            "--source",
            help="Directory containing the files to package, normally a git clone. "
            "Default is the current working directory.",
        ),
    ] = None,
    target_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--target-dir",
            help="The produced tarball will reside in this directory. "
            "Default is the SOURCE directory.",
        ),
    ] = None,
    pkg_version: Annotated[
        Optional[str],
        typer.Option(
            "--pkg-version",
            help="Version string used in the tarball filename ('.' becomes '_'). "
            "Default is the most recent git tag in the SOURCE directory.",
        ),
    ] = None,
    dirs: Annotated[
        Optional[List[str]],
        typer.Option(
            "--dirs",
            help="Comma-separated directory names whose files are included. "
            "Collection is *not* recursive: sub-dirs are ignored. bin/ is always included.",
        ),
    ] = None,
    manifest: Annotated[
        Optional[Path],
        typer.Option(
            "--manifest",
            help="YAML file overriding the package name, file patterns or excludes",
        ),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Directory for tarball.log (default: LOGS_PATH/tarball_<timestamp>)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List every packaged file"),
    ] = False,
):
    """
    Create the rhs-hadoop-install tarball package.

    Examples:\n

        $ mk-tarball --pkg-version 2.0

        $ mk-tarball --source ~/rhs --target-dir /srv/release --dirs conf,data
    """
    if log_dir is None:
        log_dir = LOGS_PATH / f"tarball_{now()}"
    log_file = setup_tarball_logger(
        log_dir,
        source=source,
        target_dir=target_dir,
        pkg_version=pkg_version,
        dirs=dirs,
        manifest=manifest,
        verbose=verbose,
    )

    try:
        config = build_config(
            source=source,
            target_dir=target_dir,
            pkg_version=pkg_version,
            dirs=dirs,
            manifest=load_manifest(manifest),
        )
        result = package_release(config, verbose=verbose)
    except PackagingError as e:
        log_build_result(TarballResult(success=False, errors=[str(e)]), verbose=verbose)
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}", err=True)
        raise typer.Exit(code=1)

    log_build_result(result, verbose=verbose)
    typer.echo("")
    typer.secho(f"✓ Created {result.tarball_path.name}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Tarball: {result.tarball_path}")
    typer.echo(f"  Files:   {len(result.files)}")
    typer.echo(f"  Log:     {log_file}")


if __name__ == "__main__":
    app()
