#!/usr/bin/env python3
"""
Tarball Publishing CLI

Uploads a release tarball to S3-compatible object storage.

Examples:\n

    publish-tarball rhs-hadoop-install-2_0.tar.gz --destination s3://releases/rhs

    PUBLISH_DESTINATION=s3://releases/rhs publish-tarball rhs-hadoop-install-2_0.tar.gz
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from rhs_packaging.delivery.logger import setup_delivery_logger
from rhs_packaging.delivery.publisher import AWS_CLI, PUBLISH_DESTINATION, publish_tarball
from rhs_packaging.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Upload a release tarball to object storage",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    tarball: Annotated[Path, typer.Argument(help="Tarball produced by mk-tarball")],
    destination: Annotated[
        Optional[str],
        typer.Option(
            "--destination",
            "-d",
            help="s3:// prefix to upload to (default: PUBLISH_DESTINATION env variable)",
        ),
    ] = None,
):
    """Upload TARBALL to object storage."""
    destination = destination or PUBLISH_DESTINATION
    log_file = setup_delivery_logger(
        LOGS_PATH / f"publish_{now()}",
        action="publish",
        subject=tarball,
        tool=AWS_CLI,
        destination=destination,
    )

    result = publish_tarball(tarball, destination=destination)

    typer.echo("")
    if result.success:
        typer.secho("✓ Upload succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  URL: {result.url}")
    else:
        typer.secho("✗ Upload failed", fg=typer.colors.RED, bold=True, err=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED, err=True)
    typer.echo(f"  Log: {log_file}")

    raise typer.Exit(code=0 if result.success else 1)


if __name__ == "__main__":
    app()
