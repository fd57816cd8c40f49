#!/usr/bin/env python3
"""
Documentation Conversion CLI

Converts the office-format install guide to PDF before packaging.

Examples:\n

    convert-doc docs/Install_Guide.odt                  # PDF next to the document

    convert-doc docs/Install_Guide.odt --outdir .       # PDF in the current directory
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from rhs_packaging.delivery.converter import SOFFICE_BIN, convert_to_pdf
from rhs_packaging.delivery.logger import setup_delivery_logger
from rhs_packaging.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Convert an office document to PDF with LibreOffice",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    document: Annotated[Path, typer.Argument(help="Document to convert (.odt, .docx, ...)")],
    outdir: Annotated[
        Optional[Path],
        typer.Option("--outdir", "-o", help="Directory for the PDF (default: next to the document)"),
    ] = None,
):
    """Convert DOCUMENT to PDF."""
    log_file = setup_delivery_logger(
        LOGS_PATH / f"convert_{now()}",
        action="convert",
        subject=document,
        tool=SOFFICE_BIN,
        destination=str(outdir) if outdir else None,
    )

    result = convert_to_pdf(document, output_dir=outdir)

    typer.echo("")
    if result.success:
        typer.secho("✓ Conversion succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {result.pdf_path}")
    else:
        typer.secho("✗ Conversion failed", fg=typer.colors.RED, bold=True, err=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED, err=True)
    typer.echo(f"  Log: {log_file}")

    raise typer.Exit(code=0 if result.success else 1)


if __name__ == "__main__":
    app()
