"""
Documentation Conversion Module

Converts the office-format install guide to PDF with LibreOffice before it is
packaged. LibreOffice does the conversion; this module only invokes it and
reports the result.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from rhs_packaging.delivery.logger import _log_error, _log_info, _log_success, log_command_output
from rhs_packaging.utils.event_logging import log_packaging_event
from rhs_packaging.utils.shell import run_command

load_dotenv()
SOFFICE_BIN = os.getenv("SOFFICE_BIN", "soffice")


@dataclass
class ConversionResult:
    """
    Result of a document conversion.

    Attributes:
        success: Whether the PDF was produced
        pdf_path: Path to generated PDF (None if failed)
        stdout: Standard output from the converter
        stderr: Standard error from the converter
        errors: Error messages
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)


def convert_to_pdf(
    document: Path,
    output_dir: Optional[Path] = None,
    converter_bin: str = SOFFICE_BIN,
) -> ConversionResult:
    """
    Convert an office document to PDF.

    Args:
        document: Source document (.odt, .docx, ...)
        output_dir: Directory for the PDF (default: the document's directory, must exist)
        converter_bin: LibreOffice executable

    Returns:
        ConversionResult with success status and converter output
    """
    document = Path(document).resolve()
    if not document.is_file():
        return ConversionResult(success=False, errors=[f"Document not found: {document}"])

    output_dir = Path(output_dir).resolve() if output_dir else document.parent
    if not output_dir.is_dir():
        return ConversionResult(
            success=False, errors=[f"Output directory not found: {output_dir}"]
        )

    # Remove a stale PDF so success is judged on this run's output only
    pdf_path = output_dir / f"{document.stem}.pdf"
    if pdf_path.exists():
        pdf_path.unlink()

    _log_info(f"Converting {document.name} to PDF in {output_dir}")
    result = run_command(
        [converter_bin, "--headless", "--convert-to", "pdf", "--outdir", output_dir, document]
    )
    log_command_output("soffice", result.stdout, result.stderr)

    errors = []
    if not result.ok:
        errors.append(f"{converter_bin} exited with status {result.returncode}")
    if not pdf_path.exists():
        errors.append("PDF file was not generated")

    success = not errors
    if success:
        _log_success(f"PDF saved to: {pdf_path}")
    else:
        for err in errors:
            _log_error(err)

    log_packaging_event(
        event_type="conversion_completed" if success else "conversion_failed",
        package=document.stem,
        source="delivery",
        document=str(document),
        errors=errors,
    )

    return ConversionResult(
        success=success,
        pdf_path=pdf_path if success else None,
        stdout=result.stdout,
        stderr=result.stderr,
        errors=errors,
    )
