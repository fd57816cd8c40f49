"""
Delivery Context

Responsibilities:
- Converts the office-format documentation to PDF before packaging
- Publishes the finished tarball to object storage

Both steps delegate to external tools (soffice, aws) invoked as opaque commands.

Owns: invocation and result reporting of external converters and uploaders
Never: Builds tarballs or decides what goes into them
"""

from rhs_packaging.delivery.converter import ConversionResult, convert_to_pdf
from rhs_packaging.delivery.publisher import PublishResult, publish_tarball

__all__ = ["ConversionResult", "PublishResult", "convert_to_pdf", "publish_tarball"]
