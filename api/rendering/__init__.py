"""Rendering module for presentation concerns.

This module handles all presentation/rendering logic:
- Certificate SVG generation
- PDF conversion

This separates presentation concerns from credential checks in services.
"""

from rendering.certificates import (
    CertificateRenderError,
    generate_certificate_svg,
    svg_to_pdf,
)

__all__ = [
    "CertificateRenderError",
    "generate_certificate_svg",
    "svg_to_pdf",
]
