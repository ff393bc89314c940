"""Certificate rendering - SVG and PDF generation.

This module handles the visual/presentation aspects of certificates:
- SVG page template (A4 portrait, every line centered)
- PDF conversion through CairoSVG

Credential checks live in services/credentials_service.py; this module only
turns a participant name into a finished document.
"""

import html
import io

CERTIFICATE_TITLE = "Certificado de Participación"
INTRO_TEXT = "Se otorga el presente certificado a:"
DURATION_LINES = (
    "Por su participación en la MasterClass,",
    "con una duración de 3 horas académicas.",
)
CLOSING_TEXT = "¡Gracias por acompañarnos!"

# A4 in PostScript points; CairoSVG maps 1 user unit to 1pt for PDF output.
PAGE_WIDTH = 595
PAGE_HEIGHT = 842

NAME_FONT_SIZE = 30
NAME_MIN_FONT_SIZE = 16
# Roughly how many characters of a bold serif line fit between the margins
# at NAME_FONT_SIZE.
_NAME_FULL_SIZE_CHARS = 28

NAME_BASELINE_Y = 400
NAME_UNDERLINE_Y = NAME_BASELINE_Y + 7
# Average advance of a bold serif glyph, as a fraction of the font size.
_NAME_CHAR_WIDTH = 0.55
# Underline never runs into the inner frame (x=38).
_UNDERLINE_MAX_WIDTH = PAGE_WIDTH - 120


class CertificateRenderError(Exception):
    """Raised when the PDF could not be produced in full."""


def name_font_size(recipient_name: str) -> int:
    """Font size for the name line, shrunk for long names so it fits the page."""
    length = len(recipient_name)
    if length <= _NAME_FULL_SIZE_CHARS:
        return NAME_FONT_SIZE
    scaled = NAME_FONT_SIZE * _NAME_FULL_SIZE_CHARS // length
    return max(NAME_MIN_FONT_SIZE, scaled)


def name_underline_width(recipient_name: str) -> float:
    """Approximate rendered width of the name line, used to size its underline.

    CairoSVG ignores text-decoration, so the underline is drawn as a line.
    """
    font_size = name_font_size(recipient_name)
    estimate = len(recipient_name) * font_size * _NAME_CHAR_WIDTH
    return round(min(estimate, _UNDERLINE_MAX_WIDTH), 1)


def generate_certificate_svg(recipient_name: str) -> str:
    """Generate the SVG page for a participation certificate.

    Args:
        recipient_name: Display-ready participant name

    Returns:
        SVG content as a string
    """
    safe_name = html.escape(recipient_name, quote=True)
    center = PAGE_WIDTH // 2
    underline_half = name_underline_width(recipient_name) / 2

    # Helvetica and Times are PDF base-14 fonts, available in every viewer.
    sans_font = "Helvetica, Arial, sans-serif"
    serif_font = "Times, 'Times New Roman', Georgia, serif"

    svg = f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {PAGE_WIDTH} {PAGE_HEIGHT}" width="{PAGE_WIDTH}pt" height="{PAGE_HEIGHT}pt">
  <rect width="{PAGE_WIDTH}" height="{PAGE_HEIGHT}" fill="#ffffff"/>

  <!-- Double frame -->
  <rect x="28" y="28" width="{PAGE_WIDTH - 56}" height="{PAGE_HEIGHT - 56}" fill="none" stroke="#1f3a5f" stroke-width="3"/>
  <rect x="38" y="38" width="{PAGE_WIDTH - 76}" height="{PAGE_HEIGHT - 76}" fill="none" stroke="#c9a227" stroke-width="1"/>

  <text x="{center}" y="210" font-family="{serif_font}" font-size="32" fill="#1f3a5f" text-anchor="middle" font-weight="bold">{CERTIFICATE_TITLE}</text>

  <line x1="{center - 120}" y1="235" x2="{center + 120}" y2="235" stroke="#c9a227" stroke-width="1.5"/>

  <text x="{center}" y="320" font-family="{sans_font}" font-size="15" fill="#374151" text-anchor="middle">{INTRO_TEXT}</text>

  <text x="{center}" y="{NAME_BASELINE_Y}" font-family="{serif_font}" font-size="{name_font_size(recipient_name)}" fill="#111827" text-anchor="middle" font-weight="bold">{safe_name}</text>
  <line x1="{center - underline_half}" y1="{NAME_UNDERLINE_Y}" x2="{center + underline_half}" y2="{NAME_UNDERLINE_Y}" stroke="#111827" stroke-width="1.2"/>

  <text x="{center}" y="480" font-family="{sans_font}" font-size="15" fill="#374151" text-anchor="middle">{DURATION_LINES[0]}</text>
  <text x="{center}" y="502" font-family="{sans_font}" font-size="15" fill="#374151" text-anchor="middle">{DURATION_LINES[1]}</text>

  <text x="{center}" y="600" font-family="{serif_font}" font-size="16" fill="#1f3a5f" text-anchor="middle" font-style="italic">{CLOSING_TEXT}</text>
</svg>"""

    return svg


def svg_to_pdf(svg_content: str) -> bytes:
    """Convert SVG string to PDF bytes using CairoSVG.

    The document is written to a buffer owned by this call and returned only
    once CairoSVG has finished the file.

    Args:
        svg_content: SVG string to convert

    Returns:
        PDF content as bytes

    Raises:
        CertificateRenderError: If the Cairo library is missing, conversion
            fails, or the output is not a complete PDF
    """
    try:
        import cairosvg
    except ImportError as e:
        raise CertificateRenderError("CairoSVG is not installed") from e
    except OSError as e:
        if "cairo" in str(e).lower():
            raise CertificateRenderError(
                "PDF generation requires the Cairo library. "
                "On macOS: brew install cairo. "
                "On Ubuntu/Debian: apt-get install libcairo2-dev. "
                "On Alpine: apk add cairo-dev."
            ) from e
        raise CertificateRenderError(f"Could not load CairoSVG: {e}") from e

    buffer = io.BytesIO()
    try:
        cairosvg.svg2pdf(bytestring=svg_content.encode("utf-8"), write_to=buffer)
    except Exception as e:
        raise CertificateRenderError(f"CairoSVG conversion failed: {e}") from e

    pdf_bytes = buffer.getvalue()
    if not pdf_bytes.startswith(b"%PDF-") or b"%%EOF" not in pdf_bytes[-64:]:
        raise CertificateRenderError(
            f"CairoSVG produced an incomplete PDF ({len(pdf_bytes)} bytes)"
        )
    return pdf_bytes
