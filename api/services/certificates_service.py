"""Certificate issuing for MasterClass participants.

This module handles certificate business logic:
- Credential checking (delegating to credentials_service)
- PDF generation (delegating to the rendering module)
- Outcome logging

Routes should call issue_certificate() and map its exceptions to responses.
"""

import asyncio

from core.config import get_settings
from core.logger import get_logger
from core.telemetry import annotate_request
from rendering.certificates import CertificateRenderError
from rendering.certificates import (
    generate_certificate_svg as _render_certificate_svg,
)
from rendering.certificates import (
    svg_to_pdf as _svg_to_pdf,
)
from repositories.roster_repository import RosterSource
from schemas import CertificateDocument, ParticipantRecord
from services.credentials_service import (
    Authorized,
    RejectionReason,
    validate_credentials,
)

logger = get_logger(__name__)

__all__ = [
    "CertificateRenderError",
    "CertificateRequestRejected",
    "issue_certificate",
    "render_certificate",
]


class CertificateRequestRejected(Exception):
    """Raised when the credentials check does not authorize the request."""

    def __init__(self, reason: RejectionReason) -> None:
        self.reason = reason
        super().__init__(f"Certificate request rejected: {reason}")


def render_certificate(participant: ParticipantRecord) -> CertificateDocument:
    """Render the participation certificate for an authorized participant.

    Depends only on the participant's name, so repeated calls yield the same
    visible document.

    Raises:
        CertificateRenderError: If the PDF could not be produced in full
    """
    svg_content = _render_certificate_svg(participant.name)
    pdf_content = _svg_to_pdf(svg_content)
    return CertificateDocument(
        content=pdf_content,
        filename=get_settings().certificate_filename,
    )


async def issue_certificate(
    email: str | None,
    access_key: str | None,
    roster_source: RosterSource,
) -> CertificateDocument:
    """Validate credentials and render the certificate.

    Runs both steps in a thread pool: the roster read is blocking I/O and
    CairoSVG rendering is CPU-bound.

    Args:
        email: Email as typed by the caller
        access_key: Access key as typed by the caller
        roster_source: Where participant records come from

    Returns:
        The finished certificate document

    Raises:
        CertificateRequestRejected: If validation does not authorize the pair
        CertificateRenderError: If rendering fails
    """
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(
        None, validate_credentials, email, access_key, roster_source
    )

    if not isinstance(result, Authorized):
        annotate_request(certificate_outcome=str(result.reason))
        logger.info("certificate.rejected", reason=str(result.reason))
        raise CertificateRequestRejected(result.reason)

    participant = result.participant
    try:
        document = await loop.run_in_executor(None, render_certificate, participant)
    except CertificateRenderError:
        annotate_request(certificate_outcome="render_failed")
        logger.exception("certificate.render.failed", email=participant.email)
        raise

    annotate_request(certificate_outcome="issued")
    logger.info(
        "certificate.issued",
        email=participant.email,
        size_bytes=len(document.content),
    )
    return document
