"""Certificate issuing endpoint.

Failures answer with ``{"message": ...}`` in Spanish, the language of the
request form, and a status code that tells the caller whether to fix the
input (400), check the credentials (401) or retry later (500).
"""

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from starlette import status

from core.roster import Roster
from schemas import CertificateRequest, MessageResponse
from services.certificates_service import (
    CertificateRenderError,
    CertificateRequestRejected,
    issue_certificate,
)
from services.credentials_service import RejectionReason

router = APIRouter(prefix="/api", tags=["certificates"])

MISSING_FIELDS_MESSAGE = "Debe ingresar su correo electrónico y la clave de acceso."
INVALID_CREDENTIALS_MESSAGE = "Correo electrónico o clave de acceso incorrectos."
ROSTER_UNAVAILABLE_MESSAGE = (
    "No se pudo consultar la lista de participantes. "
    "Intente nuevamente más tarde."
)
RENDER_FAILED_MESSAGE = (
    "No se pudo generar el certificado. Intente nuevamente más tarde."
)

_REJECTION_RESPONSES: dict[RejectionReason, tuple[int, str]] = {
    RejectionReason.MISSING_FIELDS: (
        status.HTTP_400_BAD_REQUEST,
        MISSING_FIELDS_MESSAGE,
    ),
    RejectionReason.INVALID_CREDENTIALS: (
        status.HTTP_401_UNAUTHORIZED,
        INVALID_CREDENTIALS_MESSAGE,
    ),
    RejectionReason.SOURCE_UNAVAILABLE: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ROSTER_UNAVAILABLE_MESSAGE,
    ),
}


def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


@router.post(
    "/certificado",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF certificate"},
        400: {"model": MessageResponse, "description": "Email or access key missing"},
        401: {"model": MessageResponse, "description": "Credentials not in roster"},
        500: {
            "model": MessageResponse,
            "description": "Roster unavailable or PDF generation failed",
        },
    },
)
async def issue_certificate_endpoint(
    body: CertificateRequest,
    roster: Roster,
) -> Response:
    """Issue the participation certificate for a registered email and access key."""
    try:
        document = await issue_certificate(body.email, body.access_key, roster)
    except CertificateRequestRejected as e:
        status_code, message = _REJECTION_RESPONSES[e.reason]
        return _message_response(status_code, message)
    except CertificateRenderError:
        return _message_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, RENDER_FAILED_MESSAGE
        )

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": document.content_disposition,
            "Cache-Control": "no-store",
        },
    )
