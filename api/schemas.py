"""Pydantic schemas for roster records and API request/response validation."""

from pydantic import BaseModel, ConfigDict, Field

from core.config import DEFAULT_CERTIFICATE_FILENAME

PDF_MEDIA_TYPE = "application/pdf"


class ParticipantRecord(BaseModel):
    """A registered participant, as listed in the roster.

    The roster and the request body both spell the key ``accessKey``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    email: str
    name: str
    access_key: str = Field(alias="accessKey")


class CertificateRequest(BaseModel):
    """Request body for POST /api/certificado.

    Both fields are optional at the schema level so that an absent field is
    reported as missing input (400) rather than a validation error (422).
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    access_key: str | None = Field(default=None, alias="accessKey")


class CertificateDocument(BaseModel):
    """A rendered certificate, held in memory until it is sent."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    media_type: str = PDF_MEDIA_TYPE
    filename: str = DEFAULT_CERTIFICATE_FILENAME

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


class MessageResponse(BaseModel):
    """Error body returned for every failed certificate request."""

    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
