"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from starlette import status

from core.logger import get_logger
from core.roster import Roster, RosterUnavailableError, check_roster_readable
from core.telemetry import SERVICE_NAME
from schemas import HealthResponse, MessageResponse

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", service=SERVICE_NAME)


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={
        503: {
            "model": MessageResponse,
            "description": "Service unavailable - roster cannot be loaded",
        }
    },
)
async def ready(roster: Roster) -> HealthResponse | JSONResponse:
    """Readiness endpoint.

    Returns 200 only when the participant roster can be loaded.
    """
    try:
        await check_roster_readable(roster)
    except (RosterUnavailableError, TimeoutError):
        logger.warning("ready.roster_unavailable", source=repr(roster))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=MessageResponse(message="Roster unavailable").model_dump(),
        )

    return HealthResponse(status="ready", service=SERVICE_NAME)
