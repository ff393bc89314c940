"""Credential validation against the participant roster.

A request is authorized when its email and access key exactly match one
roster record. The access key is shared among participants, so the email is
what actually identifies the person.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from core.logger import get_logger
from repositories.roster_repository import RosterSource, RosterUnavailableError
from schemas import ParticipantRecord

logger = get_logger(__name__)


class RejectionReason(StrEnum):
    MISSING_FIELDS = "missing_fields"
    INVALID_CREDENTIALS = "invalid_credentials"
    SOURCE_UNAVAILABLE = "source_unavailable"


@dataclass(frozen=True, slots=True)
class Authorized:
    participant: ParticipantRecord


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: RejectionReason


ValidationResult = Authorized | Rejected


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def find_participant(
    roster: Sequence[ParticipantRecord],
    email: str,
    access_key: str,
) -> ParticipantRecord | None:
    """Return the first record whose email and access key both match exactly."""
    return next(
        (r for r in roster if r.email == email and r.access_key == access_key),
        None,
    )


def validate_credentials(
    email: str | None,
    access_key: str | None,
    roster_source: RosterSource,
) -> ValidationResult:
    """Decide whether an (email, access key) pair may receive a certificate.

    Both inputs are trimmed once; matching is otherwise exact and
    case-sensitive. The roster is read once per call and only when both
    fields are present.

    Args:
        email: Email as typed by the caller
        access_key: Access key as typed by the caller
        roster_source: Where participant records come from

    Returns:
        Authorized with the matching record, or Rejected with a reason
    """
    email = _clean(email)
    access_key = _clean(access_key)

    if not email or not access_key:
        return Rejected(RejectionReason.MISSING_FIELDS)

    try:
        roster = roster_source.load()
    except (RosterUnavailableError, OSError) as e:
        # OSError covers ConnectionError and TimeoutError from non-file sources
        logger.warning(
            "credentials.roster_unavailable",
            source=repr(roster_source),
            error_type=type(e).__name__,
        )
        return Rejected(RejectionReason.SOURCE_UNAVAILABLE)

    participant = find_participant(roster, email, access_key)
    if participant is None:
        return Rejected(RejectionReason.INVALID_CREDENTIALS)

    return Authorized(participant)
