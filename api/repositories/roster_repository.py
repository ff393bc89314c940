"""Read-only access to the participant roster.

The roster is whatever produces a sequence of ParticipantRecord. The service
layer depends only on the RosterSource protocol; the JSON file implementation
below is what the API wires in by default.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from core.logger import get_logger
from schemas import ParticipantRecord

logger = get_logger(__name__)

_ROSTER_ADAPTER = TypeAdapter(tuple[ParticipantRecord, ...])


class RosterUnavailableError(Exception):
    """Raised when the roster cannot be read or parsed."""


class RosterSource(Protocol):
    def load(self) -> Sequence[ParticipantRecord]:
        """Return every participant, in roster order.

        Raises:
            RosterUnavailableError: If the roster cannot be produced. Sources
                backed by a network or database may raise OSError instead.
        """
        ...


class JsonFileRosterSource:
    """Roster stored as a JSON array of ``{email, name, accessKey}`` objects.

    The file is read on every load() so edits are picked up without a restart.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> tuple[ParticipantRecord, ...]:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error("roster.read.failed", path=str(self.path), error=str(e))
            raise RosterUnavailableError(
                f"Cannot read roster file {self.path}: {e.strerror or e}"
            ) from e

        try:
            records = _ROSTER_ADAPTER.validate_json(raw)
        except ValidationError as e:
            logger.error(
                "roster.parse.failed",
                path=str(self.path),
                error_count=e.error_count(),
            )
            raise RosterUnavailableError(
                f"Roster file {self.path} is malformed "
                f"({e.error_count()} validation errors)"
            ) from e

        logger.debug("roster.loaded", path=str(self.path), count=len(records))
        return records

    def __repr__(self) -> str:
        return f"JsonFileRosterSource({str(self.path)!r})"


class StaticRosterSource:
    """In-memory roster, for the CLI and tests."""

    def __init__(self, records: Iterable[ParticipantRecord]) -> None:
        self.records = tuple(records)

    def load(self) -> tuple[ParticipantRecord, ...]:
        return self.records


def find_duplicate_credentials(
    records: Iterable[ParticipantRecord],
) -> list[tuple[str, str]]:
    """Return (email, access_key) pairs listed more than once, in first-seen order.

    Lookups take the first match, so later duplicates are unreachable.
    """
    counts = Counter((r.email, r.access_key) for r in records)
    return [pair for pair, count in counts.items() if count > 1]
