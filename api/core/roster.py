"""Roster wiring for request handlers.

Routes receive the roster source through FastAPI dependency injection, so
tests can swap it with ``app.dependency_overrides[get_roster_source]``.
"""

import asyncio
from typing import Annotated

from fastapi import Depends

from core.config import get_settings
from core.logger import get_logger
from repositories.roster_repository import (
    JsonFileRosterSource,
    RosterSource,
    RosterUnavailableError,
)

logger = get_logger(__name__)


def get_roster_source() -> RosterSource:
    """Roster configured by ROSTER_PATH. A new source per request; nothing is cached."""
    return JsonFileRosterSource(get_settings().roster_file)


Roster = Annotated[RosterSource, Depends(get_roster_source)]


async def check_roster_readable(roster_source: RosterSource) -> int:
    """Load the roster once and return its size.

    Raises:
        RosterUnavailableError: If the roster cannot be loaded
    """
    async with asyncio.timeout(10):
        records = await asyncio.to_thread(roster_source.load)
    if not records:
        logger.warning("roster.empty", source=repr(roster_source))
    return len(records)


__all__ = [
    "Roster",
    "RosterUnavailableError",
    "check_roster_readable",
    "get_roster_source",
]
