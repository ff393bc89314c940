"""Repository layer for roster access.

Repositories encapsulate where participant data comes from, keeping services
free of file handling and easy to test against an in-memory roster.
"""

from repositories.roster_repository import (
    JsonFileRosterSource,
    RosterSource,
    RosterUnavailableError,
    StaticRosterSource,
    find_duplicate_credentials,
)

__all__ = [
    "JsonFileRosterSource",
    "RosterSource",
    "RosterUnavailableError",
    "StaticRosterSource",
    "find_duplicate_credentials",
]
