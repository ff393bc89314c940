"""Pytest configuration and shared fixtures.

This module provides:
- Sample roster records and roster sources (in-memory, file-backed, failing)
- A fake PDF renderer so route/service tests do not need the Cairo library
- FastAPI app + httpx client fixtures with the roster dependency overridden
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("ROSTER_PATH", "tests-roster-not-configured.json")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import json
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.config import clear_settings_cache
from core.roster import get_roster_source
from repositories.roster_repository import (
    RosterUnavailableError,
    StaticRosterSource,
)
from schemas import ParticipantRecord

FAKE_PDF = b"%PDF-1.5\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n%%EOF\n"

# =============================================================================
# Roster Fixtures
# =============================================================================


@pytest.fixture
def participants() -> list[ParticipantRecord]:
    """Roster used by the reference scenarios."""
    return [
        ParticipantRecord(email="a@x.com", name="Juan Pérez", access_key="ABC123"),
        ParticipantRecord(
            email="maria@x.com", name="María González", access_key="ABC123"
        ),
    ]


@pytest.fixture
def roster_source(participants: list[ParticipantRecord]) -> StaticRosterSource:
    return StaticRosterSource(participants)


@pytest.fixture
def failing_roster_source() -> MagicMock:
    """Roster whose load() always fails, as an unreadable file would."""
    source = MagicMock(name="FailingRosterSource")
    source.load.side_effect = RosterUnavailableError("disk on fire")
    return source


@pytest.fixture
def roster_file(tmp_path: Path, participants: list[ParticipantRecord]) -> Path:
    """Roster JSON file in the on-disk format (accessKey spelling)."""
    path = tmp_path / "participantes.json"
    path.write_text(
        json.dumps([p.model_dump(by_alias=True) for p in participants]),
        encoding="utf-8",
    )
    return path


# =============================================================================
# Rendering Fixtures
# =============================================================================


@pytest.fixture
def fake_pdf() -> bytes:
    return FAKE_PDF


@pytest.fixture
def mock_svg_to_pdf() -> Iterator[MagicMock]:
    """Replace CairoSVG conversion with a canned PDF.

    The SVG handed to the converter is available as
    ``mock_svg_to_pdf.call_args.args[0]``.
    """
    with patch(
        "services.certificates_service._svg_to_pdf", return_value=FAKE_PDF
    ) as mock:
        yield mock


# =============================================================================
# App Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def app() -> AsyncIterator[FastAPI]:
    """FastAPI app with dependency overrides reset after each test."""
    # Import here so environment defaults above apply before Settings loads
    from main import app as fastapi_app

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def use_roster(app: FastAPI):
    """Return a function that makes the app read from the given roster source."""

    def _use(source) -> None:
        app.dependency_overrides[get_roster_source] = lambda: source

    return _use


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for testing routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
