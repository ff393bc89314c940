"""Property-based tests for credentials_service using Hypothesis.

These tests verify properties that must hold for any roster contents,
complementing the example-based tests in test_credentials_service.py.
"""

import string
from unittest.mock import MagicMock

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from repositories.roster_repository import StaticRosterSource
from schemas import ParticipantRecord
from services.credentials_service import (
    Authorized,
    Rejected,
    RejectionReason,
    validate_credentials,
)

# Mark all tests in this module as unit tests (no I/O required)
pytestmark = pytest.mark.unit

# =============================================================================
# Custom Strategies
# =============================================================================

# Credentials as stored in a roster: no surrounding whitespace.
credential_text = st.text(
    alphabet=string.ascii_letters + string.digits + "@._-+",
    min_size=1,
    max_size=24,
)

blank_values = st.sampled_from([None, "", " ", "   ", "\t", "\n", " \r\n "])

participant_records = st.builds(
    ParticipantRecord,
    email=credential_text,
    name=st.text(min_size=1, max_size=40),
    # Keyword must be the alias: builds() fills required alias params itself
    accessKey=credential_text,
)

rosters = st.lists(participant_records, max_size=15)

hypothesis_settings = settings(
    max_examples=100,
    suppress_health_check=[HealthCheck.too_slow],
)


# =============================================================================
# Properties
# =============================================================================


class TestRecordStrategy:
    @hypothesis_settings
    @given(record=participant_records)
    def test_records_carry_generated_credentials(self, record):
        allowed = set(string.ascii_letters + string.digits + "@._-+")

        assert record.access_key
        assert set(record.access_key) <= allowed
        assert set(record.email) <= allowed


class TestMissingFieldsProperty:
    @hypothesis_settings
    @given(email=blank_values, access_key=credential_text, roster=rosters)
    def test_blank_email_always_missing_fields(self, email, access_key, roster):
        result = validate_credentials(email, access_key, StaticRosterSource(roster))

        assert result == Rejected(RejectionReason.MISSING_FIELDS)

    @hypothesis_settings
    @given(email=credential_text, access_key=blank_values)
    def test_blank_key_never_reads_roster(self, email, access_key):
        source = MagicMock()

        result = validate_credentials(email, access_key, source)

        assert result == Rejected(RejectionReason.MISSING_FIELDS)
        source.load.assert_not_called()


class TestMatchProperty:
    @hypothesis_settings
    @given(roster=rosters.filter(bool), data=st.data())
    def test_listed_pair_is_authorized_with_first_match(self, roster, data):
        chosen = data.draw(st.sampled_from(roster))

        result = validate_credentials(
            chosen.email, chosen.access_key, StaticRosterSource(roster)
        )

        assert isinstance(result, Authorized)
        expected = next(
            r
            for r in roster
            if r.email == chosen.email and r.access_key == chosen.access_key
        )
        assert result.participant is expected

    @hypothesis_settings
    @given(roster=rosters, email=credential_text, access_key=credential_text)
    def test_unlisted_pair_is_invalid(self, roster, email, access_key):
        assume(all((r.email, r.access_key) != (email, access_key) for r in roster))

        result = validate_credentials(email, access_key, StaticRosterSource(roster))

        assert result == Rejected(RejectionReason.INVALID_CREDENTIALS)

    @hypothesis_settings
    @given(record=participant_records, other_key=credential_text)
    def test_right_email_wrong_key_is_invalid(self, record, other_key):
        assume(other_key != record.access_key)

        result = validate_credentials(
            record.email, other_key, StaticRosterSource([record])
        )

        assert result == Rejected(RejectionReason.INVALID_CREDENTIALS)

    @hypothesis_settings
    @given(roster=rosters, data=st.data())
    def test_validation_is_deterministic(self, roster, data):
        email = data.draw(credential_text)
        access_key = data.draw(credential_text)
        source = StaticRosterSource(roster)

        first = validate_credentials(email, access_key, source)
        second = validate_credentials(email, access_key, source)

        assert first == second
