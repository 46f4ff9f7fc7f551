"""Unit tests for participant_service."""
import pytest
from unittest.mock import MagicMock

from festival_registration.models.participant import DEPARTMENT_PLACEHOLDER, Participant
from festival_registration.services.participant_service import (
    delete_participant,
    register_participant,
    search_participant,
    update_participant,
)
from festival_registration.services.participant_store import (
    ParticipantStore,
    StoreResult,
    StoreStatus,
)


@pytest.fixture
def store(tmp_path):
    """Open store backed by a temporary SQLite file."""
    participant_store = ParticipantStore(f"sqlite:///{tmp_path / 'participants.db'}")
    participant_store.open()
    yield participant_store
    participant_store.close()


@pytest.fixture
def payload():
    """Valid registration form data."""
    return {
        "registration_id": "R001",
        "name": "Alex Lee",
        "department": "Engineering",
        "dancing_partner": "",
        "contact_number": "0400111222",
        "email_address": "a@vu.edu.au",
        "id_image": None,
    }


@pytest.fixture
def failing_store():
    """Store double whose every operation reports a database failure."""
    mock_store = MagicMock(spec=ParticipantStore)
    failure = StoreResult(StoreStatus.STORE_ERROR, message="disk I/O error")
    mock_store.insert.return_value = failure
    mock_store.find_by_id.return_value = failure
    mock_store.update.return_value = failure
    mock_store.delete_by_id.return_value = failure
    return mock_store


class TestRegisterParticipant:
    """Test register_participant."""

    def test_successful_registration(self, store, payload):
        success, message = register_participant(store, payload)

        assert success is True
        assert message == "Participant registered successfully!"
        assert store.count() == 1

    def test_values_are_trimmed_before_saving(self, store, payload):
        payload["registration_id"] = " R001 "
        payload["name"] = "  Alex Lee"

        register_participant(store, payload)

        assert store.find_by_id("R001").record.name == "Alex Lee"

    def test_validation_failure_skips_store(self, payload):
        mock_store = MagicMock(spec=ParticipantStore)
        payload["department"] = DEPARTMENT_PLACEHOLDER

        success, message = register_participant(mock_store, payload)

        assert success is False
        assert message == "Please select a Department!"
        mock_store.insert.assert_not_called()

    def test_duplicate_registration(self, store, payload):
        register_participant(store, payload)

        success, message = register_participant(store, {**payload, "name": "Someone Else"})

        assert success is False
        assert message == "Registration ID already exists! Please use a different ID."
        assert store.find_by_id("R001").record.name == "Alex Lee"

    def test_store_failure(self, failing_store, payload):
        success, message = register_participant(failing_store, payload)

        assert success is False
        assert message == "Error registering participant: disk I/O error"


class TestSearchParticipant:
    """Test search_participant."""

    def test_found(self, store, payload):
        register_participant(store, payload)

        success, message, participant = search_participant(store, " R001 ")

        assert success is True
        assert message == "Participant found!"
        assert participant == Participant.from_form(payload)

    def test_not_found(self, store):
        success, message, participant = search_participant(store, "R404")

        assert success is False
        assert message == "No participant found with Registration ID: R404"
        assert participant is None

    def test_empty_id_rejected_before_store(self):
        mock_store = MagicMock(spec=ParticipantStore)

        success, message, participant = search_participant(mock_store, "  ")

        assert success is False
        assert message == "Please enter Registration ID!"
        mock_store.find_by_id.assert_not_called()

    def test_store_failure(self, failing_store):
        success, message, _ = search_participant(failing_store, "R001")

        assert success is False
        assert message.startswith("Error searching participant")


class TestUpdateParticipant:
    """Test update_participant."""

    def test_successful_update(self, store, payload):
        register_participant(store, payload)

        success, message = update_participant(store, {**payload, "name": "Alex Lim"})

        assert success is True
        assert message == "Participant record updated successfully!"
        assert store.find_by_id("R001").record.name == "Alex Lim"

    def test_update_missing_participant(self, store, payload):
        success, message = update_participant(store, payload)

        assert success is False
        assert message == "No participant found with Registration ID: R001"
        assert store.count() == 0

    def test_invalid_contact_rejected(self, store, payload):
        register_participant(store, payload)

        success, message = update_participant(store, {**payload, "contact_number": "abc123"})

        assert success is False
        assert "Invalid Contact Number format" in message
        assert store.find_by_id("R001").record.contact_number == "0400111222"

    def test_store_failure(self, failing_store, payload):
        success, message = update_participant(failing_store, payload)

        assert success is False
        assert message == "Error updating participant: disk I/O error"


class TestDeleteParticipant:
    """Test delete_participant."""

    def test_successful_delete(self, store, payload):
        register_participant(store, payload)

        success, message = delete_participant(store, "R001")

        assert success is True
        assert message == "Participant deleted successfully!"
        assert store.count() == 0

    def test_delete_missing_participant(self, store):
        success, message = delete_participant(store, "R001")

        assert success is False
        assert message == "No participant found with Registration ID: R001"

    def test_empty_id_rejected(self):
        mock_store = MagicMock(spec=ParticipantStore)

        success, message = delete_participant(mock_store, "")

        assert success is False
        assert message == "Please enter Registration ID!"
        mock_store.delete_by_id.assert_not_called()

    def test_store_failure(self, failing_store):
        success, message = delete_participant(failing_store, "R001")

        assert success is False
        assert message == "Error deleting participant: disk I/O error"
