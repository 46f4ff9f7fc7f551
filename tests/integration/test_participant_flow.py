"""Integration tests for the participant record lifecycle."""
import io

import pytest
from PIL import Image

from festival_registration.services.image_service import make_preview, read_image_file
from festival_registration.services.participant_service import (
    delete_participant,
    register_participant,
    search_participant,
    update_participant,
)
from festival_registration.services.participant_store import ParticipantStore


@pytest.fixture
def db_url(tmp_path):
    """SQLite URL in a temporary directory."""
    return f"sqlite:///{tmp_path / 'participants.db'}"


@pytest.fixture
def photo_file(tmp_path):
    """A small PNG ID photo on disk."""
    path = tmp_path / "student_id.png"
    Image.new("RGB", (320, 200), color="blue").save(path, format="PNG")
    return path


class TestParticipantLifecycle:
    """End-to-end register, search, update, delete."""

    def test_register_search_update_delete(self, db_url):
        payload = {
            "registration_id": "R001",
            "name": "Alex Lee",
            "department": "Engineering",
            "dancing_partner": "",
            "contact_number": "0400111222",
            "email_address": "a@vu.edu.au",
            "id_image": None,
        }

        with ParticipantStore(db_url) as store:
            assert register_participant(store, payload) == (True, "Participant registered successfully!")

            success, _, participant = search_participant(store, "R001")
            assert success is True
            assert participant.to_form() == payload

            success, _ = update_participant(store, {**payload, "name": "Alex Lim"})
            assert success is True
            _, _, participant = search_participant(store, "R001")
            assert participant.name == "Alex Lim"

            assert delete_participant(store, "R001") == (True, "Participant deleted successfully!")

            success, message, participant = search_participant(store, "R001")
            assert success is False
            assert message == "No participant found with Registration ID: R001"
            assert participant is None

    def test_records_survive_reopen(self, db_url):
        payload = {
            "registration_id": "R010",
            "name": "Robin Tan",
            "department": "Natural Sciences",
            "dancing_partner": "Chris",
            "contact_number": "+61 400-123 456",
            "email_address": "robin@vu.edu.au",
        }

        with ParticipantStore(db_url) as store:
            register_participant(store, payload)

        with ParticipantStore(db_url) as store:
            success, _, participant = search_participant(store, "R010")

        assert success is True
        assert participant.dancing_partner == "Chris"

    def test_photo_round_trip_from_disk(self, db_url, photo_file):
        image_bytes = read_image_file(photo_file)
        payload = {
            "registration_id": "R020",
            "name": "Dana Cruz",
            "department": "Arts & Humanities",
            "contact_number": "(03) 9919 4000",
            "email_address": "dana@vu.edu.au",
            "id_image": image_bytes,
        }

        with ParticipantStore(db_url) as store:
            register_participant(store, payload)
            _, _, participant = search_participant(store, "R020")

        assert participant.id_image == image_bytes
        with Image.open(io.BytesIO(make_preview(participant.id_image, size=(160, 160)))) as img:
            assert img.size == (160, 100)
