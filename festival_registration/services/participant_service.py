"""Registration service for participant records."""
import logging
from typing import Any, Mapping, Optional, Tuple

from festival_registration.models.participant import Participant
from festival_registration.services.participant_store import ParticipantStore, StoreStatus
from festival_registration.utils.exceptions import ValidationError
from festival_registration.utils.validation import validate_lookup_id, validate_participant

logger = logging.getLogger(__name__)


def _not_found_message(registration_id: str) -> str:
    return f"No participant found with Registration ID: {registration_id}"


def register_participant(store: ParticipantStore, payload: Mapping[str, Any]) -> Tuple[bool, str]:
    """
    Register a new participant.

    Args:
        store: Open participant store
        payload: Form data keyed by participant field names

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Participant registered successfully!") on success
        - (False, validation message) if a field is invalid
        - (False, "Registration ID already exists! ...") on duplicate ID
        - (False, "Error registering participant: ...") on store failure
    """
    participant = Participant.from_form(payload)
    try:
        validate_participant(participant.to_form())
    except ValidationError as e:
        logger.info("Registration rejected on %s: %s", e.field, e.reason)
        return False, e.reason

    result = store.insert(participant)

    if result.status is StoreStatus.INSERTED:
        return True, "Participant registered successfully!"
    if result.status is StoreStatus.DUPLICATE_KEY:
        return False, "Registration ID already exists! Please use a different ID."
    return False, f"Error registering participant: {result.message}"


def search_participant(
    store: ParticipantStore, registration_id: str
) -> Tuple[bool, str, Optional[Participant]]:
    """
    Search for a participant by registration ID.

    Returns:
        Tuple of (success: bool, message: str, participant or None)
        - (True, "Participant found!", participant) on success
        - (False, "Please enter Registration ID!", None) if ID is empty
        - (False, "No participant found with Registration ID: X", None)
        - (False, "Error searching participant: ...", None) on store failure
    """
    is_valid, error_msg = validate_lookup_id(registration_id)
    if not is_valid:
        return False, error_msg, None

    registration_id = registration_id.strip()
    result = store.find_by_id(registration_id)

    if result.status is StoreStatus.FOUND:
        return True, "Participant found!", result.record
    if result.status is StoreStatus.NOT_FOUND:
        return False, _not_found_message(registration_id), None
    return False, f"Error searching participant: {result.message}", None


def update_participant(store: ParticipantStore, payload: Mapping[str, Any]) -> Tuple[bool, str]:
    """
    Update an existing participant identified by the payload's registration ID.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Participant record updated successfully!") on success
        - (False, validation message) if a field is invalid
        - (False, "No participant found with Registration ID: X")
        - (False, "Error updating participant: ...") on store failure
    """
    participant = Participant.from_form(payload)
    try:
        validate_participant(participant.to_form())
    except ValidationError as e:
        logger.info("Update rejected on %s: %s", e.field, e.reason)
        return False, e.reason

    result = store.update(participant.registration_id, participant)

    if result.status is StoreStatus.UPDATED:
        return True, "Participant record updated successfully!"
    if result.status is StoreStatus.NOT_FOUND:
        return False, _not_found_message(participant.registration_id)
    return False, f"Error updating participant: {result.message}"


def delete_participant(store: ParticipantStore, registration_id: str) -> Tuple[bool, str]:
    """
    Delete a participant by registration ID.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Participant deleted successfully!") on success
        - (False, "Please enter Registration ID!") if ID is empty
        - (False, "No participant found with Registration ID: X")
        - (False, "Error deleting participant: ...") on store failure
    """
    is_valid, error_msg = validate_lookup_id(registration_id)
    if not is_valid:
        return False, error_msg

    registration_id = registration_id.strip()
    result = store.delete_by_id(registration_id)

    if result.status is StoreStatus.DELETED:
        return True, "Participant deleted successfully!"
    if result.status is StoreStatus.NOT_FOUND:
        return False, _not_found_message(registration_id)
    return False, f"Error deleting participant: {result.message}"
