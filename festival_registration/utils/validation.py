"""Data validation utilities."""
import re
from typing import Any, Mapping, Tuple

from festival_registration.models.participant import DEPARTMENT_PLACEHOLDER, DEPARTMENTS
from festival_registration.utils.exceptions import ValidationError


# ASCII-only \s: control separators and NBSP are not whitespace here
CONTACT_NUMBER_PATTERN = re.compile(r"^[0-9+\-\s()]+$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$", re.ASCII)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_required(value: Any, label: str) -> Tuple[bool, str]:
    """
    Validate that a text field is filled in.

    Args:
        value: Field value
        label: Human-readable field name used in the message

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "<label> is required!") if empty or whitespace only
    """
    if not _text(value):
        return False, f"{label} is required!"
    return True, ""


def validate_registration_id(registration_id: Any) -> Tuple[bool, str]:
    """Validate registration ID (required, any non-blank text)."""
    return validate_required(registration_id, "Registration ID")


def validate_lookup_id(registration_id: Any) -> Tuple[bool, str]:
    """
    Validate the registration ID used for search and delete.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Please enter Registration ID!") if empty
    """
    if not _text(registration_id):
        return False, "Please enter Registration ID!"
    return True, ""


def validate_department(department: Any) -> Tuple[bool, str]:
    """
    Validate department selection.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if one of the catalog departments
        - (False, "Please select a Department!") if empty, the placeholder
          or unknown
    """
    value = _text(department)
    if not value or value == DEPARTMENT_PLACEHOLDER or value not in DEPARTMENTS:
        return False, "Please select a Department!"
    return True, ""


def validate_contact_number(contact_number: Any) -> Tuple[bool, str]:
    """
    Validate contact number.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Contact Number is required!") if empty
        - (False, "Invalid Contact Number format! ...") if anything other
          than digits, +, -, (), or spaces is present
    """
    is_valid, error_msg = validate_required(contact_number, "Contact Number")
    if not is_valid:
        return False, error_msg

    if not CONTACT_NUMBER_PATTERN.match(_text(contact_number)):
        return False, "Invalid Contact Number format! Use numbers, +, -, (), or spaces only."
    return True, ""


def validate_email_address(email_address: Any) -> Tuple[bool, str]:
    """
    Validate email address.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Email Address is required!") if empty
        - (False, "Invalid Email Address format!") if not local@domain
    """
    is_valid, error_msg = validate_required(email_address, "Email Address")
    if not is_valid:
        return False, error_msg

    if not EMAIL_PATTERN.match(_text(email_address)):
        return False, "Invalid Email Address format!"
    return True, ""


def validate_participant(payload: Mapping[str, Any]) -> None:
    """
    Validate participant form data against all rules.

    Args:
        payload: Mapping keyed by participant field names

    Returns:
        None

    Raises:
        ValidationError: For the first failing field, checked in order
            registration_id, name, department, contact_number, email_address
    """
    checks = [
        ("registration_id", validate_registration_id),
        ("name", lambda value: validate_required(value, "Participant Name")),
        ("department", validate_department),
        ("contact_number", validate_contact_number),
        ("email_address", validate_email_address),
    ]

    for field, check in checks:
        is_valid, error_msg = check(payload.get(field))
        if not is_valid:
            raise ValidationError(field, error_msg)
