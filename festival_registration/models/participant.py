"""Participant data model for festival registration."""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


DEPARTMENT_PLACEHOLDER = "Select Department"

DEPARTMENTS = [
    "Computer Science & IT",
    "Business & Management",
    "Engineering",
    "Arts & Humanities",
    "Health Sciences",
    "Law",
    "Education",
    "Natural Sciences",
]

# Column names of the Participants table, keyed by model field
COLUMNS = {
    "registration_id": "RegistrationID",
    "name": "ParticipantName",
    "department": "Department",
    "dancing_partner": "DancingPartner",
    "contact_number": "ContactNumber",
    "email_address": "EmailAddress",
    "id_image": "UniversityIDImage",
}


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass
class Participant:
    """Festival participant registration record."""

    registration_id: str
    name: str
    department: str
    contact_number: str
    email_address: str
    dancing_partner: str = ""
    id_image: Optional[bytes] = None

    @classmethod
    def from_form(cls, payload: Mapping[str, Any]) -> "Participant":
        """
        Build a participant from raw form input.

        Args:
            payload: Mapping keyed by model field names

        Returns:
            Participant with every text field stripped

        Behavior:
            - Missing text fields become ""
            - Empty image data becomes None
        """
        image = payload.get("id_image")
        return cls(
            registration_id=_clean(payload.get("registration_id")),
            name=_clean(payload.get("name")),
            department=_clean(payload.get("department")),
            contact_number=_clean(payload.get("contact_number")),
            email_address=_clean(payload.get("email_address")),
            dancing_partner=_clean(payload.get("dancing_partner")),
            id_image=bytes(image) if image else None,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Participant":
        """Build a participant from a Participants table row."""
        image = row[COLUMNS["id_image"]]
        return cls(
            registration_id=row[COLUMNS["registration_id"]],
            name=row[COLUMNS["name"]],
            department=row[COLUMNS["department"]],
            contact_number=row[COLUMNS["contact_number"]],
            email_address=row[COLUMNS["email_address"]],
            dancing_partner=row[COLUMNS["dancing_partner"]] or "",
            id_image=bytes(image) if image is not None else None,
        )

    def to_row(self) -> Dict[str, Any]:
        """Map to Participants column names."""
        return {column: getattr(self, field) for field, column in COLUMNS.items()}

    def to_form(self) -> Dict[str, Any]:
        """Map to form field values."""
        return {field: getattr(self, field) for field in COLUMNS}

    def has_image(self) -> bool:
        """Check if an ID photo is attached."""
        return bool(self.id_image)
