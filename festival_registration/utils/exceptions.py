"""Custom exception classes."""


class ValidationError(Exception):
    """Raised when participant form data fails validation."""

    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class DuplicateKeyError(Exception):
    """Raised when a registration ID is already taken."""
    pass


class ParticipantNotFoundError(Exception):
    """Raised when registration ID doesn't exist."""
    pass


class StoreError(Exception):
    """Raised when the participant database cannot be used."""
    pass


class ImageReadError(Exception):
    """Raised when an ID photo cannot be read or decoded."""
    pass
