"""Profile value objects.

Value objects are immutable and defined by their values, not identity.
"""

from pydantic import field_validator

from dossier.domain.value.common import ValueObject


class Application(ValueObject):
    """An application record attached to a profile."""

    date: str
    desc: str


class Appointment(ValueObject):
    """An appointment record attached to a profile."""

    date: str
    desc: str


class ProfileStatus(ValueObject):
    """Cacheable completeness summary of a profile, keyed by email."""

    id: str
    complete: bool

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate id is not blank."""
        if not v.strip():
            raise ValueError("Profile status id must not be blank")
        return v
