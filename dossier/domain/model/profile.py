"""Profile document aggregate.

A profile is created with just names and email when a user first signs in
and is filled out later. Stored documents use camelCase keys and `_id`;
the aliases below map them onto snake_case attributes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from dossier.domain.model.common import DomainModel
from dossier.domain.value import Application, Appointment, ProfileId


class ProfileDocument(DomainModel):
    """Profile document keyed by a generated id.

    First name, last name and email are always present. The remaining
    fields decide completeness (see `is_complete`).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Older documents carry phone and zip as numbers
        coerce_numbers_to_str=True,
    )

    id: ProfileId = Field(alias="_id")
    first_name: str
    last_name: str
    email: str
    age: Optional[int] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    applications: list[Application] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)
    update_dt: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """Partial profile submitted by the user.

    Only fields that were explicitly set are applied. Id and email are not
    editable here since they key the store and the status cache.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    applications: Optional[list[Application]] = None
    appointments: Optional[list[Appointment]] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_cleared(cls, value: Optional[str]) -> str:
        """Names may be changed but never removed."""
        if value is None:
            raise ValueError("may not be cleared")
        return value

    def merge_into(self, existing: ProfileDocument) -> ProfileDocument:
        """Overlay the explicitly set fields onto an existing document.

        An explicit None clears an optional field on the result. The merged
        document is validated as a whole.

        Args:
            existing: Stored document to merge into

        Returns:
            New document; `existing` is left untouched
        """
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        for name in ("applications", "appointments"):
            if name in changes and changes[name] is None:
                changes[name] = []
        return ProfileDocument.model_validate({**existing.model_dump(), **changes})
