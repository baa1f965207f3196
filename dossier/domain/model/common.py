"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Domain models are immutable; changes produce a copy via model_copy().
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        populate_by_name=True,  # Accept field names as well as store aliases
    )
