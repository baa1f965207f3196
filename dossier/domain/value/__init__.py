"""Domain value objects for Dossier."""

from dossier.domain.value.identifiers import ProfileId, UserId
from dossier.domain.value.types import Application, Appointment, ProfileStatus

__all__ = [
    # Identifiers
    "ProfileId",
    "UserId",
    # Types
    "Application",
    "Appointment",
    "ProfileStatus",
]
