"""Domain model entities for Dossier."""

from dossier.domain.model.identity import Identity
from dossier.domain.model.profile import ProfileDocument, ProfileUpdate

__all__ = [
    "Identity",
    "ProfileDocument",
    "ProfileUpdate",
]
