"""Repository interfaces for the Dossier domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from dossier.domain.repository.cache import IdentityCache, KeyValueCache, StatusCache
from dossier.domain.repository.profile import ProfileRepository

__all__ = [
    "IdentityCache",
    "KeyValueCache",
    "ProfileRepository",
    "StatusCache",
]
