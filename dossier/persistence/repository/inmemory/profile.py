"""In-memory profile repository for testing."""

from typing import Optional

from dossier.domain.error import NotFoundError
from dossier.domain.model import ProfileDocument
from dossier.domain.repository import ProfileRepository
from dossier.domain.value import ProfileId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing.

    Records every insert and update so tests can assert on store traffic.
    """

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, ProfileDocument] = {}
        self.inserted: list[ProfileDocument] = []
        self.updated: list[ProfileDocument] = []

    async def find_by_email(self, email: str) -> list[ProfileDocument]:
        """Find profile documents by email, in insertion order."""
        return [doc for doc in self._profiles.values() if doc.email == email]

    async def find_by_id(self, profile_id: ProfileId) -> Optional[ProfileDocument]:
        """Find a profile document by id."""
        return self._profiles.get(profile_id)

    async def insert_profile(self, document: ProfileDocument) -> None:
        """Insert a new profile document."""
        self.inserted.append(document)
        self._profiles[document.id] = document

    async def update_profile(self, document: ProfileDocument) -> None:
        """Replace the stored document with the same id."""
        if document.id not in self._profiles:
            raise NotFoundError("Profile", document.id)
        self.updated.append(document)
        self._profiles[document.id] = document
