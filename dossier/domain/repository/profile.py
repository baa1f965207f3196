"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from dossier.domain.model.profile import ProfileDocument
from dossier.domain.value import ProfileId


class ProfileRepository(ABC):
    """Repository for profile documents.

    The authoritative store. Implementations raise StoreUnavailableError
    when the backing database cannot be reached.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> list[ProfileDocument]:
        """Find profile documents by email.

        Email is not unique at the store level; callers treat the first
        entry as authoritative.

        Args:
            email: The profile owner's email

        Returns:
            Matching documents, oldest first (may be empty)
        """
        pass

    @abstractmethod
    async def find_by_id(self, profile_id: ProfileId) -> Optional[ProfileDocument]:
        """Find a profile document by id.

        Args:
            profile_id: The profile's unique identifier

        Returns:
            The document if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_profile(self, document: ProfileDocument) -> None:
        """Insert a new profile document. It is durable once this returns.

        Args:
            document: The document to insert
        """
        pass

    @abstractmethod
    async def update_profile(self, document: ProfileDocument) -> None:
        """Replace the stored document with the same id. Durable on return.

        Args:
            document: The full document to write
        """
        pass
