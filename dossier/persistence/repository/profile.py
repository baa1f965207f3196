"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dossier.domain.error import NotFoundError, StoreUnavailableError
from dossier.domain.model import ProfileDocument
from dossier.domain.repository import ProfileRepository
from dossier.domain.value import ProfileId
from dossier.persistence.mappers import profile_to_row, row_to_profile
from dossier.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository.

    Writes are committed before returning. Database failures surface as
    StoreUnavailableError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_email(self, email: str) -> list[ProfileDocument]:
        """Find profile documents by email, oldest first.

        Args:
            email: Email to search for

        Returns:
            Matching documents (may be empty)
        """
        stmt = (
            select(profiles_table)
            .where(profiles_table.c.email == email)
            .order_by(profiles_table.c.created_at, profiles_table.c.id)
        )
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Profile lookup by email failed: {e}") from e
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def find_by_id(self, profile_id: ProfileId) -> Optional[ProfileDocument]:
        """Find a profile document by id.

        Args:
            profile_id: Profile id to look up

        Returns:
            Document if found, None otherwise
        """
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Profile lookup by id failed: {e}") from e
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def insert_profile(self, document: ProfileDocument) -> None:
        """Insert a new profile document and commit it.

        Args:
            document: Document to insert
        """
        stmt = profiles_table.insert().values(**profile_to_row(document))
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Profile insert failed: {e}") from e

    async def update_profile(self, document: ProfileDocument) -> None:
        """Replace the stored document with the same id and commit it.

        Args:
            document: Full document to write

        Raises:
            NotFoundError: If no stored document has this id
        """
        values = profile_to_row(document)
        values.pop("id")
        stmt = (
            profiles_table.update()
            .where(profiles_table.c.id == document.id)
            .values(**values)
        )
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Profile update failed: {e}") from e
        if result.rowcount == 0:
            raise NotFoundError("Profile", document.id)
        try:
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailableError(f"Profile update commit failed: {e}") from e
