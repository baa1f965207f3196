"""PostgreSQL repository implementations."""

from dossier.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresProfileRepository",
]
