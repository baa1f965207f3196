"""Time and id sources injected into domain services."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from uuid import uuid4

from dossier.domain.value import ProfileId


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time."""
        pass


class IdGenerator(ABC):
    """Source of new profile ids."""

    @abstractmethod
    def new_profile_id(self) -> ProfileId:
        """Mint a new, unique profile id."""
        pass


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class UuidProfileIdGenerator(IdGenerator):
    """Profile ids as 32-character hex UUID4s."""

    def new_profile_id(self) -> ProfileId:
        return ProfileId(uuid4().hex)
