"""Test configuration and fixtures."""

from dataclasses import dataclass

import pytest

from dossier.config import RoutingSettings
from dossier.domain.service import ProfileService
from dossier.persistence.cache import InMemoryIdentityCache, InMemoryStatusCache
from dossier.persistence.repository.inmemory import InMemoryProfileRepository
from tests.factories import FixedClock, FixedIdGenerator


@dataclass
class ProfileSetup:
    """A ProfileService wired to in-memory collaborators and fixed fakes."""

    service: ProfileService
    repository: InMemoryProfileRepository
    identity_cache: InMemoryIdentityCache
    status_cache: InMemoryStatusCache
    id_generator: FixedIdGenerator
    clock: FixedClock


@pytest.fixture
def setup() -> ProfileSetup:
    """Fresh profile service with empty store and caches."""
    repository = InMemoryProfileRepository()
    identity_cache = InMemoryIdentityCache()
    status_cache = InMemoryStatusCache()
    id_generator = FixedIdGenerator()
    clock = FixedClock()
    service = ProfileService(
        profile_repository=repository,
        identity_cache=identity_cache,
        status_cache=status_cache,
        id_generator=id_generator,
        clock=clock,
        routing=RoutingSettings(),
    )
    return ProfileSetup(
        service=service,
        repository=repository,
        identity_cache=identity_cache,
        status_cache=status_cache,
        id_generator=id_generator,
        clock=clock,
    )
