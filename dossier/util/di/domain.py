"""Domain layer DI providers."""

from dishka import Scope, provide

from dossier.config import RoutingSettings
from dossier.domain.repository import IdentityCache, ProfileRepository, StatusCache
from dossier.domain.service import (
    Clock,
    IdGenerator,
    ProfileService,
    SystemClock,
    UuidProfileIdGenerator,
)
from dossier.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository/session
    lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide wall clock."""
        return SystemClock()

    @provide(scope=Scope.APP)
    def get_id_generator(self) -> IdGenerator:
        """Provide profile id generator."""
        return UuidProfileIdGenerator()

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        identity_cache: IdentityCache,
        status_cache: StatusCache,
        id_generator: IdGenerator,
        clock: Clock,
        routing: RoutingSettings,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            profile_repository=profile_repository,
            identity_cache=identity_cache,
            status_cache=status_cache,
            id_generator=id_generator,
            clock=clock,
            routing=routing,
        )
