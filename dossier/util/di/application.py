"""Application layer DI providers."""

from dishka import Scope, provide

from dossier.application.usecase.profile import (
    CompleteLoginUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from dossier.domain.service import ProfileService
from dossier.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_complete_login_use_case(
        self, profile_service: ProfileService
    ) -> CompleteLoginUseCase:
        """Provide complete login use case."""
        return CompleteLoginUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, profile_service: ProfileService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(profile_service=profile_service)
