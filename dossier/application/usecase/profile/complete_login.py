"""Complete login use case."""

import logfire
from pydantic import BaseModel

from dossier.application.usecase.base import BaseUseCase
from dossier.domain.model import Identity
from dossier.domain.service import ProfileService


class CompleteLoginRequest(BaseModel):
    """Identity handed over by the authentication provider after sign-in."""

    identity: Identity


class CompleteLoginResponse(BaseModel):
    """Where to send the freshly signed-in user."""

    user_id: str
    redirect_url: str


class CompleteLoginUseCase(BaseUseCase):
    """Use case run once the identity provider has signed a user in."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize complete login use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: CompleteLoginRequest) -> CompleteLoginResponse:
        """Execute post sign-in flow.

        Steps:
        1. Register the identity (bootstraps the profile on first sign-in)
        2. Pick the redirect from the cached profile status

        Args:
            request: Request carrying the provider identity

        Returns:
            User id and redirect URL

        Raises:
            StoreUnavailableError: If the profile store fails
        """
        identity = await self.profile_service.save(request.identity)
        redirect_url = await self.profile_service.build_redirect_url(identity.email)

        logfire.info(
            "Login completed",
            user_id=identity.user_id,
            provider=identity.provider,
            redirect_url=redirect_url,
        )

        return CompleteLoginResponse(
            user_id=identity.user_id, redirect_url=redirect_url
        )
