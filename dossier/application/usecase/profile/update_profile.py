"""Update profile use case."""

from pydantic import BaseModel

from dossier.application.usecase.base import BaseUseCase
from dossier.domain.error import NotAuthorizedError
from dossier.domain.model import ProfileUpdate
from dossier.domain.service import ProfileService, is_complete
from dossier.domain.value import ProfileId


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    profile_id: str  # Target profile
    email: str | None  # From the authenticated session
    update: ProfileUpdate


class UpdateProfileResponse(BaseModel):
    """Update profile response."""

    profile_id: str
    complete: bool
    redirect_url: str


class UpdateProfileUseCase(BaseUseCase):
    """Use case for filling out or editing a profile.

    Only the session whose cached profile status carries the target id may
    edit it.
    """

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize update profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: UpdateProfileRequest) -> UpdateProfileResponse:
        """Execute update profile flow.

        Steps:
        1. Check the session may edit this profile
        2. Load the stored document and merge the submitted fields
        3. Write it back (recomputes and re-caches completeness)
        4. Return the new status and where to go next

        Args:
            request: Target profile, session email and submitted fields

        Returns:
            Profile id, completeness and redirect URL

        Raises:
            NotAuthorizedError: If the session may not edit this profile
            NotFoundError: If the profile does not exist
            StoreUnavailableError: If the profile store fails
        """
        profile_id = ProfileId(request.profile_id)

        if not await self.profile_service.authorized(profile_id, request.email):
            raise NotAuthorizedError("profile", request.profile_id, request.email)

        existing = await self.profile_service.get_profile(profile_id)
        merged = request.update.merge_into(existing)

        await self.profile_service.update_by_id(profile_id, merged)
        redirect_url = await self.profile_service.build_redirect_url(merged.email)

        return UpdateProfileResponse(
            profile_id=profile_id,
            complete=is_complete(merged),
            redirect_url=redirect_url,
        )
