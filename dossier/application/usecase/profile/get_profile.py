"""Get profile use case."""

from datetime import datetime

from pydantic import BaseModel

from dossier.application.usecase.base import BaseUseCase
from dossier.domain.error import NotAuthorizedError
from dossier.domain.service import ProfileService, is_complete
from dossier.domain.value import Application, Appointment, ProfileId


class GetProfileRequest(BaseModel):
    """Get profile request."""

    profile_id: str
    email: str | None  # From the authenticated session


class GetProfileResponse(BaseModel):
    """Get profile response."""

    profile_id: str
    first_name: str
    last_name: str
    email: str
    age: int | None
    phone: str | None
    city: str | None
    state: str | None
    zip: str | None
    applications: list[Application]
    appointments: list[Appointment]
    complete: bool
    updated_at: datetime | None


class GetProfileUseCase(BaseUseCase):
    """Use case for viewing one's own profile."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize get profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: GetProfileRequest) -> GetProfileResponse:
        """Execute get profile flow.

        Raises:
            NotAuthorizedError: If the session may not view this profile
            NotFoundError: If the profile does not exist
        """
        profile_id = ProfileId(request.profile_id)

        if not await self.profile_service.authorized(profile_id, request.email):
            raise NotAuthorizedError("profile", request.profile_id, request.email)

        document = await self.profile_service.get_profile(profile_id)

        return GetProfileResponse(
            profile_id=document.id,
            first_name=document.first_name,
            last_name=document.last_name,
            email=document.email,
            age=document.age,
            phone=document.phone,
            city=document.city,
            state=document.state,
            zip=document.zip,
            applications=document.applications,
            appointments=document.appointments,
            complete=is_complete(document),
            updated_at=document.update_dt,
        )
