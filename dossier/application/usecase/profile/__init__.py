"""Profile use cases."""

from .complete_login import CompleteLoginUseCase
from .get_profile import GetProfileUseCase
from .update_profile import UpdateProfileUseCase

__all__ = ["CompleteLoginUseCase", "GetProfileUseCase", "UpdateProfileUseCase"]
