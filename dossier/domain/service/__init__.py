"""Domain services."""

from .clock import Clock, IdGenerator, SystemClock, UuidProfileIdGenerator
from .completeness import is_complete
from .profile_service import ProfileService

__all__ = [
    "Clock",
    "IdGenerator",
    "ProfileService",
    "SystemClock",
    "UuidProfileIdGenerator",
    "is_complete",
]
