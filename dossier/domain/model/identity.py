"""Identity issued by an external authentication provider."""

from typing import Optional

from dossier.domain.model.common import DomainModel
from dossier.domain.value import UserId


class Identity(DomainModel):
    """Signed-in user as reported by the identity provider.

    Opaque to the profile core apart from `user_id` (identity cache key),
    `email` (profile and status lookup key) and the names used to seed a
    new profile.
    """

    user_id: UserId  # Permanent ID from the provider
    provider: str  # Provider name, e.g. "google"
    first_name: str
    last_name: str
    full_name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
