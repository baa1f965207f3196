"""Profile domain service.

Keeps the profile store and the identity/status caches consistent and
answers routing and authorization questions from the status cache.

Concurrent requests are not serialized here. Consistency comes from the
kind of cache write each operation uses:

- save() only ever writes with set_if_new, so racing sign-ins for the same
  user keep whichever status landed first and never clobber a status that
  update_by_id() just wrote.
- update_by_id() overwrites with set, since it carries the user's newest
  submitted data.
- find() re-sets a cached identity on every hit to keep it warm.

The store is authoritative and its failures propagate. The cache is
best-effort: CacheUnavailableError is logged and the operation continues.
"""

from collections.abc import Awaitable
from typing import Optional, TypeVar

import logfire
from pydantic import ValidationError as PydanticValidationError

from dossier.config import RoutingSettings
from dossier.domain.error import (
    CacheUnavailableError,
    NotFoundError,
    ValidationError,
)
from dossier.domain.model import Identity, ProfileDocument
from dossier.domain.repository import IdentityCache, ProfileRepository, StatusCache
from dossier.domain.service.clock import Clock, IdGenerator
from dossier.domain.service.completeness import is_complete
from dossier.domain.value import ProfileId, ProfileStatus

T = TypeVar("T")


class ProfileService:
    """Domain service for profile lifecycle, caching and access checks."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        identity_cache: IdentityCache,
        status_cache: StatusCache,
        id_generator: IdGenerator,
        clock: Clock,
        routing: RoutingSettings,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Authoritative profile store
            identity_cache: Identity cache keyed by user id
            status_cache: Profile status cache keyed by email
            id_generator: Source of new profile ids
            clock: Source of update timestamps
            routing: Redirect URL templates
        """
        self.profile_repository = profile_repository
        self.identity_cache = identity_cache
        self.status_cache = status_cache
        self.id_generator = id_generator
        self.clock = clock
        self.routing = routing

    async def save(self, identity: Identity) -> Identity:
        """Register a signed-in identity.

        Creates a minimal, incomplete profile the first time an email is
        seen, caches the profile status and the identity (both set-if-absent)
        and hands the identity back unchanged.

        Args:
            identity: Identity from the authentication provider

        Returns:
            The same identity

        Raises:
            StoreUnavailableError: If the profile store fails
        """
        with logfire.span(
            "profile_service.save", user_id=identity.user_id, email=identity.email
        ):
            if identity.email:
                status = await self._bootstrap_profile(identity, identity.email)
                written = await self._best_effort(
                    "status_cache.set_if_new",
                    self.status_cache.set_if_new(identity.email, status),
                    email=identity.email,
                )
                logfire.info(
                    "Profile status cached",
                    email=identity.email,
                    profile_id=status.id,
                    complete=status.complete,
                    written=bool(written),
                )
            else:
                logfire.warn(
                    "Identity has no email, skipping profile bootstrap",
                    user_id=identity.user_id,
                    provider=identity.provider,
                )

            await self._best_effort(
                "identity_cache.set_if_new",
                self.identity_cache.set_if_new(identity.user_id, identity),
                user_id=identity.user_id,
            )
            return identity

    async def find(self, identity: Identity) -> Optional[Identity]:
        """Look up a cached identity, falling back to the store.

        A cache hit is written back unconditionally. On a miss the identity
        is returned (and cached) only if a profile exists for its email.

        Args:
            identity: Identity to look up (only user_id and email are used)

        Returns:
            The known identity, or None

        Raises:
            StoreUnavailableError: If the fallback store lookup fails
        """
        with logfire.span("profile_service.find", user_id=identity.user_id):
            cached = await self._best_effort(
                "identity_cache.get",
                self.identity_cache.get(identity.user_id),
                user_id=identity.user_id,
            )
            if cached is not None:
                await self._best_effort(
                    "identity_cache.set",
                    self.identity_cache.set(identity.user_id, cached),
                    user_id=identity.user_id,
                )
                logfire.info("Identity cache hit", user_id=identity.user_id)
                return cached

            if not identity.email:
                logfire.info("Identity cache miss", user_id=identity.user_id)
                return None

            documents = await self.profile_repository.find_by_email(identity.email)
            if not documents:
                logfire.info(
                    "Identity not known", user_id=identity.user_id, email=identity.email
                )
                return None

            await self._best_effort(
                "identity_cache.set",
                self.identity_cache.set(identity.user_id, identity),
                user_id=identity.user_id,
            )
            logfire.info(
                "Identity restored from store",
                user_id=identity.user_id,
                profile_id=documents[0].id,
            )
            return identity

    async def update_by_id(
        self, profile_id: ProfileId, document: ProfileDocument
    ) -> None:
        """Write a full profile document and correct its cached status.

        The status is recomputed from the document as given, so callers
        holding a partial update must merge it into the stored document
        first (see ProfileUpdate.merge_into).

        Args:
            profile_id: Id of the profile being updated
            document: Full document to store

        Raises:
            ValidationError: If id or email is missing, the ids disagree or
                the document does not validate
            StoreUnavailableError: If the profile store fails
        """
        if not profile_id or not profile_id.strip():
            raise ValidationError("Profile id is required")
        if not document.email or not document.email.strip():
            raise ValidationError("Profile email is required")
        if document.id and document.id != profile_id:
            raise ValidationError(
                f"Document id {document.id} does not match profile id {profile_id}"
            )

        with logfire.span(
            "profile_service.update_by_id", profile_id=profile_id, email=document.email
        ):
            try:
                stamped = ProfileDocument.model_validate(
                    {
                        **document.model_dump(),
                        "id": profile_id,
                        "update_dt": self.clock.now(),
                    }
                )
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid profile document: {e}") from e
            status = ProfileStatus(id=profile_id, complete=is_complete(stamped))

            await self.profile_repository.update_profile(stamped)
            logfire.info(
                "Profile updated", profile_id=profile_id, complete=status.complete
            )

            await self._best_effort(
                "status_cache.set",
                self.status_cache.set(stamped.email, status),
                email=stamped.email,
            )

    async def get_profile(self, profile_id: ProfileId) -> ProfileDocument:
        """Get a stored profile document.

        Args:
            profile_id: Profile id

        Returns:
            The stored document

        Raises:
            NotFoundError: If no document has this id
            StoreUnavailableError: If the profile store fails
        """
        with logfire.span("profile_service.get_profile", profile_id=profile_id):
            document = await self.profile_repository.find_by_id(profile_id)
            if document is None:
                logfire.warn("Profile not found", profile_id=profile_id)
                raise NotFoundError("Profile", profile_id)
            return document

    async def build_redirect_url(self, email: Optional[str]) -> str:
        """Pick where to send a user after sign-in.

        Complete profiles go to the profile page, incomplete ones to the
        profile form. Without an email or a cached status the fallback
        route is used.

        Args:
            email: Session email, if any

        Returns:
            Redirect path
        """
        status = await self._cached_status(email)
        if status is None:
            logfire.info("No cached profile status, using fallback route", email=email)
            return self.routing.fallback_path
        if status.complete:
            return self.routing.profile_url(status.id)
        return self.routing.create_url(status.id)

    async def authorized(self, candidate_id: str, email: Optional[str]) -> bool:
        """Check that a session may edit the given profile.

        Args:
            candidate_id: Profile id the caller wants to touch
            email: Session email, if any

        Returns:
            True iff the status cached for `email` carries `candidate_id`
        """
        status = await self._cached_status(email)
        allowed = status is not None and status.id == candidate_id
        if not allowed:
            logfire.warn(
                "Profile access denied", profile_id=candidate_id, email=email
            )
        return allowed

    async def _bootstrap_profile(self, identity: Identity, email: str) -> ProfileStatus:
        """Find the profile for `email`, inserting a minimal one if none exists."""
        documents = await self.profile_repository.find_by_email(email)
        if documents:
            document = documents[0]
            if len(documents) > 1:
                logfire.warn(
                    "Multiple profiles share an email, using the first",
                    email=email,
                    count=len(documents),
                )
            logfire.info("Existing profile found", email=email, profile_id=document.id)
        else:
            document = ProfileDocument(
                id=self.id_generator.new_profile_id(),
                first_name=identity.first_name,
                last_name=identity.last_name,
                email=email,
                update_dt=self.clock.now(),
            )
            await self.profile_repository.insert_profile(document)
            logfire.info("Profile created", email=email, profile_id=document.id)

        return ProfileStatus(id=document.id, complete=is_complete(document))

    async def _cached_status(self, email: Optional[str]) -> Optional[ProfileStatus]:
        if not email:
            return None
        return await self._best_effort(
            "status_cache.get", self.status_cache.get(email), email=email
        )

    async def _best_effort(
        self, operation: str, call: Awaitable[T], **attributes: object
    ) -> Optional[T]:
        """Await a cache call, logging and absorbing cache outages."""
        try:
            return await call
        except CacheUnavailableError as e:
            logfire.warn(
                "Cache unavailable", operation=operation, error=str(e), **attributes
            )
            return None
