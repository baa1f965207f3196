"""Unit tests for ProfileService."""

import pytest

from dossier.domain.error import (
    CacheUnavailableError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from dossier.domain.value import ProfileId, ProfileStatus
from dossier.persistence.cache import InMemoryIdentityCache, InMemoryStatusCache
from tests.factories import (
    EMAIL,
    NOW,
    PROFILE_ID,
    USER_ID,
    make_complete_profile,
    make_identity,
    make_incomplete_profile,
)


class UnreachableStatusCache(InMemoryStatusCache):
    """Status cache whose backend is down."""

    async def get(self, key):
        raise CacheUnavailableError("connection refused")

    async def set(self, key, value):
        raise CacheUnavailableError("connection refused")

    async def set_if_new(self, key, value):
        raise CacheUnavailableError("connection refused")


class UnreachableIdentityCache(InMemoryIdentityCache):
    """Identity cache whose backend is down."""

    async def get(self, key):
        raise CacheUnavailableError("connection refused")

    async def set(self, key, value):
        raise CacheUnavailableError("connection refused")

    async def set_if_new(self, key, value):
        raise CacheUnavailableError("connection refused")


class TestSave:
    """Tests for ProfileService.save()."""

    @pytest.mark.asyncio
    async def test_creates_incomplete_profile_for_brand_new_user(self, setup):
        """First sign-in inserts a minimal profile and caches it as incomplete."""
        # Arrange
        identity = make_identity()

        # Act
        returned = await setup.service.save(identity)

        # Assert
        assert returned == identity
        assert len(setup.repository.inserted) == 1
        inserted = setup.repository.inserted[0]
        assert inserted.model_dump(by_alias=True, exclude_none=True) == {
            "_id": "12345",
            "firstName": "foo",
            "lastName": "foo",
            "email": "foo@foo.com",
            "applications": [],
            "appointments": [],
            "updateDt": NOW,
        }
        assert setup.status_cache.writes == [
            ("set_if_new", EMAIL, ProfileStatus(id="12345", complete=False))
        ]
        assert setup.identity_cache.writes == [("set_if_new", USER_ID, identity)]

    @pytest.mark.asyncio
    async def test_existing_incomplete_profile_is_cached_as_incomplete(self, setup):
        """A returning user with a base profile gets an incomplete status."""
        # Arrange
        await setup.repository.insert_profile(make_incomplete_profile())
        setup.repository.inserted.clear()
        identity = make_identity()

        # Act
        returned = await setup.service.save(identity)

        # Assert
        assert returned == identity
        assert setup.repository.inserted == []
        assert setup.id_generator.calls == 0
        assert await setup.status_cache.get(EMAIL) == ProfileStatus(
            id=PROFILE_ID, complete=False
        )
        assert setup.identity_cache.writes == [("set_if_new", USER_ID, identity)]

    @pytest.mark.asyncio
    async def test_existing_complete_profile_is_cached_as_complete(self, setup):
        """A returning user with a full profile gets a complete status."""
        # Arrange
        await setup.repository.insert_profile(make_complete_profile())
        setup.repository.inserted.clear()

        # Act
        await setup.service.save(make_identity())

        # Assert
        assert setup.repository.inserted == []
        assert setup.status_cache.writes == [
            ("set_if_new", EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))
        ]

    @pytest.mark.asyncio
    async def test_repeated_save_inserts_once(self, setup):
        """Saving the same user twice never inserts a second profile."""
        identity = make_identity()

        first = await setup.service.save(identity)
        second = await setup.service.save(identity)

        assert first == identity
        assert second == identity
        assert len(setup.repository.inserted) == 1

    @pytest.mark.asyncio
    async def test_save_does_not_clobber_status_written_by_update(self, setup):
        """A status already cached (e.g. by update_by_id) survives a later save."""
        # Arrange
        await setup.repository.insert_profile(make_incomplete_profile())
        fresher = ProfileStatus(id=PROFILE_ID, complete=True)
        await setup.status_cache.set(EMAIL, fresher)

        # Act
        await setup.service.save(make_identity())

        # Assert
        assert await setup.status_cache.get(EMAIL) == fresher

    @pytest.mark.asyncio
    async def test_save_does_not_clobber_cached_identity(self, setup):
        """An identity cached by a racing request is kept."""
        earlier = make_identity(name="bar")
        await setup.identity_cache.set(USER_ID, earlier)

        await setup.service.save(make_identity())

        assert await setup.identity_cache.get(USER_ID) == earlier

    @pytest.mark.asyncio
    async def test_first_of_several_profiles_is_authoritative(self, setup):
        """When an email matches several documents the first one wins."""
        await setup.repository.insert_profile(make_complete_profile("first"))
        await setup.repository.insert_profile(make_incomplete_profile("second"))

        await setup.service.save(make_identity())

        assert await setup.status_cache.get(EMAIL) == ProfileStatus(
            id="first", complete=True
        )

    @pytest.mark.asyncio
    async def test_identity_without_email_is_only_cached(self, setup):
        """No email means no profile lookup; the identity is still cached."""
        identity = make_identity(email=None)

        returned = await setup.service.save(identity)

        assert returned == identity
        assert setup.repository.inserted == []
        assert setup.status_cache.writes == []
        assert await setup.identity_cache.get(USER_ID) == identity

    @pytest.mark.asyncio
    async def test_cache_outage_does_not_fail_save(self, setup):
        """The profile is still created when both caches are down."""
        setup.service.status_cache = UnreachableStatusCache()
        setup.service.identity_cache = UnreachableIdentityCache()
        identity = make_identity()

        returned = await setup.service.save(identity)

        assert returned == identity
        assert len(setup.repository.inserted) == 1

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, setup):
        """Store errors are never swallowed."""

        async def broken_find_by_email(email):
            raise StoreUnavailableError("database is down")

        setup.repository.find_by_email = broken_find_by_email

        with pytest.raises(StoreUnavailableError):
            await setup.service.save(make_identity())

        assert setup.status_cache.writes == []


class TestFind:
    """Tests for ProfileService.find()."""

    @pytest.mark.asyncio
    async def test_cache_hit_is_returned_and_rewritten(self, setup):
        """A cached identity is returned and re-set unconditionally."""
        cached = make_identity(name="cached")
        await setup.identity_cache.set(USER_ID, cached)
        setup.identity_cache.writes.clear()

        found = await setup.service.find(make_identity())

        assert found == cached
        assert setup.identity_cache.writes == [("set", USER_ID, cached)]

    @pytest.mark.asyncio
    async def test_cache_miss_falls_back_to_store(self, setup):
        """A known user missing from the cache is restored from the store."""
        await setup.repository.insert_profile(make_incomplete_profile())
        identity = make_identity()

        found = await setup.service.find(identity)

        assert found == identity
        assert setup.identity_cache.writes == [("set", USER_ID, identity)]

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, setup):
        """Nothing cached and nothing stored yields None."""
        found = await setup.service.find(make_identity())

        assert found is None
        assert setup.identity_cache.writes == []

    @pytest.mark.asyncio
    async def test_cache_miss_without_email_is_not_found(self, setup):
        """Without an email there is nothing to fall back on."""
        found = await setup.service.find(make_identity(email=None))

        assert found is None

    @pytest.mark.asyncio
    async def test_cache_outage_treated_as_miss(self, setup):
        """An unreachable identity cache falls through to the store."""
        await setup.repository.insert_profile(make_incomplete_profile())
        setup.service.identity_cache = UnreachableIdentityCache()
        identity = make_identity()

        assert await setup.service.find(identity) == identity


class TestUpdateById:
    """Tests for ProfileService.update_by_id()."""

    @pytest.mark.asyncio
    async def test_completing_profile_updates_store_and_overwrites_status(self, setup):
        """Filling out every field stores the document and marks it complete."""
        # Arrange
        identity = make_identity()
        await setup.service.save(identity)
        setup.repository.inserted.clear()

        # Act
        await setup.service.update_by_id(PROFILE_ID, make_complete_profile())

        # Assert
        assert setup.repository.inserted == []
        assert len(setup.repository.updated) == 1
        updated = setup.repository.updated[0]
        assert updated.id == PROFILE_ID
        assert updated.update_dt == NOW
        assert updated.age == 66
        assert await setup.status_cache.get(EMAIL) == ProfileStatus(
            id=PROFILE_ID, complete=True
        )
        assert setup.status_cache.writes[-1] == (
            "set",
            EMAIL,
            ProfileStatus(id=PROFILE_ID, complete=True),
        )

    @pytest.mark.asyncio
    async def test_status_recomputed_when_fields_removed(self, setup):
        """A document missing fields moves the status back to incomplete."""
        await setup.repository.insert_profile(make_complete_profile())
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))

        await setup.service.update_by_id(
            PROFILE_ID, make_complete_profile().model_copy(update={"phone": None})
        )

        assert await setup.status_cache.get(EMAIL) == ProfileStatus(
            id=PROFILE_ID, complete=False
        )

    @pytest.mark.asyncio
    async def test_update_then_authorized(self, setup):
        """The freshly written status authorizes its owner."""
        await setup.repository.insert_profile(make_incomplete_profile())

        await setup.service.update_by_id(PROFILE_ID, make_complete_profile())

        assert await setup.service.authorized(PROFILE_ID, EMAIL) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("profile_id", ["", "   "])
    async def test_blank_id_rejected_before_io(self, setup, profile_id):
        """Missing id fails fast without touching store or cache."""
        with pytest.raises(ValidationError):
            await setup.service.update_by_id(
                ProfileId(profile_id), make_complete_profile()
            )

        assert setup.repository.updated == []
        assert setup.status_cache.writes == []

    @pytest.mark.asyncio
    async def test_blank_email_rejected_before_io(self, setup):
        """Missing email fails fast without touching store or cache."""
        await setup.repository.insert_profile(make_incomplete_profile())
        document = make_complete_profile().model_copy(update={"email": ""})

        with pytest.raises(ValidationError):
            await setup.service.update_by_id(PROFILE_ID, document)

        assert setup.repository.updated == []
        assert setup.status_cache.writes == []

    @pytest.mark.asyncio
    async def test_invalid_document_rejected_before_io(self, setup):
        """A document that would not load back from the store is refused."""
        await setup.repository.insert_profile(make_incomplete_profile())
        document = make_complete_profile().model_copy(update={"first_name": None})

        with pytest.raises(ValidationError):
            await setup.service.update_by_id(PROFILE_ID, document)

        assert setup.repository.updated == []
        assert setup.status_cache.writes == []

    @pytest.mark.asyncio
    async def test_mismatched_id_rejected(self, setup):
        """The document cannot move to a different id."""
        with pytest.raises(ValidationError):
            await setup.service.update_by_id(
                ProfileId("6789"), make_complete_profile()
            )

    @pytest.mark.asyncio
    async def test_cache_outage_does_not_fail_update(self, setup):
        """The store write stands even if the status cannot be cached."""
        await setup.repository.insert_profile(make_incomplete_profile())
        setup.service.status_cache = UnreachableStatusCache()

        await setup.service.update_by_id(PROFILE_ID, make_complete_profile())

        assert len(setup.repository.updated) == 1

    @pytest.mark.asyncio
    async def test_store_failure_leaves_status_untouched(self, setup):
        """A failed store write propagates and does not correct the cache."""

        async def broken_update_profile(document):
            raise StoreUnavailableError("database is down")

        setup.repository.update_profile = broken_update_profile

        with pytest.raises(StoreUnavailableError):
            await setup.service.update_by_id(PROFILE_ID, make_complete_profile())

        assert setup.status_cache.writes == []


class TestGetProfile:
    """Tests for ProfileService.get_profile()."""

    @pytest.mark.asyncio
    async def test_returns_stored_document(self, setup):
        stored = make_complete_profile()
        await setup.repository.insert_profile(stored)

        assert await setup.service.get_profile(PROFILE_ID) == stored

    @pytest.mark.asyncio
    async def test_missing_profile_raises_not_found(self, setup):
        with pytest.raises(NotFoundError):
            await setup.service.get_profile(ProfileId("missing"))


class TestBuildRedirectUrl:
    """Tests for ProfileService.build_redirect_url()."""

    @pytest.mark.asyncio
    async def test_incomplete_profile_goes_to_create(self, setup):
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=False))

        assert await setup.service.build_redirect_url(EMAIL) == "/create/12345"

    @pytest.mark.asyncio
    async def test_complete_profile_goes_to_profile(self, setup):
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))

        assert await setup.service.build_redirect_url(EMAIL) == "/profile/12345"

    @pytest.mark.asyncio
    async def test_missing_status_uses_fallback(self, setup):
        assert await setup.service.build_redirect_url(EMAIL) == "/create"

    @pytest.mark.asyncio
    async def test_missing_email_uses_fallback(self, setup):
        assert await setup.service.build_redirect_url(None) == "/create"

    @pytest.mark.asyncio
    async def test_cache_outage_uses_fallback(self, setup):
        setup.service.status_cache = UnreachableStatusCache()

        assert await setup.service.build_redirect_url(EMAIL) == "/create"

    @pytest.mark.asyncio
    async def test_new_user_is_sent_to_create(self, setup):
        """End to end: first sign-in redirects to the profile form."""
        await setup.service.save(make_identity())

        assert await setup.service.build_redirect_url(EMAIL) == "/create/12345"


class TestAuthorized:
    """Tests for ProfileService.authorized()."""

    @pytest.mark.asyncio
    async def test_matching_id_is_authorized(self, setup):
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))

        assert await setup.service.authorized("12345", EMAIL) is True

    @pytest.mark.asyncio
    async def test_other_id_is_not_authorized(self, setup):
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))

        assert await setup.service.authorized("6789", EMAIL) is False

    @pytest.mark.asyncio
    async def test_no_cached_status_is_not_authorized(self, setup):
        assert await setup.service.authorized("12345", EMAIL) is False

    @pytest.mark.asyncio
    async def test_no_email_is_not_authorized(self, setup):
        await setup.status_cache.set(EMAIL, ProfileStatus(id=PROFILE_ID, complete=True))

        assert await setup.service.authorized("12345", None) is False

    @pytest.mark.asyncio
    async def test_cache_outage_denies(self, setup):
        setup.service.status_cache = UnreachableStatusCache()

        assert await setup.service.authorized("12345", EMAIL) is False
