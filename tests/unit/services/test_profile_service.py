"""Unit tests for ProfileService."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    EmailInUseError,
    ErrorCode,
    ProfileNotFoundError,
    ProfileValidationError,
    StorageError,
)
from domain.entities.profile import Profile, ProfileInput
from domain.repositories.errors import (
    RepositoryError,
    StorageConflictError,
    StorageNotFoundError,
)
from domain.services.profile_service import ProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    return ProfileService(lambda: uow)


def _echo_create(uow: FakeUnitOfWork) -> None:
    """Make the mocked repository return whatever it is asked to store."""

    async def _create(profile: Profile) -> Profile:
        return profile

    uow.profiles.create.side_effect = _create


def _echo_update(uow: FakeUnitOfWork) -> None:
    async def _update(profile: Profile) -> Profile:
        return profile

    uow.profiles.update.side_effect = _update


# --- create_profile ---


class TestCreateProfile:
    @pytest.mark.asyncio
    async def test_creates_profile(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get_by_email.return_value = None
        _echo_create(uow)

        result = await service.create_profile(
            ProfileInput(name="John Doe", email="john@example.com")
        )

        assert result.name == "John Doe"
        assert result.email == "john@example.com"
        assert isinstance(result.id, UUID)
        assert result.updated_at is None
        assert result.created_at.tzinfo is timezone.utc
        uow.profiles.create.assert_called_once()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_normalizes_name_and_email(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_email.return_value = None
        _echo_create(uow)

        result = await service.create_profile(ProfileInput(name=" Bob ", email=" BOB@X.COM "))

        assert result.name == "Bob"
        assert result.email == "bob@x.com"
        uow.profiles.get_by_email.assert_called_once_with("bob@x.com")

    @pytest.mark.asyncio
    async def test_ignores_caller_supplied_id(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_email.return_value = None
        _echo_create(uow)
        supplied = uuid4()

        result = await service.create_profile(
            ProfileInput(id=supplied, name="John Doe", email="john@example.com")
        )

        assert result.id != supplied

    @pytest.mark.asyncio
    async def test_raises_email_in_use_on_lookup(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get_by_email.return_value = profile

        with pytest.raises(EmailInUseError) as exc_info:
            await service.create_profile(
                ProfileInput(name="Johnny", email="John@Example.com")
            )

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == ErrorCode.EMAIL_IN_USE
        uow.profiles.get_by_email.assert_called_once_with("john@example.com")
        uow.profiles.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_storage_conflict_becomes_email_in_use(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        # Another writer took the email between the lookup and the insert
        uow.profiles.get_by_email.return_value = None
        uow.profiles.create.side_effect = StorageConflictError("john@example.com")

        with pytest.raises(EmailInUseError) as exc_info:
            await service.create_profile(
                ProfileInput(name="John Doe", email="john@example.com")
            )

        assert isinstance(exc_info.value.__cause__, StorageConflictError)
        assert uow.rolled_back
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_validation_failure_skips_storage(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.create_profile(ProfileInput(name="A", email="x@y.com"))

        assert exc_info.value.error_code == ErrorCode.NAME_LENGTH_OUT_OF_RANGE
        uow.profiles.get_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_storage_failure_is_opaque(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_email.side_effect = RepositoryError("connection refused on 10.0.0.5")

        with pytest.raises(StorageError) as exc_info:
            await service.create_profile(
                ProfileInput(name="John Doe", email="john@example.com")
            )

        assert exc_info.value.status_code == 500
        assert "10.0.0.5" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RepositoryError)


# --- get_profile ---


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_returns_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get.return_value = profile

        result = await service.get_profile(profile.id)

        assert result is profile
        uow.profiles.get.assert_called_once_with(profile.id)

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = None

        assert await service.get_profile(uuid4()) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("empty_id", [None, UUID(int=0)])
    async def test_rejects_empty_id(
        self, service: ProfileService, uow: FakeUnitOfWork, empty_id: UUID | None
    ):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.get_profile(empty_id)

        assert exc_info.value.error_code == ErrorCode.EMPTY_ID
        uow.profiles.get.assert_not_called()


# --- update_profile ---


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_updates_name_and_email(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        created_at = profile.created_at
        uow.profiles.get.return_value = profile
        uow.profiles.get_by_email.return_value = None
        _echo_update(uow)

        result = await service.update_profile(
            ProfileInput(id=profile.id, name=" Jane Doe ", email="JANE@example.com")
        )

        assert result.id == profile.id
        assert result.name == "Jane Doe"
        assert result.email == "jane@example.com"
        assert result.created_at == created_at
        assert result.updated_at is not None
        assert uow.committed

    @pytest.mark.asyncio
    async def test_same_email_different_case_skips_lookup(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get.return_value = profile
        _echo_update(uow)

        result = await service.update_profile(
            ProfileInput(id=profile.id, name="John D.", email="JOHN@Example.COM")
        )

        assert result.email == "john@example.com"
        uow.profiles.get_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_raises_email_in_use_for_other_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        other = Profile(name="Jane Doe", email="jane@example.com")
        uow.profiles.get.return_value = profile
        uow.profiles.get_by_email.return_value = other

        with pytest.raises(EmailInUseError):
            await service.update_profile(
                ProfileInput(id=profile.id, name="John Doe", email="Jane@Example.com")
            )

        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_raises_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.update_profile(
                ProfileInput(id=uuid4(), name="John Doe", email="john@example.com")
            )

    @pytest.mark.asyncio
    async def test_validates_before_lookup(
        self, service: ProfileService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.update_profile(ProfileInput(id=profile_id, name="John", email=""))

        assert exc_info.value.error_code == ErrorCode.MISSING_EMAIL
        uow.profiles.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_empty_id(self, service: ProfileService, uow: FakeUnitOfWork):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.update_profile(
                ProfileInput(id=UUID(int=0), name="John Doe", email="john@example.com")
            )

        assert exc_info.value.error_code == ErrorCode.EMPTY_ID

    @pytest.mark.asyncio
    async def test_storage_conflict_becomes_email_in_use(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get.return_value = profile
        uow.profiles.get_by_email.return_value = None
        uow.profiles.update.side_effect = StorageConflictError("jane@example.com")

        with pytest.raises(EmailInUseError):
            await service.update_profile(
                ProfileInput(id=profile.id, name="John Doe", email="jane@example.com")
            )

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_row_removed_during_update_becomes_not_found(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get.return_value = profile
        uow.profiles.update.side_effect = StorageNotFoundError(str(profile.id))

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.update_profile(
                ProfileInput(id=profile.id, name="John Doe", email="john@example.com")
            )

        assert exc_info.value.details == {"profile_id": str(profile.id)}

    @pytest.mark.asyncio
    async def test_sets_updated_at_on_every_update(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        profile.updated_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
        uow.profiles.get.return_value = profile
        _echo_update(uow)

        result = await service.update_profile(
            ProfileInput(id=profile.id, name="John Doe", email="john@example.com")
        )

        assert result.updated_at is not None
        assert result.updated_at > datetime(2020, 1, 1, tzinfo=timezone.utc)


# --- delete_profile ---


class TestDeleteProfile:
    @pytest.mark.asyncio
    async def test_deletes_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile
    ):
        uow.profiles.get.return_value = profile

        await service.delete_profile(profile.id)

        uow.profiles.delete.assert_called_once_with(profile.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.delete_profile(uuid4())

        uow.profiles.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_empty_id(self, service: ProfileService, uow: FakeUnitOfWork):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.delete_profile(UUID(int=0))

        assert exc_info.value.error_code == ErrorCode.EMPTY_ID


# --- list_profiles ---


class TestListProfiles:
    @pytest.mark.asyncio
    async def test_returns_page(self, service: ProfileService, uow: FakeUnitOfWork):
        items = [Profile(name=f"User {i}", email=f"user{i}@example.com") for i in range(2)]
        uow.profiles.count.return_value = 12
        uow.profiles.get_all.return_value = items

        result = await service.list_profiles(page=2, page_size=5)

        uow.profiles.get_all.assert_called_once_with(5, 5)
        assert result.items == items
        assert result.total_count == 12
        assert result.total_pages == 3
        assert result.has_next_page
        assert result.has_previous_page

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (1, 101)])
    async def test_rejects_bad_pagination(
        self, service: ProfileService, uow: FakeUnitOfWork, page: int, page_size: int
    ):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.list_profiles(page=page, page_size=page_size)

        assert exc_info.value.error_code == ErrorCode.INVALID_PAGINATION
