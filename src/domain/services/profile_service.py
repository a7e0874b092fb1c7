"""Profile service layer with business logic."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Callable
from uuid import UUID, uuid4

import structlog

from core.exceptions import (
    EmailInUseError,
    ErrorCode,
    ProfileNotFoundError,
    ProfileValidationError,
    StorageError,
)
from domain.entities.profile import Profile, ProfileInput, ProfilePage, utcnow
from domain.repositories.errors import (
    RepositoryError,
    StorageConflictError,
    StorageNotFoundError,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_validator import validate_profile

logger = structlog.get_logger()

NIL_UUID = UUID(int=0)


def _require_id(profile_id: UUID | None) -> UUID:
    if profile_id is None or profile_id == NIL_UUID:
        raise ProfileValidationError(ErrorCode.EMPTY_ID, "Profile ID cannot be empty", "id")
    return profile_id


@contextmanager
def _storage_errors(
    operation: str,
    email: str | None = None,
    profile_id: UUID | None = None,
) -> Iterator[None]:
    """Classify storage failures raised inside the block.

    The email constraint becomes EmailInUseError, a vanished row becomes
    ProfileNotFoundError, anything else becomes an opaque StorageError.
    """
    try:
        yield
    except StorageConflictError as exc:
        logger.warning(
            "profile_email_conflict",
            operation=operation,
            profile_id=str(profile_id) if profile_id else None,
            source="storage",
        )
        raise EmailInUseError(email or exc.email) from exc
    except StorageNotFoundError as exc:
        raise ProfileNotFoundError(str(profile_id or exc.profile_id)) from exc
    except RepositoryError as exc:
        logger.error(
            "profile_storage_error",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise StorageError() from exc


class ProfileService:
    """Service layer for Profile business logic.

    Email uniqueness is checked here before every write so the common case
    fails fast, and again by the storage constraint at write time, which is
    what actually holds under concurrent requests.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_page_size: int = 100,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_page_size = max_page_size

    async def create_profile(self, data: ProfileInput) -> Profile:
        """Create a new profile. Any ``data.id`` is ignored."""
        validated = validate_profile(data)

        with _storage_errors("create", email=validated.email):
            async with self._uow_factory() as uow:
                if await uow.profiles.get_by_email(validated.email):
                    logger.info("profile_email_conflict", operation="create", source="lookup")
                    raise EmailInUseError(validated.email)

                profile = Profile(
                    id=uuid4(),
                    name=validated.name,
                    email=validated.email,
                    created_at=utcnow(),
                    updated_at=None,
                )
                created = await uow.profiles.create(profile)
                await uow.commit()

        logger.info("profile_created", profile_id=str(created.id))
        return created

    async def get_profile(self, profile_id: UUID | None) -> Profile | None:
        """Get a profile, or None if no profile has this ID."""
        profile_id = _require_id(profile_id)
        with _storage_errors("get", profile_id=profile_id):
            async with self._uow_factory() as uow:
                return await uow.profiles.get(profile_id)

    async def list_profiles(self, page: int = 1, page_size: int = 10) -> ProfilePage:
        """Get one page of profiles, oldest first."""
        if page < 1 or not 1 <= page_size <= self._max_page_size:
            raise ProfileValidationError(
                ErrorCode.INVALID_PAGINATION,
                f"page must be >= 1 and page_size between 1 and {self._max_page_size}",
            )

        with _storage_errors("list"):
            async with self._uow_factory() as uow:
                total = await uow.profiles.count()
                items = await uow.profiles.get_all((page - 1) * page_size, page_size)

        return ProfilePage(items=items, page=page, page_size=page_size, total_count=total)

    async def update_profile(self, data: ProfileInput) -> Profile:
        """Replace the name and email of the profile identified by ``data.id``."""
        validated = validate_profile(data)
        profile_id = _require_id(data.id)

        with _storage_errors("update", email=validated.email, profile_id=profile_id):
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get(profile_id)
                if not profile:
                    raise ProfileNotFoundError(str(profile_id))

                # Unchanged email would otherwise match the profile itself
                if validated.email != profile.email.lower():
                    owner = await uow.profiles.get_by_email(validated.email)
                    if owner and owner.id != profile_id:
                        logger.info(
                            "profile_email_conflict",
                            operation="update",
                            profile_id=str(profile_id),
                            source="lookup",
                        )
                        raise EmailInUseError(validated.email)

                profile.name = validated.name
                profile.email = validated.email
                profile.updated_at = utcnow()

                updated = await uow.profiles.update(profile)
                await uow.commit()

        logger.info("profile_updated", profile_id=str(profile_id))
        return updated

    async def delete_profile(self, profile_id: UUID | None) -> None:
        """Delete a profile permanently."""
        profile_id = _require_id(profile_id)

        with _storage_errors("delete", profile_id=profile_id):
            async with self._uow_factory() as uow:
                if not await uow.profiles.get(profile_id):
                    raise ProfileNotFoundError(str(profile_id))

                await uow.profiles.delete(profile_id)
                await uow.commit()

        logger.info("profile_deleted", profile_id=str(profile_id))
