"""SQLAlchemy implementation of Profile repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from domain.entities.profile import Profile
from domain.repositories.errors import (
    RepositoryError,
    StorageConflictError,
    StorageNotFoundError,
)
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by its normalized email."""
        stmt = select(ProfileModel).where(ProfileModel.email == email.lower())
        result = await self._execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self, offset: int, limit: int) -> list[Profile]:
        """Get a slice of profiles ordered by creation time."""
        stmt = (
            select(ProfileModel)
            .order_by(ProfileModel.created_at, ProfileModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count(self) -> int:
        """Get the total number of profiles."""
        stmt = select(func.count()).select_from(ProfileModel)
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._flush(profile.email)
        try:
            await self._session.refresh(model)
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        model = await self._get_model(profile.id)

        if not model:
            raise StorageNotFoundError(str(profile.id))

        model.name = profile.name
        model.email = profile.email
        model.updated_at = profile.updated_at

        await self._flush(profile.email)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> None:
        """Delete a profile."""
        stmt = delete(ProfileModel).where(ProfileModel.id == id)
        await self._execute(stmt)
        await self._flush()

    async def _get_model(self, id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def _execute(self, stmt: Executable) -> Result[Any]:
        try:
            return await self._session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise RepositoryError(str(exc)) from exc

    async def _flush(self, email: str = "") -> None:
        """Flush pending writes, mapping the unique email constraint."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise StorageConflictError(email) from exc
        except (SQLAlchemyError, OSError) as exc:
            raise RepositoryError(str(exc)) from exc

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
