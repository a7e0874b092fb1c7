"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.memory.in_memory_profile_repo import InMemoryProfileStore
from infrastructure.memory.in_memory_uow import InMemoryUnitOfWork


@lru_cache
def get_memory_store() -> InMemoryProfileStore:
    """Process-wide store used when STORAGE_BACKEND=memory."""
    return InMemoryProfileStore()


def get_uow_factory() -> Callable[[], IUnitOfWork]:
    """Factory for creating Unit of Work instances."""
    if settings.storage_backend == "memory":
        store = get_memory_store()

        def memory_factory() -> InMemoryUnitOfWork:
            return InMemoryUnitOfWork(store)

        return memory_factory

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), max_page_size=settings.max_page_size)
