"""In-memory Unit of Work implementation."""

from typing import Any, Optional

from infrastructure.memory.in_memory_profile_repo import (
    InMemoryProfileRepository,
    InMemoryProfileStore,
)


class InMemoryUnitOfWork:
    """Unit of Work over a shared InMemoryProfileStore.

    Writes are visible as soon as each repository call returns, so commit
    and rollback have nothing to do.
    """

    def __init__(self, store: InMemoryProfileStore) -> None:
        self._store = store
        self._active = False

    @property
    def profiles(self) -> InMemoryProfileRepository:
        """Get profile repository."""
        if not self._active:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return InMemoryProfileRepository(self._store)

    async def commit(self) -> None:
        """Commit the current transaction."""

    async def rollback(self) -> None:
        """Rollback the current transaction."""

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self._active = True
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        self._active = False
