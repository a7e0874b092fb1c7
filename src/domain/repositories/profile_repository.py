"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities.

    Implementations must enforce email uniqueness at write time, independent
    of any earlier read, and raise the errors from
    ``domain.repositories.errors`` rather than driver exceptions.
    """

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by its normalized email."""
        ...

    async def get_all(self, offset: int, limit: int) -> list[Profile]:
        """Get a slice of profiles ordered by creation time."""
        ...

    async def count(self) -> int:
        """Get the total number of profiles."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile. Raises StorageConflictError on a taken email."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update a profile.

        Raises StorageConflictError on a taken email and StorageNotFoundError
        when the row has disappeared.
        """
        ...

    async def delete(self, id: UUID) -> None:
        """Delete a profile. Does nothing if it does not exist."""
        ...
