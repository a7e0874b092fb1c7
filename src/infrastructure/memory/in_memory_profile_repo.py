"""In-memory implementation of Profile repository."""

from dataclasses import replace
from uuid import UUID

from domain.entities.profile import Profile
from domain.repositories.errors import StorageConflictError, StorageNotFoundError


class InMemoryProfileStore:
    """Process-local profile table with a unique index on email.

    Every method runs to completion without awaiting, so each write is
    atomic with respect to other coroutines on the same event loop.
    Stored entities are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._profiles: dict[UUID, Profile] = {}
        self._email_index: dict[str, UUID] = {}

    def get(self, id: UUID) -> Profile | None:
        profile = self._profiles.get(id)
        return replace(profile) if profile else None

    def get_by_email(self, email: str) -> Profile | None:
        profile_id = self._email_index.get(email.lower())
        return self.get(profile_id) if profile_id else None

    def get_all(self, offset: int, limit: int) -> list[Profile]:
        # dicts keep insertion order, which is creation order here
        ordered = list(self._profiles.values())
        return [replace(p) for p in ordered[offset : offset + limit]]

    def count(self) -> int:
        return len(self._profiles)

    def insert(self, profile: Profile) -> Profile:
        key = profile.email.lower()
        if key in self._email_index:
            raise StorageConflictError(profile.email)
        self._profiles[profile.id] = replace(profile)
        self._email_index[key] = profile.id
        return replace(profile)

    def update(self, profile: Profile) -> Profile:
        current = self._profiles.get(profile.id)
        if current is None:
            raise StorageNotFoundError(str(profile.id))

        key = profile.email.lower()
        owner = self._email_index.get(key)
        if owner is not None and owner != profile.id:
            raise StorageConflictError(profile.email)

        del self._email_index[current.email.lower()]
        self._email_index[key] = profile.id
        self._profiles[profile.id] = replace(profile)
        return replace(profile)

    def delete(self, id: UUID) -> None:
        profile = self._profiles.pop(id, None)
        if profile:
            del self._email_index[profile.email.lower()]


class InMemoryProfileRepository:
    """IProfileRepository backed by an InMemoryProfileStore."""

    def __init__(self, store: InMemoryProfileStore) -> None:
        self._store = store

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        return self._store.get(id)

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by its normalized email."""
        return self._store.get_by_email(email)

    async def get_all(self, offset: int, limit: int) -> list[Profile]:
        """Get a slice of profiles ordered by creation time."""
        return self._store.get_all(offset, limit)

    async def count(self) -> int:
        """Get the total number of profiles."""
        return self._store.count()

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        return self._store.insert(profile)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        return self._store.update(profile)

    async def delete(self, id: UUID) -> None:
        """Delete a profile."""
        self._store.delete(id)
