"""Errors raised at the storage boundary.

Repositories raise these instead of driver exceptions so the service can
classify failures without knowing which backend it talks to.
"""


class RepositoryError(Exception):
    """Base class for storage failures."""


class StorageConflictError(RepositoryError):
    """A write would break the unique email constraint."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email constraint violated: {email}")


class StorageNotFoundError(RepositoryError):
    """The profile targeted by a write no longer exists."""

    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__(f"Profile {profile_id} not found")
