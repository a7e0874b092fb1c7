"""Profile domain entity."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Profile:
    """Domain entity for a user profile."""

    name: str
    email: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None


@dataclass
class ProfileInput:
    """Caller-supplied profile data, before validation and normalization."""

    name: str | None = None
    email: str | None = None
    id: UUID | None = None


@dataclass(frozen=True, slots=True)
class ValidatedProfile:
    """Normalized fields produced by the profile validator."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class ProfilePage:
    """Read-only value object: one page of profiles plus the total count."""

    items: list[Profile]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1
