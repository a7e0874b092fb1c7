"""Field-level rules and normalization for profile input.

Checks run in a fixed order and the first violation is raised on its own;
callers never receive more than one error per call.
"""

import re

from core.exceptions import ErrorCode, ProfileValidationError
from domain.entities.profile import ProfileInput, ValidatedProfile

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

# local-part "@" domain, where the domain has at least one dot between
# non-empty labels
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s.]+(\.[^@\s.]+)+$")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_profile(data: ProfileInput) -> ValidatedProfile:
    """Validate ``data`` and return its normalized name and email.

    Raises:
        ProfileValidationError: for the first rule that ``data`` breaks.
    """
    if _is_blank(data.name):
        raise ProfileValidationError(ErrorCode.MISSING_NAME, "Name is required", "name")
    if _is_blank(data.email):
        raise ProfileValidationError(ErrorCode.MISSING_EMAIL, "Email is required", "email")

    name = data.name.strip()  # type: ignore[union-attr]
    email = data.email.strip()  # type: ignore[union-attr]

    if not EMAIL_PATTERN.match(email):
        raise ProfileValidationError(
            ErrorCode.INVALID_EMAIL_FORMAT, "Invalid email format", "email"
        )
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ProfileValidationError(
            ErrorCode.NAME_LENGTH_OUT_OF_RANGE,
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            "name",
        )
    if len(email) > EMAIL_MAX_LENGTH:
        raise ProfileValidationError(
            ErrorCode.EMAIL_TOO_LONG,
            f"Email cannot exceed {EMAIL_MAX_LENGTH} characters",
            "email",
        )

    return ValidatedProfile(name=name, email=email.lower())
