"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import (
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.config import settings
from core.exceptions import ErrorCode, ProfileNotFoundError, ProfileValidationError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import ProfileInput
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])

_errors = {
    400: {"model": ErrorResponse, "description": "Invalid profile data"},
    404: {"model": ErrorResponse, "description": "Profile not found"},
    409: {"model": ErrorResponse, "description": "Email already in use"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get profiles one page at a time, oldest first."""
    result = await service.list_profiles(page=page, page_size=page_size)
    return ProfileListResponse.from_page(result)


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={k: _errors[k] for k in (400, 409, 500)},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create a new profile. Emails are unique regardless of case."""
    profile = await service.create_profile(ProfileInput(name=body.name, email=body.email))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile",
    responses={k: _errors[k] for k in (400, 404, 500)},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a single profile by ID."""
    profile = await service.get_profile(profile_id)
    if profile is None:
        raise ProfileNotFoundError(str(profile_id))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.put(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses=_errors,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID,
    body: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Replace a profile's name and email."""
    if body.id is not None and body.id != profile_id:
        raise ProfileValidationError(
            ErrorCode.PROFILE_ID_MISMATCH, "Profile ID mismatch", "id"
        )
    profile = await service.update_profile(
        ProfileInput(id=profile_id, name=body.name, email=body.email)
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={k: _errors[k] for k in (400, 404, 500)},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete a profile. Deletion is permanent."""
    await service.delete_profile(profile_id)
    return None
