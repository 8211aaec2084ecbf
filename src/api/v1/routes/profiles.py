"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import (
    AccountDeletionResponse,
    EducationCreate,
    EducationListResponse,
    EducationResponse,
    ExperienceCreate,
    ExperienceListResponse,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get the caller's profile",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    profile = await service.get_for_user(user.id)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update the caller's profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the profile on first call; later calls overwrite the fields sent."""
    profile = await service.upsert(user.id, body.model_dump(exclude_none=True))
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Public list of developer profiles."""
    profiles = await service.get_all()
    return ProfileListResponse(
        data=[ProfileResponse.model_validate(profile) for profile in profiles]
    )


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile by user ID",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Public profile of a given user."""
    profile = await service.get_for_user(user_id)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.delete(
    "/me",
    response_model=AccountDeletionResponse,
    summary="Delete the caller's account",
    responses={
        404: {"description": "There is no profile for this user"},
        500: {"description": "Cascade stopped part-way; see details"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> AccountDeletionResponse:
    """Delete the caller's profile, posts and user record."""
    result = await service.delete_account(user.id)
    return AccountDeletionResponse(
        message="Profile, posts and user deleted",
        posts_deleted=result.posts_deleted,
    )


@router.put(
    "/{profile_id}/experience",
    response_model=ExperienceListResponse,
    summary="Add profile experience",
    responses={
        403: {"description": "Caller does not own the profile"},
        404: {"description": "Profile not found"},
        409: {"description": "Profile changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    profile_id: UUID,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ExperienceListResponse:
    """Add an experience entry at the top of the list."""
    entries = await service.add_experience(profile_id, user.id, body.model_dump())
    return ExperienceListResponse(
        data=[ExperienceResponse.model_validate(entry) for entry in entries]
    )


@router.delete(
    "/{profile_id}/experience/{experience_id}",
    response_model=ExperienceListResponse,
    summary="Delete profile experience",
    responses={
        403: {"description": "Caller does not own the profile"},
        404: {"description": "Profile or experience entry not found"},
        409: {"description": "Profile changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    profile_id: UUID,
    experience_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ExperienceListResponse:
    """Remove an experience entry."""
    entries = await service.remove_experience(profile_id, experience_id, user.id)
    return ExperienceListResponse(
        data=[ExperienceResponse.model_validate(entry) for entry in entries]
    )


@router.put(
    "/{profile_id}/education",
    response_model=EducationListResponse,
    summary="Add profile education",
    responses={
        403: {"description": "Caller does not own the profile"},
        404: {"description": "Profile not found"},
        409: {"description": "Profile changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    profile_id: UUID,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> EducationListResponse:
    """Add an education entry at the top of the list."""
    entries = await service.add_education(profile_id, user.id, body.model_dump())
    return EducationListResponse(
        data=[EducationResponse.model_validate(entry) for entry in entries]
    )


@router.delete(
    "/{profile_id}/education/{education_id}",
    response_model=EducationListResponse,
    summary="Delete profile education",
    responses={
        403: {"description": "Caller does not own the profile"},
        404: {"description": "Profile or education entry not found"},
        409: {"description": "Profile changed concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    profile_id: UUID,
    education_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> EducationListResponse:
    """Remove an education entry."""
    entries = await service.remove_education(profile_id, education_id, user.id)
    return EducationListResponse(
        data=[EducationResponse.model_validate(entry) for entry in entries]
    )
