"""Tenant, group and profile API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import get_current_identity, require_tenant_access
from ..core.errors import NotFound, ValidationError
from ..domain.models import Identity, NewProfile
from ..repositories.dependencies import get_repository_container
from ..repositories.interfaces import RepositoryContainer
from ..utils.logging_config import get_logger
from .schemas import (
    ErrorResponse,
    GroupListResponse,
    GroupResponse,
    HearingTestResponse,
    ProfileCreate,
    ProfileCreatedResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    TenantListResponse,
    TenantResponse,
    TestStepResponse,
)

logger = get_logger('api')

router = APIRouter(tags=["tenants"])

TENANT_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Access token required"},
    403: {"model": ErrorResponse, "description": "Invalid token or access denied to this tenant"},
}


@router.get(
    "/tenants",
    response_model=TenantListResponse,
    responses={401: TENANT_RESPONSES[401], 403: {"model": ErrorResponse, "description": "Invalid or expired token"}},
)
async def list_tenants(
    identity: Identity = Depends(get_current_identity),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> TenantListResponse:
    """List the tenants the caller is a member of, in membership order."""
    tenants = await repos.tenant.list_for_user(identity.user_id)
    return TenantListResponse(
        tenants=[TenantResponse.model_validate(tenant) for tenant in tenants]
    )


@router.get(
    "/api/{tenant_id}/groups",
    response_model=GroupListResponse,
    responses=TENANT_RESPONSES,
)
async def list_groups(
    tenant_id: str,
    identity: Identity = Depends(require_tenant_access),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> GroupListResponse:
    """List the groups of a tenant."""
    groups = await repos.group.list_by_tenant(tenant_id)
    return GroupListResponse(groups=[GroupResponse.model_validate(group) for group in groups])


@router.get(
    "/api/{tenant_id}/groups/{group_id}/profiles",
    response_model=ProfileListResponse,
    responses=TENANT_RESPONSES,
)
async def list_group_profiles(
    tenant_id: str,
    group_id: str,
    identity: Identity = Depends(require_tenant_access),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ProfileListResponse:
    """List the profiles of a group. An unknown group yields an empty list."""
    profiles = await repos.profile.list_by_group(tenant_id, group_id)
    return ProfileListResponse(
        profiles=[ProfileResponse.model_validate(profile) for profile in profiles]
    )


@router.post(
    "/api/{tenant_id}/groups/{group_id}/profiles",
    response_model=ProfileCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **TENANT_RESPONSES,
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Group not found"},
    },
)
async def create_profile(
    tenant_id: str,
    group_id: str,
    profile_data: ProfileCreate,
    identity: Identity = Depends(require_tenant_access),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ProfileCreatedResponse:
    """Create an employee profile inside an existing group of the tenant."""
    group = await repos.group.get_by_id(group_id)
    if group is None or group.tenant_id != tenant_id:
        raise NotFound("Group not found")

    profile = await repos.profile.create(
        NewProfile(
            tenant_id=tenant_id,
            group_id=group_id,
            employee_id=profile_data.employee_id,
            first_name=profile_data.first_name,
            last_name=profile_data.last_name,
            date_of_birth=profile_data.date_of_birth.isoformat(),
            department=profile_data.department,
            last_test_date=(
                profile_data.last_test_date.isoformat()
                if profile_data.last_test_date
                else None
            ),
        )
    )
    logger.info(f"User {identity.user_id} created profile {profile.id} in {tenant_id}/{group_id}")
    return ProfileCreatedResponse(profile=ProfileResponse.model_validate(profile))


# Registered before /profiles/{profile_id} so "search" is not taken as an id
@router.get(
    "/api/{tenant_id}/profiles/search",
    response_model=ProfileListResponse,
    responses={
        **TENANT_RESPONSES,
        400: {"model": ErrorResponse, "description": "Missing search query"},
    },
)
async def search_profiles(
    tenant_id: str,
    q: Optional[str] = Query(None, description="Matched against names, employee id and department"),
    identity: Identity = Depends(require_tenant_access),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ProfileListResponse:
    """Case-insensitive substring search over the tenant's profiles."""
    query = (q or "").strip()
    if not query:
        raise ValidationError(
            "Search query parameter 'q' is required",
            errors=[{"field": "query.q", "message": "Field required", "type": "missing"}],
        )

    profiles = await repos.profile.search(tenant_id, query)
    return ProfileListResponse(
        profiles=[ProfileResponse.model_validate(profile) for profile in profiles]
    )


@router.get(
    "/api/{tenant_id}/profiles/{profile_id}",
    response_model=ProfileDetailResponse,
    responses={
        **TENANT_RESPONSES,
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
async def get_profile(
    tenant_id: str,
    profile_id: str,
    identity: Identity = Depends(require_tenant_access),
    repos: RepositoryContainer = Depends(get_repository_container),
) -> ProfileDetailResponse:
    """Get a profile with its assigned test path and previous hearing tests."""
    profile = await repos.profile.get(tenant_id, profile_id)
    if profile is None:
        raise NotFound("Profile not found")

    test_path = await repos.test_path.get_by_profile(profile_id)
    previous_tests = await repos.hearing_test.list_by_profile(profile_id)

    return ProfileDetailResponse(
        profile=ProfileResponse.model_validate(profile),
        test_path=[TestStepResponse.model_validate(step) for step in test_path.steps] if test_path else [],
        previous_tests=[HearingTestResponse.model_validate(test) for test in previous_tests],
    )
