from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context
from household_hub.models.context import CurrentContext
from household_hub.services.profile_service import ProfileService
from household_hub.schemas.profile_schemas import (
    HouseholdProfileResponse,
    ProfileDetailResponse,
    ProfileCreate,
    ProfileUpdate,
)

router = APIRouter()


@router.get("", response_model=list[HouseholdProfileResponse])
async def list_profiles(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """Profiles of the active household with their roles"""
    service = ProfileService(db)
    return service.list_profiles(context)


@router.post("", response_model=ProfileDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    data: ProfileCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Create a family profile without login.

    - **Requires ADMIN or OWNER permissions**
    - Added to the active household as MEMBER
    """
    service = ProfileService(db)
    return service.create_profile(data, context)


@router.get("/{profile_id}", response_model=ProfileDetailResponse)
async def get_profile(
    profile_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    service = ProfileService(db)
    return service.get_profile(profile_id, context)


@router.put("/{profile_id}", response_model=ProfileDetailResponse)
async def update_profile(
    profile_id: str,
    data: ProfileUpdate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Update a profile.

    - Own profile: always
    - Profiles without login: ADMIN or OWNER
    - Image must be an https URL
    """
    service = ProfileService(db)
    return service.update_profile(profile_id, data, context)


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    profile_id: str,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Delete a profile without login.

    - **Requires ADMIN or OWNER permissions**
    - Cannot delete your own profile or a login-linked profile
    """
    service = ProfileService(db)
    service.delete_profile(profile_id, context)
