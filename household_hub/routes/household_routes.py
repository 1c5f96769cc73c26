from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_context, get_household_context
from household_hub.models.context import CurrentContext
from household_hub.services.household_service import HouseholdService
from household_hub.schemas.household_schemas import (
    HouseholdSummaryResponse,
    HouseholdCreate,
    HouseholdUpdate,
    HouseholdDetailResponse,
    HouseholdResponse,
    HouseholdMemberResponse,
    MemberAddRequest,
    MemberRoleUpdate,
    MemberRoleResponse,
    MemberRemoveResponse,
)

router = APIRouter()


@router.get("", response_model=list[HouseholdSummaryResponse])
async def list_households(
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """List all households the caller belongs to, with the caller's role in each"""
    service = HouseholdService(db)
    return service.list_households(context)


@router.post("", response_model=HouseholdSummaryResponse, status_code=status.HTTP_201_CREATED)
async def create_household(
    data: HouseholdCreate,
    context: CurrentContext = Depends(get_current_context),
    db: Session = Depends(get_db),
):
    """
    Create a household.

    The caller's profile becomes its OWNER in the same transaction.
    """
    service = HouseholdService(db)
    return service.create_household(data, context)


@router.get("/{household_id}", response_model=HouseholdDetailResponse)
async def get_household(
    household_id: str,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Get household details with its members.

    - 403 if the caller is not a member
    """
    service = HouseholdService(db)
    return service.get_household(household_id, context)


@router.put("/{household_id}", response_model=HouseholdResponse)
async def update_household(
    household_id: str,
    data: HouseholdUpdate,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Update household name and description.

    - **Requires ADMIN or OWNER permissions**
    """
    service = HouseholdService(db)
    return service.update_household(household_id, data, context)


@router.delete("/{household_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_household(
    household_id: str,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Delete a household with its memberships and budget.

    - **Requires OWNER permissions**
    - Cannot delete your only household
    """
    service = HouseholdService(db)
    service.delete_household(household_id, context)


@router.post(
    "/{household_id}/members",
    response_model=HouseholdMemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    household_id: str,
    data: MemberAddRequest,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Add an existing profile to the household.

    - **Requires ADMIN or OWNER permissions**
    - Role: admin or member (default member); owner is never assignable
    """
    service = HouseholdService(db)
    return service.add_member(household_id, data, context)


@router.put("/{household_id}/members/{profile_id}", response_model=MemberRoleResponse)
async def update_member_role(
    household_id: str,
    profile_id: str,
    data: MemberRoleUpdate,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Change a member's role.

    - **Requires ADMIN or OWNER permissions**
    - The OWNER's role cannot be changed
    """
    service = HouseholdService(db)
    return service.update_member_role(household_id, profile_id, data, context)


@router.delete("/{household_id}/members/{profile_id}", response_model=MemberRemoveResponse)
async def remove_member(
    household_id: str,
    profile_id: str,
    context: CurrentContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Remove a member from the household.

    - **Requires ADMIN or OWNER permissions**
    - The OWNER cannot be removed
    """
    service = HouseholdService(db)
    service.remove_member(household_id, profile_id, context)

    return {
        "message": "Member removed successfully",
        "removed_profile_id": profile_id,
    }
