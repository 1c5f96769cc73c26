from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.dependencies import get_current_user
from household_hub.models.user import User
from household_hub.services.context_service import ContextService
from household_hub.services.onboarding_service import OnboardingService
from household_hub.schemas.context_schemas import (
    ContextResponse,
    OnboardingRequest,
    OnboardingResponse,
)

router = APIRouter()


@router.get("/context", response_model=ContextResponse)
async def get_context(
    x_household_id: str | None = Header(default=None),
    household_id_query: str | None = Query(default=None, alias="householdId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get the caller's profile, households, active household and its profiles.

    Returns 404 with `needs_onboarding: true` when the caller has no profile
    or no household yet.
    """
    context = ContextService(db).resolve(user, x_household_id or household_id_query)
    if context is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Not found", "needs_onboarding": True},
        )
    return {
        "profile": context.profile,
        "households": context.households,
        "active_household": context.active_household,
        "household_profiles": context.household_profiles,
    }


@router.post("/onboarding", response_model=OnboardingResponse, status_code=status.HTTP_201_CREATED)
async def complete_onboarding(
    data: OnboardingRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    First-run setup.

    - Creates the caller's profile and a household owned by it
    - Adds up to 10 family profiles (no login) as members
    - Assigns the caller's ownerless resources to the new profile
    - Fails with 400 if the caller already has a profile
    """
    service = OnboardingService(db)
    return service.complete(data, user)
