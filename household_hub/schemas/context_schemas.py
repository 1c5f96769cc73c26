from pydantic import BaseModel, Field
from household_hub.schemas.household_schemas import HouseholdSummaryResponse, HEX_COLOR
from household_hub.schemas.profile_schemas import HouseholdProfileResponse


class CurrentProfileResponse(BaseModel):
    id: str
    name: str
    image: str | None
    color: str | None
    user_id: str | None

    model_config = {"from_attributes": True}


class ContextResponse(BaseModel):
    """Caller's profile, households and active household"""

    profile: CurrentProfileResponse
    households: list[HouseholdSummaryResponse]
    active_household: HouseholdSummaryResponse
    household_profiles: list[HouseholdProfileResponse]

    model_config = {"from_attributes": True}


class FamilyMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., pattern=HEX_COLOR)


class OnboardingRequest(BaseModel):
    """First-run setup: own profile, first household, optional family profiles"""

    profile_name: str = Field(..., min_length=1, max_length=100)
    profile_color: str = Field(..., pattern=HEX_COLOR)
    household_name: str = Field(..., min_length=1, max_length=100)
    family_members: list[FamilyMemberCreate] = Field(default_factory=list, max_length=10)


class OnboardingResponse(BaseModel):
    profile: CurrentProfileResponse
    household: HouseholdSummaryResponse
    family_profiles: list[CurrentProfileResponse]
    migrated_resources: dict[str, int] = Field(..., description="Ownerless resources assigned per table")
