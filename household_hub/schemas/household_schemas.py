from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from household_hub.models.role import HouseholdRole, ASSIGNABLE_ROLES

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


def _assignable(role: HouseholdRole) -> HouseholdRole:
    if role not in ASSIGNABLE_ROLES:
        raise ValueError("role must be admin or member")
    return role


class HouseholdSummaryResponse(BaseModel):
    """Household with the caller's role in it"""

    id: str
    name: str
    description: str | None
    role: HouseholdRole

    model_config = {"from_attributes": True}


class HouseholdCreate(BaseModel):
    """Create a household; the caller becomes its owner"""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class HouseholdUpdate(BaseModel):
    """Update household details (ADMIN or OWNER)"""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class HouseholdMemberResponse(BaseModel):
    """Member of a household, keyed by profile"""

    id: str  # profile id
    name: str
    image: str | None
    color: str | None
    role: HouseholdRole
    has_user: bool
    joined_at: datetime


class HouseholdDetailResponse(BaseModel):
    id: str
    name: str
    description: str | None
    members: list[HouseholdMemberResponse]


class HouseholdResponse(BaseModel):
    id: str
    name: str
    description: str | None

    model_config = {"from_attributes": True}


class MemberAddRequest(BaseModel):
    """Add an existing profile to a household. OWNER is never assignable."""

    profile_id: str = Field(..., min_length=1, max_length=36)
    role: HouseholdRole = Field(default=HouseholdRole.MEMBER, description="admin or member")

    @field_validator("role")
    @classmethod
    def role_must_be_assignable(cls, value: HouseholdRole) -> HouseholdRole:
        return _assignable(value)


class MemberRoleUpdate(BaseModel):
    """Change a member's role (admin or member)"""

    role: HouseholdRole = Field(..., description="New role to assign")

    @field_validator("role")
    @classmethod
    def role_must_be_assignable(cls, value: HouseholdRole) -> HouseholdRole:
        return _assignable(value)


class MemberRoleResponse(BaseModel):
    id: str
    name: str
    role: HouseholdRole


class MemberRemoveResponse(BaseModel):
    message: str
    removed_profile_id: str
