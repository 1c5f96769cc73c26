from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from household_hub.models.role import HouseholdRole
from household_hub.schemas.household_schemas import HEX_COLOR


class HouseholdProfileResponse(BaseModel):
    """Profile as seen inside the active household"""

    id: str
    name: str
    image: str | None
    color: str | None
    role: HouseholdRole
    has_user: bool

    model_config = {"from_attributes": True}


class ProfileDetailResponse(HouseholdProfileResponse):
    created_at: datetime
    updated_at: datetime


class ProfileCreate(BaseModel):
    """Create a non-login profile in the active household (ADMIN or OWNER)"""

    name: str = Field(..., min_length=1, max_length=100)
    color: str | None = Field(None, pattern=HEX_COLOR)


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    image: str | None = Field(None, max_length=500)
    color: str | None = Field(None, pattern=HEX_COLOR)

    @field_validator("image")
    @classmethod
    def image_must_be_https(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("https://"):
            raise ValueError("Image URL must use HTTPS")
        return value


class ProfileResponse(BaseModel):
    id: str
    name: str
    image: str | None
    color: str | None

    model_config = {"from_attributes": True}
