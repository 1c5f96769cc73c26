from datetime import date, datetime
from pydantic import BaseModel, Field
from household_hub.models.budget import TransactionType


class CategoryGroupCreate(BaseModel):
    """Create a category group; appended last when sort_order is omitted"""

    name: str = Field(..., min_length=1, max_length=100)
    sort_order: int | None = None


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    group_id: str = Field(..., min_length=1)
    budget: float | None = Field(None, ge=0)
    is_must: bool = False
    sort_order: int | None = None


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    group_id: str
    budget: float | None
    is_must: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class CategoryGroupResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    sort_order: int
    categories: list[CategoryResponse]
    created_at: datetime
    updated_at: datetime


class BudgetTransactionCreate(BaseModel):
    """Income or expense entry in the active household's budget"""

    type: TransactionType
    transaction_date: date
    amount: float = Field(..., gt=0)
    currency: str = Field(default="ILS", pattern=r"^[A-Z]{3}$")
    category_id: str | None = None
    profile_id: str | None = None
    notes: str | None = Field(None, max_length=1000)


class BudgetTransactionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    type: TransactionType
    transaction_date: date
    amount: float
    currency: str
    category_id: str | None
    profile_id: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
