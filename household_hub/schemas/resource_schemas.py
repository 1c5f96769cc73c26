from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator, model_validator
from household_hub.models.pension import PensionAccountType
from household_hub.models.misc_asset import MiscAssetType

CURRENCY_CODE = r"^[A-Z]{3}$"


class OwnerResponse(BaseModel):
    """Profile owning a financial resource"""

    id: str
    name: str
    image: str | None
    color: str | None

    model_config = {"from_attributes": True}


class OwnersUpdate(BaseModel):
    """Replace the complete owner set of a resource"""

    profile_ids: list[str] = Field(..., min_length=1)


# Stock accounts


class StockAccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    broker: str | None = Field(None, max_length=255)
    currency: str = Field(default="USD", pattern=CURRENCY_CODE)
    owner_ids: list[str] | None = Field(
        None, description="Owner profiles; defaults to the caller's profile"
    )


class StockAccountUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    broker: str | None = Field(None, max_length=255)
    currency: str | None = Field(None, pattern=CURRENCY_CODE)


class StockAccountResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    broker: str | None
    currency: str
    owners: list[OwnerResponse]
    created_at: datetime
    updated_at: datetime


class HoldingCreate(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)
    quantity: float = Field(..., gt=0)
    avg_cost_basis: float = Field(..., ge=0)

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()


class HoldingUpdate(BaseModel):
    quantity: float | None = Field(None, gt=0)
    avg_cost_basis: float | None = Field(None, ge=0)


class HoldingResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    account_id: str
    symbol: str
    quantity: float
    avg_cost_basis: float
    created_at: datetime
    updated_at: datetime


# Pension accounts


class PensionAccountCreate(BaseModel):
    type: PensionAccountType
    provider_name: str = Field(..., min_length=1, max_length=255)
    account_name: str = Field(..., min_length=1, max_length=255)
    current_value: float = Field(..., ge=0)
    fee_from_deposit: float = Field(..., ge=0, le=100, description="Percentage")
    fee_from_total: float = Field(..., ge=0, le=100, description="Percentage")
    owner_ids: list[str] | None = None


class PensionAccountUpdate(BaseModel):
    provider_name: str | None = Field(None, min_length=1, max_length=255)
    account_name: str | None = Field(None, min_length=1, max_length=255)
    current_value: float | None = Field(None, ge=0)
    fee_from_deposit: float | None = Field(None, ge=0, le=100)
    fee_from_total: float | None = Field(None, ge=0, le=100)


class PensionAccountResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    type: PensionAccountType
    provider_name: str
    account_name: str
    current_value: float
    fee_from_deposit: float
    fee_from_total: float
    owners: list[OwnerResponse]
    created_at: datetime
    updated_at: datetime


class DepositCreate(BaseModel):
    deposit_date: date
    salary_month: date = Field(..., description="Month the salary was paid for")
    amount: float = Field(..., gt=0)
    employer: str = Field(..., min_length=1, max_length=255)


class DepositUpdate(BaseModel):
    deposit_date: date | None = None
    salary_month: date | None = None
    amount: float | None = Field(None, gt=0)
    employer: str | None = Field(None, min_length=1, max_length=255)


class DepositResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    account_id: str
    deposit_date: date
    salary_month: date
    amount: float
    employer: str
    created_at: datetime


# Misc assets


class MiscAssetCreate(BaseModel):
    """
    Create an asset or liability.

    Liabilities (loan, mortgage) are stored negative whatever the sign of
    current_value, and require a monthly payment. monthly_deposit is kept
    only for child savings.
    """

    type: MiscAssetType
    name: str = Field(..., min_length=1, max_length=255)
    current_value: float
    interest_rate: float = Field(..., ge=0, le=100, description="Percentage")
    monthly_payment: float | None = Field(None, gt=0)
    monthly_deposit: float | None = Field(None, ge=0)
    maturity_date: date | None = None
    owner_ids: list[str] | None = None

    @model_validator(mode="after")
    def liabilities_need_payment(self) -> "MiscAssetCreate":
        if self.type.is_liability and self.monthly_payment is None:
            raise ValueError("Monthly payment is required for loans and mortgages")
        return self


class MiscAssetUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    current_value: float | None = None
    interest_rate: float | None = Field(None, ge=0, le=100)
    monthly_payment: float | None = Field(None, gt=0)
    monthly_deposit: float | None = Field(None, ge=0)
    maturity_date: date | None = None


class MiscAssetResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    type: MiscAssetType
    name: str
    current_value: float
    interest_rate: float
    monthly_payment: float | None
    monthly_deposit: float | None
    maturity_date: date | None
    owners: list[OwnerResponse]
    created_at: datetime
    updated_at: datetime
