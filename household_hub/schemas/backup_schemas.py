"""
Row shapes of the backup archive.

Each model mirrors one table. Archive keys are camelCase, decimals are
plain JSON numbers and temporal values ISO-8601 strings. Parsing a row
yields native values keyed by column attribute name, ready for a bulk insert.
"""

import datetime as dt
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from household_hub.models.role import HouseholdRole
from household_hub.models.pension import PensionAccountType
from household_hub.models.misc_asset import MiscAssetType


def _as_naive_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is not None:
        value = value.astimezone(dt.UTC).replace(tzinfo=None)
    return value


# Archives written elsewhere may carry "Z" / offsets; stored values are naive UTC
Timestamp = Annotated[dt.datetime, AfterValidator(_as_naive_utc)]


class BackupRow(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str


class TimestampedRow(BackupRow):
    created_at: Timestamp
    updated_at: Timestamp


class UserRow(TimestampedRow):
    email: str
    name: str | None = None
    image: str | None = None


class ProfileRow(TimestampedRow):
    name: str
    image: str | None = None
    color: str | None = None
    user_id: str | None = None


class HouseholdRow(TimestampedRow):
    name: str
    description: str | None = None


class HouseholdMemberRow(BackupRow):
    household_id: str
    profile_id: str
    role: HouseholdRole
    joined_at: Timestamp


class StockAccountRow(TimestampedRow):
    name: str
    broker: str | None = None
    currency: str = "USD"
    user_id: str | None = None


class StockAccountOwnerRow(BackupRow):
    account_id: str
    profile_id: str


class StockHoldingRow(TimestampedRow):
    symbol: str
    quantity: float
    avg_cost_basis: float
    account_id: str


class StockPriceHistoryRow(BackupRow):
    symbol: str
    price: float
    timestamp: Timestamp


class PensionAccountRow(TimestampedRow):
    type: PensionAccountType
    provider_name: str
    account_name: str
    current_value: float
    fee_from_deposit: float
    fee_from_total: float
    user_id: str | None = None


class PensionAccountOwnerRow(BackupRow):
    account_id: str
    profile_id: str


class PensionDepositRow(BackupRow):
    deposit_date: dt.date
    salary_month: dt.date
    amount: float
    employer: str
    account_id: str
    created_at: Timestamp


class MiscAssetRow(TimestampedRow):
    type: MiscAssetType
    name: str
    current_value: float
    interest_rate: float
    monthly_payment: float | None = None
    monthly_deposit: float | None = None
    maturity_date: dt.date | None = None
    user_id: str | None = None


class MiscAssetOwnerRow(BackupRow):
    asset_id: str
    profile_id: str


class NetWorthSnapshotRow(BackupRow):
    user_id: str
    date: dt.date
    net_worth: float
    portfolio: float
    pension: float
    assets: float
    created_at: Timestamp


class BackupMetadata(BaseModel):
    """metadata.json of an archive"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    backup_date: str | None = None
    schema_version: str | None = None
    created_by: str | None = None
    counts: dict[str, int] = Field(default_factory=dict)


class RestoreSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    backup_date: str | None
    counts: dict[str, int]


class RestoreResponse(BaseModel):
    message: str
    metadata: RestoreSummary
