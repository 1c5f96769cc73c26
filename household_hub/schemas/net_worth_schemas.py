import datetime as dt
from pydantic import BaseModel


class PortfolioSummary(BaseModel):
    total_value: float
    total_cost: float
    total_gain: float
    total_gain_percent: float
    holdings_count: int


class PensionSummary(BaseModel):
    total_value: float
    accounts_count: int


class AssetsSummary(BaseModel):
    """Liabilities are reported as a positive total"""

    total_assets: float
    total_liabilities: float
    net_value: float
    items_count: int


class DashboardResponse(BaseModel):
    net_worth: float
    portfolio: PortfolioSummary
    pension: PensionSummary
    assets: AssetsSummary


class SnapshotResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    date: dt.date
    net_worth: float
    portfolio: float
    pension: float
    assets: float
    created_at: dt.datetime
