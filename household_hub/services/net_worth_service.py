import structlog
from sqlalchemy.orm import Session

from household_hub.models.base import utcnow
from household_hub.models.context import CurrentContext
from household_hub.models.net_worth import NetWorthSnapshot
from household_hub.repositories.net_worth_repository import NetWorthRepository
from household_hub.repositories.ownership_repository import (
    OwnershipRepository,
    STOCK_ACCOUNTS,
    PENSION_ACCOUNTS,
    MISC_ASSETS,
)

logger = structlog.get_logger(__name__)

HISTORY_LENGTH = 24


class NetWorthService:
    """
    Net worth of everything visible to the caller.

    Visibility is the same rule the resource listings use. Holdings are
    valued at the latest recorded price of their symbol, or at their average
    cost basis when the symbol has no price history.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = NetWorthRepository(db)

    def summarize(self, context: CurrentContext) -> dict:
        """Dashboard totals with the portfolio, pension and assets breakdown"""
        stock_accounts = self._visible(STOCK_ACCOUNTS, context)
        pension_accounts = self._visible(PENSION_ACCOUNTS, context)
        misc_assets = self._visible(MISC_ASSETS, context)

        holdings = [h for account in stock_accounts for h in account.holdings]
        prices = self.repo.get_latest_prices({h.symbol for h in holdings})

        total_value = 0.0
        total_cost = 0.0
        for holding in holdings:
            quantity = float(holding.quantity)
            cost_basis = float(holding.avg_cost_basis)
            total_value += quantity * prices.get(holding.symbol, cost_basis)
            total_cost += quantity * cost_basis
        total_gain = total_value - total_cost

        pension_total = sum(float(account.current_value) for account in pension_accounts)

        total_assets = 0.0
        total_liabilities = 0.0
        for asset in misc_assets:
            value = float(asset.current_value)
            if value >= 0:
                total_assets += value
            else:
                total_liabilities += -value
        assets_net = total_assets - total_liabilities

        return {
            "net_worth": round(total_value + pension_total + assets_net, 2),
            "portfolio": {
                "total_value": round(total_value, 2),
                "total_cost": round(total_cost, 2),
                "total_gain": round(total_gain, 2),
                "total_gain_percent": round(total_gain / total_cost * 100, 2) if total_cost else 0.0,
                "holdings_count": len(holdings),
            },
            "pension": {
                "total_value": round(pension_total, 2),
                "accounts_count": len(pension_accounts),
            },
            "assets": {
                "total_assets": round(total_assets, 2),
                "total_liabilities": round(total_liabilities, 2),
                "net_value": round(assets_net, 2),
                "items_count": len(misc_assets),
            },
        }

    def create_snapshot(self, context: CurrentContext) -> NetWorthSnapshot:
        """Record today's totals for the caller, replacing an earlier snapshot of the same day"""
        summary = self.summarize(context)
        today = utcnow().date()

        snapshot = self.repo.get_snapshot(context.user.id, today)
        if snapshot is None:
            snapshot = NetWorthSnapshot(user_id=context.user.id, date=today)
        snapshot.net_worth = summary["net_worth"]
        snapshot.portfolio = summary["portfolio"]["total_value"]
        snapshot.pension = summary["pension"]["total_value"]
        snapshot.assets = summary["assets"]["net_value"]
        snapshot = self.repo.save(snapshot)

        logger.info(
            "net_worth_snapshot_saved",
            user_id=context.user.id,
            date=today.isoformat(),
            net_worth=summary["net_worth"],
        )
        return snapshot

    def get_history(self, context: CurrentContext) -> list[NetWorthSnapshot]:
        return self.repo.get_history(context.user.id, HISTORY_LENGTH)

    def _visible(self, resource, context: CurrentContext) -> list:
        repo = OwnershipRepository(self.db, resource)
        return repo.get_visible(context.household_profile_ids, context.user.id)
