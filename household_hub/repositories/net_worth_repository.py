from datetime import date

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from household_hub.models.net_worth import NetWorthSnapshot
from household_hub.models.stock import StockPriceHistory


class NetWorthRepository:
    """Repository for net worth snapshots and the price lookups behind them"""

    def __init__(self, db: Session):
        self.db = db

    def get_latest_prices(self, symbols: set[str]) -> dict[str, float]:
        """Most recent recorded price of each symbol; symbols without history are absent"""
        if not symbols:
            return {}
        latest = (
            select(
                StockPriceHistory.symbol,
                func.max(StockPriceHistory.timestamp).label("timestamp"),
            )
            .where(StockPriceHistory.symbol.in_(symbols))
            .group_by(StockPriceHistory.symbol)
            .subquery()
        )
        rows = self.db.execute(
            select(StockPriceHistory.symbol, StockPriceHistory.price).join(
                latest,
                and_(
                    StockPriceHistory.symbol == latest.c.symbol,
                    StockPriceHistory.timestamp == latest.c.timestamp,
                ),
            )
        )
        return {symbol: float(price) for symbol, price in rows}

    def get_snapshot(self, user_id: str, day: date) -> NetWorthSnapshot | None:
        return (
            self.db.query(NetWorthSnapshot)
            .filter(NetWorthSnapshot.user_id == user_id, NetWorthSnapshot.date == day)
            .first()
        )

    def save(self, snapshot: NetWorthSnapshot) -> NetWorthSnapshot:
        self.db.add(snapshot)
        self.db.commit()
        self.db.refresh(snapshot)
        return snapshot

    def get_history(self, user_id: str, limit: int) -> list[NetWorthSnapshot]:
        """Latest `limit` snapshots of a user, oldest first"""
        snapshots = (
            self.db.query(NetWorthSnapshot)
            .filter(NetWorthSnapshot.user_id == user_id)
            .order_by(NetWorthSnapshot.date.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(snapshots))
