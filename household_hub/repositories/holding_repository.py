from sqlalchemy.orm import Session
from household_hub.models.stock import StockHolding


class HoldingRepository:
    """Repository for StockHolding data access"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, holding: StockHolding) -> StockHolding:
        self.db.add(holding)
        self.db.commit()
        self.db.refresh(holding)
        return holding

    def get_by_account(self, account_id: str) -> list[StockHolding]:
        """Holdings of an account ordered by symbol"""
        return (
            self.db.query(StockHolding)
            .filter(StockHolding.account_id == account_id)
            .order_by(StockHolding.symbol)
            .all()
        )

    def get_by_symbol(self, account_id: str, symbol: str) -> StockHolding | None:
        return (
            self.db.query(StockHolding)
            .filter(StockHolding.account_id == account_id, StockHolding.symbol == symbol)
            .first()
        )

    def get_by_id(self, holding_id: str) -> StockHolding | None:
        return self.db.query(StockHolding).filter(StockHolding.id == holding_id).first()

    def update(self, holding: StockHolding) -> StockHolding:
        self.db.commit()
        self.db.refresh(holding)
        return holding

    def delete(self, holding: StockHolding) -> None:
        self.db.delete(holding)
        self.db.commit()
