from sqlalchemy.orm import Session

from household_hub.models.context import CurrentContext
from household_hub.models.stock import StockHolding
from household_hub.repositories.holding_repository import HoldingRepository
from household_hub.repositories.ownership_repository import STOCK_ACCOUNTS
from household_hub.schemas.resource_schemas import HoldingCreate, HoldingUpdate
from household_hub.services.ownership_service import OwnershipService
from household_hub.core.exceptions import NotFoundException, ValidationException


class StockAccountService(OwnershipService):
    """Brokerage accounts and their holdings"""

    def __init__(self, db: Session):
        super().__init__(db, STOCK_ACCOUNTS)
        self.holding_repo = HoldingRepository(db)

    def list_holdings(self, account_id: str, context: CurrentContext) -> list[StockHolding]:
        self.get_accessible(account_id, context)
        return self.holding_repo.get_by_account(account_id)

    def add_holding(
        self, account_id: str, data: HoldingCreate, context: CurrentContext
    ) -> StockHolding:
        """
        Add a position to an account.

        Raises:
            NotFoundException / ForbiddenException: Per the account's access rule
            ValidationException: If the account already holds the symbol
        """
        self.get_accessible(account_id, context)

        if self.holding_repo.get_by_symbol(account_id, data.symbol):
            raise ValidationException(
                f"A holding for {data.symbol} already exists in this account"
            )

        return self.holding_repo.create(
            StockHolding(
                account_id=account_id,
                symbol=data.symbol,
                quantity=data.quantity,
                avg_cost_basis=data.avg_cost_basis,
            )
        )

    def get_holding(self, holding_id: str, context: CurrentContext) -> StockHolding:
        """
        Load a holding through its account's access rule.

        Raises:
            NotFoundException: If the holding doesn't exist
            ForbiddenException: If the caller's household has no access to the account
        """
        holding = self.holding_repo.get_by_id(holding_id)
        if not holding:
            raise NotFoundException("Holding not found")
        self.get_accessible(holding.account_id, context)
        return holding

    def update_holding(
        self, holding_id: str, data: HoldingUpdate, context: CurrentContext
    ) -> StockHolding:
        """Correct quantity and/or average cost basis; the symbol is fixed"""
        holding = self.get_holding(holding_id, context)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(holding, key, value)
        return self.holding_repo.update(holding)

    def delete_holding(self, holding_id: str, context: CurrentContext) -> None:
        holding = self.get_holding(holding_id, context)
        self.holding_repo.delete(holding)
