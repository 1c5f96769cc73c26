from sqlalchemy.orm import Session

from household_hub.models.context import CurrentContext
from household_hub.models.pension import PensionDeposit
from household_hub.repositories.deposit_repository import DepositRepository
from household_hub.repositories.ownership_repository import PENSION_ACCOUNTS
from household_hub.schemas.resource_schemas import DepositCreate, DepositUpdate
from household_hub.services.ownership_service import OwnershipService
from household_hub.core.exceptions import NotFoundException


class PensionAccountService(OwnershipService):
    """Pension / study-fund accounts and their monthly deposits"""

    def __init__(self, db: Session):
        super().__init__(db, PENSION_ACCOUNTS)
        self.deposit_repo = DepositRepository(db)

    def list_deposits(self, account_id: str, context: CurrentContext) -> list[PensionDeposit]:
        self.get_accessible(account_id, context)
        return self.deposit_repo.get_by_account(account_id)

    def add_deposit(
        self, account_id: str, data: DepositCreate, context: CurrentContext
    ) -> PensionDeposit:
        self.get_accessible(account_id, context)
        return self.deposit_repo.create(PensionDeposit(account_id=account_id, **data.model_dump()))

    def get_deposit(self, deposit_id: str, context: CurrentContext) -> PensionDeposit:
        deposit = self.deposit_repo.get_by_id(deposit_id)
        if not deposit:
            raise NotFoundException("Deposit not found")
        self.get_accessible(deposit.account_id, context)
        return deposit

    def update_deposit(
        self, deposit_id: str, data: DepositUpdate, context: CurrentContext
    ) -> PensionDeposit:
        deposit = self.get_deposit(deposit_id, context)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(deposit, key, value)
        return self.deposit_repo.update(deposit)

    def delete_deposit(self, deposit_id: str, context: CurrentContext) -> None:
        deposit = self.get_deposit(deposit_id, context)
        self.deposit_repo.delete(deposit)
