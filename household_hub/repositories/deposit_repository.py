from sqlalchemy.orm import Session
from household_hub.models.pension import PensionDeposit


class DepositRepository:
    """Repository for PensionDeposit data access"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, deposit: PensionDeposit) -> PensionDeposit:
        self.db.add(deposit)
        self.db.commit()
        self.db.refresh(deposit)
        return deposit

    def get_by_account(self, account_id: str) -> list[PensionDeposit]:
        """Deposits of an account, newest salary month first"""
        return (
            self.db.query(PensionDeposit)
            .filter(PensionDeposit.account_id == account_id)
            .order_by(PensionDeposit.salary_month.desc(), PensionDeposit.deposit_date.desc())
            .all()
        )

    def get_by_id(self, deposit_id: str) -> PensionDeposit | None:
        return self.db.query(PensionDeposit).filter(PensionDeposit.id == deposit_id).first()

    def update(self, deposit: PensionDeposit) -> PensionDeposit:
        self.db.commit()
        self.db.refresh(deposit)
        return deposit

    def delete(self, deposit: PensionDeposit) -> None:
        self.db.delete(deposit)
        self.db.commit()
