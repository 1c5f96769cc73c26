"""Repository for household budget data."""

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from household_hub.models.budget import BudgetCategory, BudgetCategoryGroup, BudgetTransaction


class BudgetRepository:
    """Category groups, categories and transactions of one household"""

    def __init__(self, db: Session, household_id: str):
        self.db = db
        self.household_id = household_id

    def get_groups(self) -> list[BudgetCategoryGroup]:
        """Groups with their categories, both by sort order"""
        return (
            self.db.query(BudgetCategoryGroup)
            .options(selectinload(BudgetCategoryGroup.categories))
            .filter(BudgetCategoryGroup.household_id == self.household_id)
            .order_by(BudgetCategoryGroup.sort_order, BudgetCategoryGroup.created_at)
            .all()
        )

    def get_group(self, group_id: str) -> BudgetCategoryGroup | None:
        return (
            self.db.query(BudgetCategoryGroup)
            .filter(
                BudgetCategoryGroup.id == group_id,
                BudgetCategoryGroup.household_id == self.household_id,
            )
            .first()
        )

    def get_category(self, category_id: str) -> BudgetCategory | None:
        return (
            self.db.query(BudgetCategory)
            .filter(
                BudgetCategory.id == category_id,
                BudgetCategory.household_id == self.household_id,
            )
            .first()
        )

    def next_group_sort_order(self) -> int:
        current = (
            self.db.query(func.max(BudgetCategoryGroup.sort_order))
            .filter(BudgetCategoryGroup.household_id == self.household_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def next_category_sort_order(self, group_id: str) -> int:
        current = (
            self.db.query(func.max(BudgetCategory.sort_order))
            .filter(BudgetCategory.group_id == group_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def get_transactions(
        self, category_id: str | None = None, uncategorized: bool = False
    ) -> list[BudgetTransaction]:
        """
        Transactions of the household, newest first.

        Args:
            category_id: Only transactions of this category
            uncategorized: Only transactions without a category
        """
        query = self.db.query(BudgetTransaction).filter(
            BudgetTransaction.household_id == self.household_id
        )
        if uncategorized:
            query = query.filter(BudgetTransaction.category_id.is_(None))
        elif category_id:
            query = query.filter(BudgetTransaction.category_id == category_id)
        return query.order_by(
            BudgetTransaction.transaction_date.desc(), BudgetTransaction.created_at.desc()
        ).all()

    def create(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.commit()
