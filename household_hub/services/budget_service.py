import structlog
from sqlalchemy.orm import Session

from household_hub.models.budget import BudgetCategory, BudgetCategoryGroup, BudgetTransaction
from household_hub.models.context import CurrentContext
from household_hub.repositories.budget_repository import BudgetRepository
from household_hub.schemas.budget_schemas import (
    CategoryGroupCreate,
    CategoryCreate,
    BudgetTransactionCreate,
)
from household_hub.core.exceptions import NotFoundException

logger = structlog.get_logger(__name__)


class BudgetService:
    """
    Budget of the caller's active household.

    Objects of other households are reported as not found. Deleting a group
    deletes its categories; deleting a category leaves its transactions in
    place as uncategorized.
    """

    def __init__(self, db: Session, context: CurrentContext):
        self.db = db
        self.context = context
        self.repo = BudgetRepository(db, context.active_household.id)

    def list_groups(self) -> list[BudgetCategoryGroup]:
        return self.repo.get_groups()

    def create_group(self, data: CategoryGroupCreate) -> BudgetCategoryGroup:
        sort_order = data.sort_order
        if sort_order is None:
            sort_order = self.repo.next_group_sort_order()

        return self.repo.create(
            BudgetCategoryGroup(
                name=data.name,
                sort_order=sort_order,
                household_id=self.context.active_household.id,
            )
        )

    def delete_group(self, group_id: str) -> None:
        group = self.repo.get_group(group_id)
        if not group:
            raise NotFoundException("Category group not found")

        self.repo.delete(group)
        logger.info("category_group_deleted", group_id=group_id, household_id=group.household_id)

    def create_category(self, data: CategoryCreate) -> BudgetCategory:
        """
        Raises:
            NotFoundException: If the group is not in the active household
        """
        if not self.repo.get_group(data.group_id):
            raise NotFoundException("Category group not found")

        sort_order = data.sort_order
        if sort_order is None:
            sort_order = self.repo.next_category_sort_order(data.group_id)

        return self.repo.create(
            BudgetCategory(
                name=data.name,
                group_id=data.group_id,
                budget=data.budget,
                is_must=data.is_must,
                sort_order=sort_order,
                household_id=self.context.active_household.id,
            )
        )

    def delete_category(self, category_id: str) -> None:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundException("Category not found")

        self.repo.delete(category)
        logger.info("category_deleted", category_id=category_id)

    def list_transactions(
        self, category_id: str | None = None, uncategorized: bool = False
    ) -> list[BudgetTransaction]:
        return self.repo.get_transactions(category_id=category_id, uncategorized=uncategorized)

    def create_transaction(self, data: BudgetTransactionCreate) -> BudgetTransaction:
        """
        Raises:
            NotFoundException: If the category or profile is not in the active household
        """
        if data.category_id and not self.repo.get_category(data.category_id):
            raise NotFoundException("Category not found")
        if data.profile_id and not self.context.find_household_profile(data.profile_id):
            raise NotFoundException("Profile not found")

        return self.repo.create(
            BudgetTransaction(
                **data.model_dump(),
                household_id=self.context.active_household.id,
            )
        )
