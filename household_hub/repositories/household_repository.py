"""Repository for Household model operations."""

from sqlalchemy.orm import Session
from household_hub.models.household import Household


class HouseholdRepository:
    """Repository for Household model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, household_id: str) -> Household | None:
        """
        Get household by ID.

        Args:
            household_id: Household ID

        Returns:
            Household object or None if not found
        """
        return self.db.query(Household).filter(Household.id == household_id).first()

    def create_no_commit(self, household: Household) -> Household:
        """
        Add a household and flush to assign its ID.

        Caller is responsible for commit, so the household and its owner
        membership land in the same database transaction.
        """
        self.db.add(household)
        self.db.flush()
        return household

    def update(self, household: Household) -> Household:
        """
        Update an existing household.

        Args:
            household: Household object with updated fields

        Returns:
            Updated Household object
        """
        self.db.commit()
        self.db.refresh(household)
        return household

    def delete(self, household: Household) -> None:
        """
        Delete a household.

        WARNING: memberships and all budget data of the household are
        deleted with it. Profiles and financial resources are kept.

        Args:
            household: Household object to delete
        """
        self.db.delete(household)
        self.db.commit()
