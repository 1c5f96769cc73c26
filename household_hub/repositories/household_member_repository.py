"""Repository for HouseholdMember model operations."""

from sqlalchemy.orm import Session, joinedload
from household_hub.models.household_member import HouseholdMember
from household_hub.models.role import HouseholdRole


class HouseholdMemberRepository:
    """Repository for HouseholdMember model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_membership(self, household_id: str, profile_id: str) -> HouseholdMember | None:
        """
        Get membership of a specific profile in a specific household.

        Args:
            household_id: Household ID
            profile_id: Profile ID

        Returns:
            HouseholdMember object or None if not found
        """
        return (
            self.db.query(HouseholdMember)
            .filter(
                HouseholdMember.household_id == household_id,
                HouseholdMember.profile_id == profile_id,
            )
            .first()
        )

    def get_household_members(self, household_id: str) -> list[HouseholdMember]:
        """
        Get all memberships of a household, profiles loaded.

        Args:
            household_id: Household ID

        Returns:
            List of HouseholdMember objects ordered by join time
        """
        return (
            self.db.query(HouseholdMember)
            .options(joinedload(HouseholdMember.profile))
            .filter(HouseholdMember.household_id == household_id)
            .order_by(HouseholdMember.joined_at, HouseholdMember.id)
            .all()
        )

    def get_profile_memberships(self, profile_id: str) -> list[HouseholdMember]:
        """
        Get all memberships of a profile (every household it belongs to).

        Args:
            profile_id: Profile ID

        Returns:
            List of HouseholdMember objects with households loaded, oldest first
        """
        return (
            self.db.query(HouseholdMember)
            .options(joinedload(HouseholdMember.household))
            .filter(HouseholdMember.profile_id == profile_id)
            .order_by(HouseholdMember.joined_at, HouseholdMember.id)
            .all()
        )

    def create_no_commit(self, membership: HouseholdMember) -> HouseholdMember:
        """Add membership and flush; caller commits"""
        self.db.add(membership)
        self.db.flush()
        return membership

    def create(self, membership: HouseholdMember) -> HouseholdMember:
        """
        Create a new household membership.

        Raises:
            IntegrityError: If (household_id, profile_id) already exists
        """
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def update_role(self, membership: HouseholdMember, new_role: HouseholdRole) -> HouseholdMember:
        """
        Update a member's role.

        Args:
            membership: HouseholdMember object to update
            new_role: New role to assign

        Returns:
            Updated HouseholdMember object
        """
        membership.role = new_role
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def delete(self, membership: HouseholdMember) -> None:
        """
        Remove a profile from a household.

        Args:
            membership: HouseholdMember object to delete
        """
        self.db.delete(membership)
        self.db.commit()
