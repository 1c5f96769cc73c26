import structlog
from sqlalchemy.orm import Session

from household_hub.models.household import Household
from household_hub.models.household_member import HouseholdMember
from household_hub.models.context import CurrentContext, CurrentHousehold
from household_hub.models.role import HouseholdRole, ASSIGNABLE_ROLES
from household_hub.repositories.household_repository import HouseholdRepository
from household_hub.repositories.household_member_repository import HouseholdMemberRepository
from household_hub.repositories.profile_repository import ProfileRepository
from household_hub.schemas.household_schemas import (
    HouseholdCreate,
    HouseholdUpdate,
    MemberAddRequest,
    MemberRoleUpdate,
)
from household_hub.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = structlog.get_logger(__name__)


class HouseholdService:
    """Service layer for household and membership business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.household_repo = HouseholdRepository(db)
        self.member_repo = HouseholdMemberRepository(db)
        self.profile_repo = ProfileRepository(db)

    def list_households(self, context: CurrentContext) -> list[CurrentHousehold]:
        """Households the caller belongs to, with the caller's role in each"""
        return context.households

    def create_household(self, data: HouseholdCreate, context: CurrentContext) -> CurrentHousehold:
        """
        Create a household with the caller's profile as its OWNER.

        Household and owner membership are written in one database
        transaction: either both exist afterwards or neither does.
        """
        try:
            household = self.household_repo.create_no_commit(
                Household(name=data.name, description=data.description)
            )
            self.member_repo.create_no_commit(
                HouseholdMember(
                    household_id=household.id,
                    profile_id=context.profile.id,
                    role=HouseholdRole.OWNER,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("household_created", household_id=household.id, profile_id=context.profile.id)
        return CurrentHousehold(
            id=household.id,
            name=household.name,
            description=household.description,
            role=HouseholdRole.OWNER,
        )

    def get_household(self, household_id: str, context: CurrentContext) -> dict:
        """
        Household details with members.

        Raises:
            ForbiddenException: If the caller is not a member
            NotFoundException: If the household doesn't exist
        """
        if context.find_household(household_id) is None:
            raise ForbiddenException("Forbidden")

        household = self.household_repo.get_by_id(household_id)
        if not household:
            raise NotFoundException("Not found")

        members = [
            {
                "id": m.profile.id,
                "name": m.profile.name,
                "image": m.profile.image,
                "color": m.profile.color,
                "role": m.role,
                "has_user": m.profile.user_id is not None,
                "joined_at": m.joined_at,
            }
            for m in self.member_repo.get_household_members(household_id)
        ]
        return {
            "id": household.id,
            "name": household.name,
            "description": household.description,
            "members": members,
        }

    def update_household(
        self, household_id: str, data: HouseholdUpdate, context: CurrentContext
    ) -> Household:
        """
        Update household name/description (ADMIN or OWNER).

        Raises:
            ForbiddenException: If the caller lacks admin rights in this household
        """
        self._require_admin(household_id, context)

        household = self.household_repo.get_by_id(household_id)
        if not household:
            raise NotFoundException("Not found")

        if data.name is not None:
            household.name = data.name
        if "description" in data.model_fields_set:
            household.description = data.description

        return self.household_repo.update(household)

    def delete_household(self, household_id: str, context: CurrentContext) -> None:
        """
        Delete a household (OWNER only).

        Raises:
            ValidationException: If this is the caller's only household
            ForbiddenException: If the caller is not the household's owner
        """
        if len(context.households) <= 1:
            raise ValidationException("Cannot delete your only household")

        membership = context.find_household(household_id)
        if membership is None or membership.role != HouseholdRole.OWNER:
            raise ForbiddenException("Only household owner can delete")

        household = self.household_repo.get_by_id(household_id)
        if not household:
            raise NotFoundException("Not found")

        self.household_repo.delete(household)
        logger.info("household_deleted", household_id=household_id, profile_id=context.profile.id)

    def add_member(
        self, household_id: str, data: MemberAddRequest, context: CurrentContext
    ) -> dict:
        """
        Add an existing profile to the household (ADMIN or OWNER).

        Raises:
            ForbiddenException: If caller lacks admin rights
            ValidationException: If role is OWNER or the profile is already a member
            NotFoundException: If the profile doesn't exist
        """
        self._require_admin(household_id, context)

        # OWNER is only ever granted at household creation
        if data.role not in ASSIGNABLE_ROLES:
            raise ValidationException("Invalid data")

        profile = self.profile_repo.get_by_id(data.profile_id)
        if not profile:
            raise NotFoundException("Profile not found")

        if self.member_repo.get_membership(household_id, data.profile_id):
            raise ValidationException("Profile is already a member")

        membership = self.member_repo.create(
            HouseholdMember(household_id=household_id, profile_id=profile.id, role=data.role)
        )
        logger.info(
            "member_added",
            household_id=household_id,
            profile_id=profile.id,
            role=membership.role.value,
        )
        return {
            "id": profile.id,
            "name": profile.name,
            "image": profile.image,
            "color": profile.color,
            "role": membership.role,
            "has_user": profile.user_id is not None,
            "joined_at": membership.joined_at,
        }

    def update_member_role(
        self, household_id: str, profile_id: str, data: MemberRoleUpdate, context: CurrentContext
    ) -> dict:
        """
        Change a member's role between ADMIN and MEMBER.

        Raises:
            ForbiddenException: If caller lacks admin rights
            NotFoundException: If the membership doesn't exist
            ValidationException: If the target is the OWNER or new role is OWNER
        """
        membership = self._get_target_membership(household_id, profile_id, context)

        if membership.role == HouseholdRole.OWNER:
            raise ValidationException("Cannot change owner role")

        self._require_admin(household_id, context)

        if data.role not in ASSIGNABLE_ROLES:
            raise ValidationException("Invalid data")

        membership = self.member_repo.update_role(membership, data.role)
        logger.info(
            "member_role_changed",
            household_id=household_id,
            profile_id=profile_id,
            role=membership.role.value,
        )
        return {"id": membership.profile.id, "name": membership.profile.name, "role": membership.role}

    def remove_member(self, household_id: str, profile_id: str, context: CurrentContext) -> None:
        """
        Remove a member from the household (ADMIN or OWNER).

        Raises:
            ForbiddenException: If caller lacks admin rights
            NotFoundException: If the membership doesn't exist
            ValidationException: If the target is the OWNER
        """
        membership = self._get_target_membership(household_id, profile_id, context)

        if membership.role == HouseholdRole.OWNER:
            raise ValidationException("Cannot remove household owner")

        self._require_admin(household_id, context)

        self.member_repo.delete(membership)
        logger.info("member_removed", household_id=household_id, profile_id=profile_id)

    def _require_admin(self, household_id: str, context: CurrentContext) -> None:
        if context.active_household.id != household_id or not context.is_household_admin():
            raise ForbiddenException("Forbidden")

    def _get_target_membership(
        self, household_id: str, profile_id: str, context: CurrentContext
    ) -> HouseholdMember:
        # Owner protection is reported to any member, admin or not
        if context.active_household.id != household_id:
            raise ForbiddenException("Forbidden")

        membership = self.member_repo.get_membership(household_id, profile_id)
        if not membership:
            raise NotFoundException("Member not found")
        return membership
