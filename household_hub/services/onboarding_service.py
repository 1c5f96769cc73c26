import structlog
from sqlalchemy.orm import Session

from household_hub.models.household import Household
from household_hub.models.household_member import HouseholdMember
from household_hub.models.profile import Profile
from household_hub.models.role import HouseholdRole
from household_hub.models.user import User
from household_hub.repositories.household_repository import HouseholdRepository
from household_hub.repositories.household_member_repository import HouseholdMemberRepository
from household_hub.repositories.ownership_repository import OWNABLE_RESOURCES, OwnershipRepository
from household_hub.repositories.profile_repository import ProfileRepository
from household_hub.schemas.context_schemas import OnboardingRequest
from household_hub.core.exceptions import ValidationException

logger = structlog.get_logger(__name__)


class OnboardingService:
    """First-run setup for a user without a profile"""

    def __init__(self, db: Session):
        self.db = db
        self.profile_repo = ProfileRepository(db)
        self.household_repo = HouseholdRepository(db)
        self.member_repo = HouseholdMemberRepository(db)

    def complete(self, data: OnboardingRequest, user: User) -> dict:
        """
        Create the user's profile, their first household and family profiles.

        All rows are written in one transaction:
        1. Login-linked profile for the user
        2. Household with that profile as OWNER
        3. One non-login MEMBER profile per family member
        4. Owner rows for resources the user created before having a profile

        Raises:
            ValidationException: If the user already has a profile
        """
        if self.profile_repo.get_by_user_id(user.id):
            raise ValidationException("User already has a profile")

        try:
            profile = self.profile_repo.create_no_commit(
                Profile(name=data.profile_name, color=data.profile_color, user_id=user.id)
            )
            household = self.household_repo.create_no_commit(Household(name=data.household_name))
            self.member_repo.create_no_commit(
                HouseholdMember(
                    household_id=household.id,
                    profile_id=profile.id,
                    role=HouseholdRole.OWNER,
                )
            )

            family_profiles = []
            for member in data.family_members:
                family_profile = self.profile_repo.create_no_commit(
                    Profile(name=member.name, color=member.color)
                )
                self.member_repo.create_no_commit(
                    HouseholdMember(
                        household_id=household.id,
                        profile_id=family_profile.id,
                        role=HouseholdRole.MEMBER,
                    )
                )
                family_profiles.append(family_profile)

            migrated = {}
            for resource in OWNABLE_RESOURCES:
                repo = OwnershipRepository(self.db, resource)
                unowned = repo.get_unowned_by_user(user.id)
                for obj in unowned:
                    repo.add_owners_no_commit(obj.id, [profile.id])
                migrated[resource.model.__tablename__] = len(unowned)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "onboarding_completed",
            user_id=user.id,
            profile_id=profile.id,
            household_id=household.id,
            family_profiles=len(family_profiles),
        )
        return {
            "profile": profile,
            "household": {
                "id": household.id,
                "name": household.name,
                "description": household.description,
                "role": HouseholdRole.OWNER,
            },
            "family_profiles": family_profiles,
            "migrated_resources": migrated,
        }
