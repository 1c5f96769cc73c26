import structlog
from sqlalchemy.orm import Session

from household_hub.models.context import (
    CurrentContext,
    CurrentHousehold,
    CurrentProfile,
    HouseholdProfile,
)
from household_hub.models.user import User
from household_hub.repositories.profile_repository import ProfileRepository
from household_hub.repositories.household_member_repository import HouseholdMemberRepository

logger = structlog.get_logger(__name__)


class ContextService:
    """Builds the per-request CurrentContext"""

    def __init__(self, db: Session):
        self.db = db
        self.profile_repo = ProfileRepository(db)
        self.member_repo = HouseholdMemberRepository(db)

    def resolve(self, user: User, active_household_id: str | None = None) -> CurrentContext | None:
        """
        Resolve the caller's profile, households and active household.

        The requested household is used when the caller belongs to it;
        otherwise the first household (oldest membership) is active.

        Args:
            user: Authenticated user
            active_household_id: Household requested by the caller, if any

        Returns:
            CurrentContext, or None when the user has no profile yet
            (needs onboarding) or belongs to no household
        """
        profile = self.profile_repo.get_by_user_id(user.id)
        if not profile:
            return None

        households = [
            CurrentHousehold(
                id=m.household.id,
                name=m.household.name,
                description=m.household.description,
                role=m.role,
            )
            for m in self.member_repo.get_profile_memberships(profile.id)
        ]
        if not households:
            logger.warning("profile_without_household", profile_id=profile.id)
            return None

        active = None
        if active_household_id:
            active = next((h for h in households if h.id == active_household_id), None)
        if active is None:
            active = households[0]

        household_profiles = [
            HouseholdProfile(
                id=m.profile.id,
                name=m.profile.name,
                image=m.profile.image,
                color=m.profile.color,
                role=m.role,
                has_user=m.profile.user_id is not None,
            )
            for m in self.member_repo.get_household_members(active.id)
        ]

        return CurrentContext(
            user=user,
            profile=CurrentProfile(
                id=profile.id,
                name=profile.name,
                image=profile.image,
                color=profile.color,
                user_id=profile.user_id,
            ),
            households=households,
            active_household=active,
            household_profiles=household_profiles,
        )
