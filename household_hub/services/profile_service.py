import structlog
from sqlalchemy.orm import Session

from household_hub.config import settings
from household_hub.models.context import CurrentContext, HouseholdProfile
from household_hub.models.household_member import HouseholdMember
from household_hub.models.profile import Profile
from household_hub.models.role import HouseholdRole
from household_hub.repositories.profile_repository import ProfileRepository
from household_hub.repositories.household_member_repository import HouseholdMemberRepository
from household_hub.schemas.profile_schemas import ProfileCreate, ProfileUpdate
from household_hub.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = structlog.get_logger(__name__)


class ProfileService:
    """Profiles of the active household"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfileRepository(db)
        self.member_repo = HouseholdMemberRepository(db)

    def list_profiles(self, context: CurrentContext) -> list[HouseholdProfile]:
        return context.household_profiles

    def get_profile(self, profile_id: str, context: CurrentContext) -> dict:
        """
        Raises:
            NotFoundException: If the profile is not in the active household
        """
        household_profile, profile = self._get_household_profile(profile_id, context)
        return self._to_detail(profile, household_profile.role)

    def create_profile(self, data: ProfileCreate, context: CurrentContext) -> dict:
        """
        Create a non-login profile and add it to the active household as MEMBER.

        Raises:
            ForbiddenException: If caller is not ADMIN or OWNER
        """
        if not context.is_household_admin():
            raise ForbiddenException("Forbidden")

        try:
            profile = self.repo.create_no_commit(
                Profile(name=data.name, color=data.color or settings.DEFAULT_PROFILE_COLOR)
            )
            self.member_repo.create_no_commit(
                HouseholdMember(
                    household_id=context.active_household.id,
                    profile_id=profile.id,
                    role=HouseholdRole.MEMBER,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(profile)
        logger.info(
            "profile_created",
            profile_id=profile.id,
            household_id=context.active_household.id,
        )
        return self._to_detail(profile, HouseholdRole.MEMBER)

    def update_profile(self, profile_id: str, data: ProfileUpdate, context: CurrentContext) -> dict:
        """
        Update a profile.

        Callers may edit their own profile; ADMIN and OWNER may also edit
        profiles without a login. Login-linked profiles belong to their user.

        Raises:
            NotFoundException: If the profile is not in the active household
            ForbiddenException: If the caller may not edit it
        """
        household_profile, profile = self._get_household_profile(profile_id, context)

        is_own = profile_id == context.profile.id
        if not (is_own or (context.is_household_admin() and not household_profile.has_user)):
            raise ForbiddenException("Forbidden")

        if data.name is not None:
            profile.name = data.name
        if "image" in data.model_fields_set:
            profile.image = data.image
        if "color" in data.model_fields_set:
            profile.color = data.color

        profile = self.repo.update(profile)
        return self._to_detail(profile, household_profile.role)

    def delete_profile(self, profile_id: str, context: CurrentContext) -> None:
        """
        Delete a non-login profile.

        Its memberships and resource ownerships are removed with it.

        Raises:
            ValidationException: If deleting own profile or a login-linked profile
            ForbiddenException: If caller is not ADMIN or OWNER
            NotFoundException: If the profile is not in the active household
        """
        if profile_id == context.profile.id:
            raise ValidationException("Cannot delete your own profile")

        if not context.is_household_admin():
            raise ForbiddenException("Forbidden")

        household_profile, profile = self._get_household_profile(profile_id, context)
        if household_profile.has_user:
            raise ValidationException("Cannot delete a profile linked to a user")

        self.repo.delete(profile)
        logger.info("profile_deleted", profile_id=profile_id, household_id=context.active_household.id)

    def _get_household_profile(
        self, profile_id: str, context: CurrentContext
    ) -> tuple[HouseholdProfile, Profile]:
        household_profile = context.find_household_profile(profile_id)
        profile = self.repo.get_by_id(profile_id) if household_profile else None
        if not profile:
            raise NotFoundException("Profile not found")
        return household_profile, profile

    def _to_detail(self, profile: Profile, role: HouseholdRole) -> dict:
        return {
            "id": profile.id,
            "name": profile.name,
            "image": profile.image,
            "color": profile.color,
            "role": role,
            "has_user": profile.has_user,
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
        }
