"""Per-request caller context used for every authorization decision."""

from dataclasses import dataclass, field
from household_hub.models.user import User
from household_hub.models.role import HouseholdRole


@dataclass(frozen=True)
class CurrentProfile:
    id: str
    name: str
    image: str | None
    color: str | None
    user_id: str | None


@dataclass(frozen=True)
class CurrentHousehold:
    """A household the caller belongs to, with the caller's role in it"""

    id: str
    name: str
    description: str | None
    role: HouseholdRole


@dataclass(frozen=True)
class HouseholdProfile:
    """A profile of the active household, with its role there"""

    id: str
    name: str
    image: str | None
    color: str | None
    role: HouseholdRole
    has_user: bool


@dataclass
class CurrentContext:
    """
    Complete caller context for request authorization.

    Built fresh for each request by ContextService and passed explicitly to
    the services that need it; never cached beyond the request.

    Attributes:
        user: The authenticated User
        profile: The caller's own profile
        households: Every household the caller's profile belongs to
        active_household: The household this request is scoped to
        household_profiles: All profiles of the active household
    """

    user: User
    profile: CurrentProfile
    households: list[CurrentHousehold]
    active_household: CurrentHousehold
    household_profiles: list[HouseholdProfile]
    _profiles_by_id: dict[str, HouseholdProfile] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._profiles_by_id = {p.id: p for p in self.household_profiles}

    @property
    def household_profile_ids(self) -> frozenset[str]:
        """Profile ids of the active household"""
        return frozenset(self._profiles_by_id)

    def find_household_profile(self, profile_id: str) -> HouseholdProfile | None:
        return self._profiles_by_id.get(profile_id)

    def find_household(self, household_id: str) -> CurrentHousehold | None:
        return next((h for h in self.households if h.id == household_id), None)

    def shares_household_with(self, profile_ids) -> bool:
        """True if any of profile_ids belongs to the active household"""
        return any(pid in self._profiles_by_id for pid in profile_ids)

    def is_household_owner(self) -> bool:
        return self.active_household.role == HouseholdRole.OWNER

    def is_household_admin(self) -> bool:
        """Check if caller is admin or owner of the active household."""
        return self.active_household.role in (HouseholdRole.OWNER, HouseholdRole.ADMIN)

    def __repr__(self) -> str:
        return (
            f"<CurrentContext(user_id={self.user.id}, profile_id={self.profile.id}, "
            f"household_id={self.active_household.id}, role={self.active_household.role.value})>"
        )
