"""Household membership model linking profiles to households with roles."""

from datetime import datetime

from sqlalchemy import String, ForeignKey, Enum, UniqueConstraint, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from household_hub.models.base import Base, generate_id, utcnow
from household_hub.models.role import HouseholdRole

if TYPE_CHECKING:
    from household_hub.models.household import Household
    from household_hub.models.profile import Profile


class HouseholdMember(Base):
    """
    Join table linking profiles to households with roles.

    Example memberships:
    - Profile "Dana" has role OWNER in household "Cohen Family"
    - Profile "Noa" (no login) has role MEMBER in household "Cohen Family"
    - Profile "Dana" has role OWNER in household "Personal - Dana"

    Constraints:
    - Unique(household_id, profile_id) - one membership per profile per household
    - At most one OWNER per household, set at creation (application layer)
    """

    __tablename__ = "household_members"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    household_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[HouseholdRole] = mapped_column(
        Enum(HouseholdRole, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=HouseholdRole.MEMBER,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    # Relationships
    household: Mapped["Household"] = relationship("Household", back_populates="members")
    profile: Mapped["Profile"] = relationship("Profile", back_populates="memberships")

    # Constraints
    __table_args__ = (
        UniqueConstraint("household_id", "profile_id", name="uq_household_profile"),
    )

    def __repr__(self) -> str:
        return (
            f"<HouseholdMember(household_id={self.household_id}, "
            f"profile_id={self.profile_id}, role={self.role.value})>"
        )
