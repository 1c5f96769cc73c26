"""Profile model: a person within one or more households."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from household_hub.models.base import Base, TimestampMixin, generate_id

if TYPE_CHECKING:
    from household_hub.models.user import User
    from household_hub.models.household_member import HouseholdMember


class Profile(Base, TimestampMixin):
    """
    A person record inside a household.

    Either linked to a login (user_id set, at most one profile per user) or a
    dependent / family member without one (user_id is NULL). Only profiles
    can own financial resources.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    # Relationships
    user: Mapped["User | None"] = relationship("User", back_populates="profile")
    memberships: Mapped[list["HouseholdMember"]] = relationship(
        "HouseholdMember",
        back_populates="profile",
        cascade="all, delete-orphan",
    )

    @property
    def has_user(self) -> bool:
        return self.user_id is not None

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, name='{self.name}')>"
