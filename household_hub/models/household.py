"""Household model: the sharing boundary between profiles."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from household_hub.models.base import Base, TimestampMixin, generate_id

if TYPE_CHECKING:
    from household_hub.models.household_member import HouseholdMember


class Household(Base, TimestampMixin):
    """
    A named group of profiles sharing visibility into financial resources.

    Examples:
    - "Cohen Family" - parents with login profiles, kids without
    - "Personal - Dana" - a single-profile household

    Resources are not attached to a household directly: access is derived
    from the household membership of the resource's owner profiles.
    Budget data (category groups, categories, transactions) is scoped to a
    household and removed with it at the database level.
    """

    __tablename__ = "households"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    members: Mapped[list["HouseholdMember"]] = relationship(
        "HouseholdMember",
        back_populates="household",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name='{self.name}')>"
