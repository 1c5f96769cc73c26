from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from household_hub.models.base import Base, TimestampMixin, generate_id

if TYPE_CHECKING:
    from household_hub.models.profile import Profile


class User(Base, TimestampMixin):
    """
    Login-capable account.

    Only identity fields are stored - no credentials. Upserted by email on
    every authenticated request.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    profile: Mapped["Profile | None"] = relationship("Profile", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
