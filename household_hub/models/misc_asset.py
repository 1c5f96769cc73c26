"""Miscellaneous assets and liabilities with their owners."""

from datetime import date
from enum import Enum as PyEnum

from sqlalchemy import String, Numeric, ForeignKey, Date, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from household_hub.models.base import Base, TimestampMixin, generate_id


class MiscAssetType(str, PyEnum):
    BANK_DEPOSIT = "bank_deposit"
    LOAN = "loan"
    MORTGAGE = "mortgage"
    CHILD_SAVINGS = "child_savings"

    @property
    def is_liability(self) -> bool:
        return self in (MiscAssetType.LOAN, MiscAssetType.MORTGAGE)


class MiscAsset(Base, TimestampMixin):
    """
    Deposit, savings plan, loan or mortgage.

    Liabilities are stored with a negative current_value so that summing
    values yields net worth directly.
    """

    __tablename__ = "misc_assets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    type: Mapped[MiscAssetType] = mapped_column(
        Enum(MiscAssetType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_value: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    interest_rate: Mapped[float] = mapped_column(Numeric(precision=7, scale=4), nullable=False)
    monthly_payment: Mapped[float | None] = mapped_column(Numeric(precision=18, scale=2), nullable=True)
    monthly_deposit: Mapped[float | None] = mapped_column(Numeric(precision=18, scale=2), nullable=True)
    maturity_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


class MiscAssetOwner(Base):
    __tablename__ = "misc_asset_owners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    asset_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("misc_assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("asset_id", "profile_id", name="uq_misc_asset_owner"),
    )
