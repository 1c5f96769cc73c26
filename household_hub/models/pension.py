"""Pension / study-fund accounts, their owners and deposits."""

from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import String, Numeric, ForeignKey, Date, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_hub.models.base import Base, TimestampMixin, generate_id, utcnow


class PensionAccountType(str, PyEnum):
    PENSION = "pension"
    HISHTALMUT = "hishtalmut"


class PensionAccount(Base, TimestampMixin):
    __tablename__ = "pension_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    type: Mapped[PensionAccountType] = mapped_column(
        Enum(PensionAccountType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    provider_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_value: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    # Fees are percentages (1.5 == 1.5%)
    fee_from_deposit: Mapped[float] = mapped_column(Numeric(precision=7, scale=4), nullable=False)
    fee_from_total: Mapped[float] = mapped_column(Numeric(precision=7, scale=4), nullable=False)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    deposits: Mapped[list["PensionDeposit"]] = relationship(
        "PensionDeposit", back_populates="account", cascade="all, delete-orphan"
    )


class PensionAccountOwner(Base):
    __tablename__ = "pension_account_owners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("pension_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("account_id", "profile_id", name="uq_pension_account_owner"),
    )


class PensionDeposit(Base):
    __tablename__ = "pension_deposits"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    deposit_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary_month: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    employer: Mapped[str] = mapped_column(String(255), nullable=False)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("pension_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    account: Mapped["PensionAccount"] = relationship("PensionAccount", back_populates="deposits")
