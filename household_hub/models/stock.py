"""Brokerage accounts, their owners, holdings and the shared price history."""

from datetime import datetime

from sqlalchemy import String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_hub.models.base import Base, TimestampMixin, generate_id, utcnow


class StockAccount(Base, TimestampMixin):
    """Brokerage account. Visibility comes from its owner profiles."""

    __tablename__ = "stock_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    broker: Mapped[str | None] = mapped_column(String(255), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    # Creator; kept for onboarding migration of pre-profile data
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    holdings: Mapped[list["StockHolding"]] = relationship(
        "StockHolding", back_populates="account", cascade="all, delete-orphan"
    )


class StockAccountOwner(Base):
    __tablename__ = "stock_account_owners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("stock_accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("account_id", "profile_id", name="uq_stock_account_owner"),
    )


class StockHolding(Base, TimestampMixin):
    __tablename__ = "stock_holdings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    symbol: Mapped[str] = mapped_column(String(20), nullable=False)
    quantity: Mapped[float] = mapped_column(Numeric(precision=18, scale=8), nullable=False)
    avg_cost_basis: Mapped[float] = mapped_column(Numeric(precision=18, scale=4), nullable=False)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("stock_accounts.id", ondelete="CASCADE"), nullable=False
    )

    account: Mapped["StockAccount"] = relationship("StockAccount", back_populates="holdings")

    __table_args__ = (
        UniqueConstraint("account_id", "symbol", name="uq_stock_holding_symbol"),
    )


class StockPriceHistory(Base):
    """Price points per symbol; not tied to any account"""

    __tablename__ = "stock_price_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    symbol: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Numeric(precision=18, scale=4), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("symbol", "timestamp", name="uq_stock_price_symbol_timestamp"),
    )
