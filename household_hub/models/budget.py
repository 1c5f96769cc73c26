"""Household budget: category groups, categories and transactions."""

from datetime import date
from enum import Enum as PyEnum

from sqlalchemy import String, Integer, Numeric, Boolean, ForeignKey, Date, Text, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_hub.models.base import Base, TimestampMixin, generate_id


class TransactionType(str, PyEnum):
    INCOME = "income"
    EXPENSE = "expense"


class BudgetCategoryGroup(Base, TimestampMixin):
    __tablename__ = "budget_category_groups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    household_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )

    categories: Mapped[list["BudgetCategory"]] = relationship(
        "BudgetCategory",
        back_populates="group",
        cascade="all, delete-orphan",  # Deleting a group deletes its categories
        order_by="BudgetCategory.sort_order",
    )


class BudgetCategory(Base, TimestampMixin):
    __tablename__ = "budget_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    group_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("budget_category_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    budget: Mapped[float | None] = mapped_column(Numeric(precision=18, scale=2), nullable=True)
    is_must: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    household_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )

    group: Mapped["BudgetCategoryGroup"] = relationship("BudgetCategoryGroup", back_populates="categories")
    # No delete cascade: removing a category nulls category_id on its transactions
    transactions: Mapped[list["BudgetTransaction"]] = relationship(
        "BudgetTransaction", back_populates="category"
    )


class BudgetTransaction(Base, TimestampMixin):
    """
    Income or expense line. Survives deletion of its category as
    uncategorized (category_id NULL).
    """

    __tablename__ = "budget_transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="ILS")
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("budget_categories.id", ondelete="SET NULL"), nullable=True
    )
    profile_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    household_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )

    category: Mapped["BudgetCategory | None"] = relationship("BudgetCategory", back_populates="transactions")

    __table_args__ = (
        Index("ix_budget_transactions_household_date", "household_id", "transaction_date"),
    )
