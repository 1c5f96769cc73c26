from datetime import date, datetime

from sqlalchemy import String, Numeric, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from household_hub.models.base import Base, generate_id, utcnow


class NetWorthSnapshot(Base):
    """Daily per-user net worth with its breakdown"""

    __tablename__ = "net_worth_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    net_worth: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    portfolio: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    pension: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    assets: Mapped[float] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_net_worth_user_date"),
    )
