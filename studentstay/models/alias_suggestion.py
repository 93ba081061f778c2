"""CompanyAliasSuggestion model: user-submitted names queued for admin review."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentstay.db.session import Base


class CompanyAliasSuggestion(Base):
    """Suggested alias; pending until an admin approves, rejects or merges it."""

    __tablename__ = "company_alias_suggestions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    suggested_name: Mapped[str] = mapped_column(String(255), nullable=False)
    suggested_name_normalized: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    suggested_by_user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
    potential_company_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=True
    )
    confidence_score: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), default="pending", nullable=False, index=True
    )  # pending, approved, rejected, merged
    reviewed_by: Mapped[int | None] = mapped_column(Integer, nullable=True)  # admin id, opaque
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )

    potential_company: Mapped["Company"] = relationship("Company")
