"""CompanyAlias model for name resolution."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from studentstay.db.session import Base
from studentstay.services.normalize import normalize_name


class CompanyAlias(Base):
    """Alternate name (abbreviation, misspelling, translation, ...) for a company.

    company_id is NULL for unlinked aliases awaiting admin assignment.
    At most one active alias may hold a given normalized name.
    """

    __tablename__ = "company_aliases"
    __table_args__ = (
        Index(
            "ix_company_aliases_active_normalized",
            "alias_name_normalized",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    alias_name: Mapped[str] = mapped_column(String(255), nullable=False)
    alias_name_normalized: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=True, index=True
    )
    alias_type: Mapped[str] = mapped_column(String(32), default="common_name", nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)  # admin id, opaque
    usage_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    company: Mapped["Company"] = relationship("Company", back_populates="aliases")

    @validates("alias_name")
    def _sync_normalized(self, key: str, value: str) -> str:
        self.alias_name_normalized = normalize_name(value)
        return value
