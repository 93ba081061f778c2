"""Company model."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentstay.db.session import Base


class Company(Base):
    """Landlord, housing platform or university that students review."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    company_type: Mapped[str] = mapped_column(String(32), default="landlord", nullable=False)
    verification_status: Mapped[str] = mapped_column(
        String(16), default="pending", nullable=False, index=True
    )  # pending, verified, rejected

    # Profile fields tracked by data completeness
    tax_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    housing_units: Mapped[int | None] = mapped_column(Integer, nullable=True)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price_range: Mapped[str | None] = mapped_column(String(100), nullable=True)
    amenities: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    # Behavioral counters (maintained by the review/response flows)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    number_of_reviews: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    response_rate: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)  # 0..1
    average_response_time_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    number_of_verified_reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Derived scores
    trust_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    data_completeness_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    aliases: Mapped[list["CompanyAlias"]] = relationship(
        "CompanyAlias", back_populates="company", passive_deletes=True
    )
