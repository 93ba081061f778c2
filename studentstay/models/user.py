"""User model."""

from datetime import UTC, date, datetime

import bcrypt as _bcrypt
from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from studentstay.db.session import Base


class User(Base):
    """Student account: credentials, optional profile, review counters and scores."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Demographic
    nationality: Mapped[str | None] = mapped_column(String(100), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    language_preferences: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    current_country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    current_city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Academic
    home_university: Mapped[str | None] = mapped_column(String(255), nullable=True)
    destination_university: Mapped[str | None] = mapped_column(String(255), nullable=True)
    study_field: Mapped[str | None] = mapped_column(String(255), nullable=True)
    study_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    study_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    study_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Housing (flags are NULL until answered)
    current_housing_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    monthly_rent: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_currently_renting: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    has_lived_abroad_before: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Behavioral counters
    number_of_reviews: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    number_of_helpful_votes_received: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )

    # Derived scores
    trust_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    profile_completion_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_activity_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def set_password(self, password: str) -> None:
        """Hash and store password using bcrypt."""
        self.password_hash = _bcrypt.hashpw(password.encode("utf-8"), _bcrypt.gensalt()).decode(
            "utf-8"
        )

    def verify_password(self, password: str) -> bool:
        """Verify password against stored hash."""
        return _bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))
