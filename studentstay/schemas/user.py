"""User profile schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from studentstay.schemas.company import TrustScoreReport


class UserProfileUpdate(BaseModel):
    """Partial profile update; only fields present in the request are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    nationality: Optional[str] = Field(None, max_length=100)
    gender: Optional[str] = Field(None, max_length=50)
    birth_date: Optional[date] = None
    language_preferences: Optional[list[str]] = None
    current_country: Optional[str] = Field(None, max_length=100)
    current_city: Optional[str] = Field(None, max_length=100)
    home_university: Optional[str] = Field(None, max_length=255)
    destination_university: Optional[str] = Field(None, max_length=255)
    study_field: Optional[str] = Field(None, max_length=255)
    study_level: Optional[str] = Field(None, max_length=100)
    study_start_date: Optional[date] = None
    study_end_date: Optional[date] = None
    current_housing_type: Optional[str] = Field(None, max_length=100)
    monthly_rent: Optional[float] = Field(None, ge=0)
    is_currently_renting: Optional[bool] = None
    has_lived_abroad_before: Optional[bool] = None


class UserProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    nationality: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None
    language_preferences: Optional[list[str]] = None
    current_country: Optional[str] = None
    current_city: Optional[str] = None
    home_university: Optional[str] = None
    destination_university: Optional[str] = None
    study_field: Optional[str] = None
    study_level: Optional[str] = None
    study_start_date: Optional[date] = None
    study_end_date: Optional[date] = None
    current_housing_type: Optional[str] = None
    monthly_rent: Optional[float] = None
    is_currently_renting: Optional[bool] = None
    has_lived_abroad_before: Optional[bool] = None
    number_of_reviews: int = 0
    number_of_helpful_votes_received: int = 0
    trust_score: int = 0
    profile_completion_percentage: int = 0
    last_activity_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserTrustScoreResponse(TrustScoreReport):
    user_id: int
    profile_completion: int
