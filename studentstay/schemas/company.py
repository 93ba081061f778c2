"""Company schemas for request/response validation."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompanyType(str, Enum):
    landlord = "landlord"
    housing_platform = "housing_platform"
    university = "university"


class VerificationStatus(str, Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class CompanyProfileFields(BaseModel):
    """Optional profile fields tracked by data completeness."""

    tax_id: Optional[str] = Field(None, max_length=100)
    website: Optional[str] = Field(None, max_length=500)
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    housing_units: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=0)
    price_range: Optional[str] = Field(None, max_length=100)
    amenities: Optional[list[str]] = None


class CompanyCreate(CompanyProfileFields):
    """Schema for creating a company."""

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    company_type: CompanyType = CompanyType.landlord
    verification_status: VerificationStatus = VerificationStatus.pending


class CompanyUpdate(CompanyProfileFields):
    """Partial profile update; only fields present in the request are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    company_type: Optional[CompanyType] = None


class VerificationUpdate(BaseModel):
    verification_status: VerificationStatus


class CompanyRead(CompanyProfileFields):
    """Schema for reading a company (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    company_type: CompanyType
    verification_status: VerificationStatus
    average_rating: Optional[float] = None
    number_of_reviews: int = 0
    response_rate: float = 0.0
    average_response_time_hours: Optional[float] = None
    number_of_verified_reps: int = 0
    trust_score: int = 0
    data_completeness_percentage: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None


class CompanyCreateResponse(BaseModel):
    """Created company plus the outcome of its official-name alias."""

    company: CompanyRead
    official_alias_created: bool
    official_alias_id: Optional[int] = None
    warnings: list[str] = []


class TrustScoreReport(BaseModel):
    """Trust score with per-factor values (0..100) and weighted contributions."""

    trust_score: int
    level: str
    factors: dict[str, float]
    breakdown: dict[str, int]


class CompanyTrustScoreResponse(TrustScoreReport):
    company_id: int
    data_completeness: int


class ProfileTaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field: str
    label: str
    completed: bool
    weight: int


class ProfileTasksResponse(BaseModel):
    tasks: list[ProfileTaskRead]
    earned_points: int
    total_points: int
