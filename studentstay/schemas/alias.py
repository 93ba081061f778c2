"""Alias, suggestion, search and resolution schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AliasType(str, Enum):
    """Kind of alternate name."""

    common_name = "common_name"  # IPG for Instituto Politécnico da Guarda
    abbreviation = "abbreviation"
    misspelling = "misspelling"
    translation = "translation"
    former_name = "former_name"
    local_name = "local_name"


class SuggestionStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    merged = "merged"


class ReviewDecision(str, Enum):
    """Decisions an admin can take on a pending suggestion."""

    approved = "approved"
    rejected = "rejected"


# ── Aliases (admin) ──────────────────────────────────────────────────


class AliasCreate(BaseModel):
    """Schema for creating an alias. company_id omitted = unlinked alias."""

    alias_name: str = Field(..., min_length=1, max_length=255)
    company_id: Optional[int] = None
    alias_type: AliasType = AliasType.common_name
    priority: int = Field(50, ge=0, le=1000)


class AliasUpdate(BaseModel):
    """Partial alias update; only fields present in the request are applied."""

    alias_name: Optional[str] = Field(None, min_length=1, max_length=255)
    company_id: Optional[int] = None
    alias_type: Optional[AliasType] = None
    priority: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None


class AliasLink(BaseModel):
    company_id: int


class AliasRead(BaseModel):
    """Schema for reading an alias (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    alias_name: str
    alias_name_normalized: str
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    alias_type: AliasType
    priority: int
    is_active: bool
    usage_count: int
    last_used_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AliasList(BaseModel):
    """Paginated list of aliases."""

    items: list[AliasRead]
    total: int
    page: int = 1
    limit: int = 50


class AliasCreateResponse(BaseModel):
    alias: AliasRead
    message: str


class AliasLinkResponse(BaseModel):
    alias: AliasRead
    company_id: int
    company_name: str
    message: str


class AliasDeleteResponse(BaseModel):
    alias_id: int
    permanent: bool
    message: str


class CompanyAliasSummary(BaseModel):
    """Public view of one of a company's active aliases."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    alias_name: str
    alias_type: AliasType
    priority: int
    usage_count: int


class CompanyAliasesResponse(BaseModel):
    company_id: int
    aliases: list[CompanyAliasSummary]


# ── Search & resolution (public) ─────────────────────────────────────


class SearchCompany(BaseModel):
    """Public attributes of a company attached to a search hit."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    company_type: str
    verification_status: str
    average_rating: Optional[float] = None
    number_of_reviews: int = 0
    response_rate: Optional[float] = None


class CompanySearchResult(BaseModel):
    alias_id: int
    company_id: int
    company_name: str
    matched_alias: str
    alias_type: AliasType
    priority: int
    company: Optional[SearchCompany] = None


class CompanySearchResponse(BaseModel):
    """Prefix search response. can_suggest is True when nothing matched."""

    query: str
    count: int
    results: list[CompanySearchResult]
    can_suggest: bool = False
    message: Optional[str] = None


class ResolveLocationResponse(BaseModel):
    is_alias: bool
    canonical_name: str
    company_id: Optional[int] = None
    should_redirect: bool
    matched_alias: Optional[str] = None
    alias_type: Optional[AliasType] = None
    not_found: bool = False


class TrackUsageRequest(BaseModel):
    alias_id: int


# ── Suggestions ──────────────────────────────────────────────────────


class SuggestionCreate(BaseModel):
    """Public alias suggestion."""

    suggested_name: str = Field(..., min_length=1, max_length=255)
    context: Optional[str] = None
    potential_company_id: Optional[int] = None


class SuggestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    suggested_name: str
    suggested_name_normalized: str
    suggested_by_user_id: Optional[int] = None
    context: Optional[str] = None
    potential_company_id: Optional[int] = None
    potential_company_name: Optional[str] = None
    confidence_score: Optional[Decimal] = None
    status: SuggestionStatus
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    created_at: datetime


class ExistingAliasRef(BaseModel):
    id: int
    company_id: Optional[int] = None


class SuggestionSubmitResponse(BaseModel):
    """Either a new pending suggestion or a pointer to the existing alias."""

    should_use_existing: bool
    message: str
    existing_alias: Optional[ExistingAliasRef] = None
    suggestion: Optional[SuggestionRead] = None


class SuggestionList(BaseModel):
    items: list[SuggestionRead]
    total: int
    page: int = 1
    limit: int = 50


class SuggestionReview(BaseModel):
    """Admin decision. company_id falls back to the suggestion's candidate company."""

    status: ReviewDecision
    admin_notes: Optional[str] = None
    create_alias: bool = False
    company_id: Optional[int] = None


class SuggestionReviewResult(BaseModel):
    suggestion_id: int
    status: SuggestionStatus
    alias_created: bool = False
    alias_id: Optional[int] = None
    message: str
