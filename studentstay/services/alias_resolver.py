"""Company name resolution through the alias table.

Public operations: prefix search, exact location resolution, alias listing per
company, usage tracking and alias suggestions. The only matching key is the
normalized name (see services.normalize); there is no fuzzy matching.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from studentstay.config import get_settings
from studentstay.models.alias_suggestion import CompanyAliasSuggestion
from studentstay.models.company import Company
from studentstay.models.company_alias import CompanyAlias
from studentstay.schemas.alias import (
    CompanySearchResponse,
    CompanySearchResult,
    ExistingAliasRef,
    ResolveLocationResponse,
    SearchCompany,
    SuggestionRead,
    SuggestionSubmitResponse,
)
from studentstay.services.normalize import normalize_name

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class InvalidSearchQueryError(ValueError):
    """Raised when a search or resolve input is missing or too short."""

    pass


class InvalidAliasNameError(ValueError):
    """Raised when an alias or suggested name is empty after trimming."""

    pass


class CompanyNotFoundError(LookupError):
    """Raised when a referenced company does not exist."""

    def __init__(self, company_id: int) -> None:
        super().__init__(f"Company {company_id} not found")
        self.company_id = company_id


def find_active_alias(
    db: Session, normalized: str, exclude_id: int | None = None
) -> CompanyAlias | None:
    """Return the active alias holding this normalized name, if any."""
    query = db.query(CompanyAlias).filter(
        CompanyAlias.alias_name_normalized == normalized,
        CompanyAlias.is_active.is_(True),
    )
    if exclude_id is not None:
        query = query.filter(CompanyAlias.id != exclude_id)
    return query.first()


def require_company(db: Session, company_id: int) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company


# ── Prefix search ────────────────────────────────────────────────────


def search_companies(db: Session, query: str | None, limit: int | None = None) -> CompanySearchResponse:
    """Search linked active aliases whose normalized name starts with the query.

    Ordering: priority desc, alias name length asc, usage count desc.
    Companies pending verification are included. When nothing matches, the
    response sets can_suggest so the caller can offer a suggestion form.

    Raises InvalidSearchQueryError if the trimmed query is shorter than 2 chars.
    """
    term = (query or "").strip()
    if len(term) < MIN_QUERY_LENGTH:
        raise InvalidSearchQueryError(
            f"Search query must be at least {MIN_QUERY_LENGTH} characters"
        )

    settings = get_settings()
    if limit is None:
        limit = settings.search_default_limit
    limit = max(1, min(limit, settings.search_max_limit))

    aliases = (
        db.query(CompanyAlias)
        .filter(
            CompanyAlias.is_active.is_(True),
            CompanyAlias.company_id.isnot(None),
            CompanyAlias.alias_name_normalized.startswith(normalize_name(term), autoescape=True),
        )
        .order_by(
            CompanyAlias.priority.desc(),
            func.length(CompanyAlias.alias_name).asc(),
            CompanyAlias.usage_count.desc(),
            CompanyAlias.id.asc(),
        )
        .limit(limit)
        .all()
    )

    if not aliases:
        return CompanySearchResponse(
            query=term,
            count=0,
            results=[],
            can_suggest=True,
            message="No matching companies found. You can suggest this name to our team.",
        )

    company_ids = {a.company_id for a in aliases}
    companies = {
        c.id: c for c in db.query(Company).filter(Company.id.in_(company_ids)).all()
    }

    results: list[CompanySearchResult] = []
    for alias in aliases:
        company = companies.get(alias.company_id)
        results.append(
            CompanySearchResult(
                alias_id=alias.id,
                company_id=alias.company_id,
                company_name=company.name if company else alias.alias_name,
                matched_alias=alias.alias_name,
                alias_type=alias.alias_type,
                priority=alias.priority,
                company=SearchCompany.model_validate(company) if company else None,
            )
        )
    return CompanySearchResponse(query=term, count=len(results), results=results)


def list_company_aliases(db: Session, company_id: int) -> list[CompanyAlias] | None:
    """Active aliases of a company, priority desc then usage desc. None if company missing."""
    if db.query(Company.id).filter(Company.id == company_id).first() is None:
        return None
    return (
        db.query(CompanyAlias)
        .filter(CompanyAlias.company_id == company_id, CompanyAlias.is_active.is_(True))
        .order_by(CompanyAlias.priority.desc(), CompanyAlias.usage_count.desc())
        .all()
    )


# ── Exact resolution ─────────────────────────────────────────────────


def track_alias_usage(db: Session, alias_id: int) -> bool:
    """Increment usage_count and stamp last_used_at in a single UPDATE.

    Returns False when no alias has this id.
    """
    result = db.execute(
        update(CompanyAlias)
        .where(CompanyAlias.id == alias_id)
        .values(
            usage_count=CompanyAlias.usage_count + 1,
            last_used_at=datetime.now(timezone.utc),
        )
    )
    db.commit()
    return result.rowcount > 0


def resolve_location(db: Session, location: str | None) -> ResolveLocationResponse:
    """Resolve a location string to a verified company's canonical name.

    1. Case-insensitive match on a verified company's name: already canonical.
       Both sides are folded by the database lower(); SQLite folds ASCII only.
    2. Active alias of a verified company (priority desc, usage desc): redirect,
       and count the alias usage.
    3. Otherwise the input comes back unchanged with not_found set.
    """
    name = (location or "").strip()
    if not name:
        raise InvalidSearchQueryError("Location parameter required")

    direct = (
        db.query(Company)
        .filter(
            func.lower(Company.name) == func.lower(name),
            Company.verification_status == "verified",
        )
        .first()
    )
    if direct is not None:
        return ResolveLocationResponse(
            is_alias=False,
            canonical_name=direct.name,
            company_id=direct.id,
            should_redirect=False,
        )

    match = (
        db.query(CompanyAlias, Company)
        .join(Company, CompanyAlias.company_id == Company.id)
        .filter(
            CompanyAlias.alias_name_normalized == normalize_name(name),
            CompanyAlias.is_active.is_(True),
            Company.verification_status == "verified",
        )
        .order_by(CompanyAlias.priority.desc(), CompanyAlias.usage_count.desc())
        .first()
    )
    if match is not None:
        alias, company = match
        track_alias_usage(db, alias.id)
        return ResolveLocationResponse(
            is_alias=True,
            canonical_name=company.name,
            company_id=company.id,
            should_redirect=True,
            matched_alias=alias.alias_name,
            alias_type=alias.alias_type,
        )

    return ResolveLocationResponse(
        is_alias=False,
        canonical_name=name,
        should_redirect=False,
        not_found=True,
    )


# ── Suggestions ──────────────────────────────────────────────────────


def suggestion_to_read(
    suggestion: CompanyAliasSuggestion, company_name: str | None = None
) -> SuggestionRead:
    read = SuggestionRead.model_validate(suggestion)
    if company_name is not None:
        read.potential_company_name = company_name
    return read


def submit_suggestion(
    db: Session,
    suggested_name: str,
    context: str | None = None,
    potential_company_id: int | None = None,
    user_id: int | None = None,
) -> SuggestionSubmitResponse:
    """Queue a user-suggested name for admin review.

    If the name already normalizes to an active alias, nothing is stored and
    the caller is pointed at the existing alias instead.
    """
    normalized = normalize_name(suggested_name)
    if not normalized:
        raise InvalidAliasNameError("Suggested name required")

    existing = find_active_alias(db, normalized)
    if existing is not None:
        return SuggestionSubmitResponse(
            should_use_existing=True,
            message="This name already exists",
            existing_alias=ExistingAliasRef(id=existing.id, company_id=existing.company_id),
        )

    if potential_company_id is not None:
        require_company(db, potential_company_id)

    suggestion = CompanyAliasSuggestion(
        suggested_name=suggested_name.strip(),
        suggested_name_normalized=normalized,
        suggested_by_user_id=user_id,
        context=context or None,
        potential_company_id=potential_company_id,
        status="pending",
    )
    db.add(suggestion)
    db.commit()
    db.refresh(suggestion)
    logger.info("Alias suggestion %s submitted: %r", suggestion.id, suggestion.suggested_name)
    return SuggestionSubmitResponse(
        should_use_existing=False,
        message="Thank you! Your suggestion will be reviewed by our team.",
        suggestion=suggestion_to_read(suggestion),
    )
