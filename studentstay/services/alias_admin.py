"""Admin alias management: alias CRUD, linking, suggestion review, official-name aliases.

Authorization happens in the API layer; admin ids passed here are opaque and
only recorded for attribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studentstay.models.alias_suggestion import CompanyAliasSuggestion
from studentstay.models.company import Company
from studentstay.models.company_alias import CompanyAlias
from studentstay.schemas.alias import (
    AliasCreate,
    AliasRead,
    AliasType,
    AliasUpdate,
    SuggestionRead,
    SuggestionReview,
    SuggestionReviewResult,
    SuggestionStatus,
)
from studentstay.services.alias_resolver import (
    InvalidAliasNameError,
    find_active_alias,
    require_company,
    suggestion_to_read,
)
from studentstay.services.normalize import normalize_name

logger = logging.getLogger(__name__)

OFFICIAL_NAME_PRIORITY = 100
SUGGESTION_ALIAS_PRIORITY = 50


class DuplicateAliasError(ValueError):
    """Raised when an active alias already holds the normalized name (caller returns 409)."""

    def __init__(self, existing_alias_id: int, linked_company_id: int | None) -> None:
        super().__init__("An active alias with this name already exists")
        self.existing_alias_id = existing_alias_id
        self.linked_company_id = linked_company_id


class AliasNotFoundError(LookupError):
    pass


class SuggestionNotFoundError(LookupError):
    pass


class SuggestionAlreadyReviewedError(ValueError):
    """Raised when reviewing a suggestion that already reached a terminal status."""

    pass


class NoFieldsToUpdateError(ValueError):
    pass


# ── Listing ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AliasFilter:
    """Typed admin listing filter. Every value is bound as a query parameter."""

    company_id: int | None = None
    unlinked: bool = False
    alias_type: AliasType | None = None
    search: str | None = None

    def clauses(self) -> list:
        clauses = []
        if self.company_id is not None:
            clauses.append(CompanyAlias.company_id == self.company_id)
        if self.unlinked:
            clauses.append(CompanyAlias.company_id.is_(None))
        if self.alias_type is not None:
            clauses.append(CompanyAlias.alias_type == AliasType(self.alias_type).value)
        term = normalize_name(self.search)
        if term:
            clauses.append(CompanyAlias.alias_name_normalized.contains(term, autoescape=True))
        return clauses


def alias_to_read(alias: CompanyAlias, company_name: str | None = None) -> AliasRead:
    read = AliasRead.model_validate(alias)
    read.company_name = company_name
    return read


def list_aliases(
    db: Session,
    filters: AliasFilter | None = None,
    *,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[AliasRead], int]:
    """Paginated aliases ordered by priority desc, usage desc, newest first."""
    clauses = (filters or AliasFilter()).clauses()
    total = db.query(func.count(CompanyAlias.id)).filter(*clauses).scalar() or 0
    rows = (
        db.query(CompanyAlias, Company.name)
        .outerjoin(Company, CompanyAlias.company_id == Company.id)
        .filter(*clauses)
        .order_by(
            CompanyAlias.priority.desc(),
            CompanyAlias.usage_count.desc(),
            CompanyAlias.created_at.desc(),
            CompanyAlias.id.desc(),
        )
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return [alias_to_read(alias, company_name) for alias, company_name in rows], total


def get_alias(db: Session, alias_id: int) -> CompanyAlias:
    alias = db.query(CompanyAlias).filter(CompanyAlias.id == alias_id).first()
    if alias is None:
        raise AliasNotFoundError(f"Alias {alias_id} not found")
    return alias


# ── CRUD ─────────────────────────────────────────────────────────────


def _raise_duplicate(db: Session, normalized: str, exclude_id: int | None = None) -> None:
    existing = find_active_alias(db, normalized, exclude_id=exclude_id)
    if existing is not None:
        raise DuplicateAliasError(existing.id, existing.company_id)


def create_alias(db: Session, data: AliasCreate, created_by: int | None = None) -> CompanyAlias:
    """Create an active alias, linked or unlinked.

    Raises InvalidAliasNameError for blank names, DuplicateAliasError when an
    active alias already holds the normalized name, CompanyNotFoundError for an
    unknown company_id.
    """
    name = data.alias_name.strip()
    if not name:
        raise InvalidAliasNameError("Alias name required")
    normalized = normalize_name(name)
    _raise_duplicate(db, normalized)
    if data.company_id is not None:
        require_company(db, data.company_id)

    alias = CompanyAlias(
        alias_name=name,
        company_id=data.company_id,
        alias_type=AliasType(data.alias_type).value,
        priority=data.priority,
        is_active=True,
        created_by=created_by,
    )
    db.add(alias)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent insert of the same name
        db.rollback()
        _raise_duplicate(db, normalized)
        raise
    db.refresh(alias)
    logger.info(
        "Alias %s created: %r -> company %s", alias.id, alias.alias_name, alias.company_id
    )
    return alias


def update_alias(db: Session, alias_id: int, data: AliasUpdate) -> CompanyAlias:
    """Apply only the fields present in the request.

    Renaming or reactivating is checked against other active aliases.
    """
    alias = get_alias(db, alias_id)
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise NoFieldsToUpdateError("No fields to update")

    if "alias_name" in changes:
        if changes["alias_name"] is None or not changes["alias_name"].strip():
            raise InvalidAliasNameError("Alias name required")
        changes["alias_name"] = changes["alias_name"].strip()
    if changes.get("company_id") is not None:
        require_company(db, changes["company_id"])
    if "alias_type" in changes and changes["alias_type"] is not None:
        changes["alias_type"] = AliasType(changes["alias_type"]).value
    for key in ("alias_type", "priority", "is_active"):
        if key in changes and changes[key] is None:
            del changes[key]

    will_be_active = changes.get("is_active", alias.is_active)
    new_normalized = normalize_name(changes.get("alias_name", alias.alias_name))
    if will_be_active:
        _raise_duplicate(db, new_normalized, exclude_id=alias.id)

    for key, value in changes.items():
        setattr(alias, key, value)
    db.commit()
    db.refresh(alias)
    logger.info("Alias %s updated: %s", alias.id, sorted(changes))
    return alias


def link_alias(db: Session, alias_id: int, company_id: int) -> tuple[CompanyAlias, Company]:
    """Point an alias at a company. Only company_id changes."""
    alias = get_alias(db, alias_id)
    company = require_company(db, company_id)
    alias.company_id = company.id
    db.commit()
    db.refresh(alias)
    logger.info("Alias %s linked to company %s", alias.id, company.id)
    return alias, company


def delete_alias(db: Session, alias_id: int, permanent: bool = False) -> None:
    """Soft delete (deactivate) by default; permanent removes the row."""
    alias = get_alias(db, alias_id)
    if permanent:
        db.delete(alias)
    else:
        alias.is_active = False
    db.commit()
    logger.info("Alias %s %s", alias_id, "deleted" if permanent else "deactivated")


# ── Official name alias ──────────────────────────────────────────────


def ensure_official_alias(db: Session, company: Company) -> tuple[CompanyAlias | None, str | None]:
    """Create the official-name alias (priority 100) for a new company.

    Returns (alias, None) on success. When an active alias already holds the
    name, nothing is created and (None, warning) is returned.
    """
    alias = _insert_alias_if_absent(
        db,
        name=company.name,
        company_id=company.id,
        priority=OFFICIAL_NAME_PRIORITY,
        created_by=None,
    )
    if alias is not None:
        return alias, None

    existing = find_active_alias(db, normalize_name(company.name))
    owner = existing.company_id if existing is not None else None
    warning = (
        f"Official name alias not created: an active alias with the name "
        f"{company.name.strip()!r} already exists"
        + (f" (linked to company {owner})" if owner is not None else " (unlinked)")
    )
    logger.warning("Company %s: %s", company.id, warning)
    return None, warning


# ── Suggestions (admin) ──────────────────────────────────────────────


def list_suggestions(
    db: Session,
    status: SuggestionStatus | str = SuggestionStatus.pending,
    *,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[SuggestionRead], int]:
    """Suggestions in one status, newest first."""
    status_value = SuggestionStatus(status).value
    base = db.query(CompanyAliasSuggestion).filter(CompanyAliasSuggestion.status == status_value)
    total = base.count()
    rows = (
        db.query(CompanyAliasSuggestion, Company.name)
        .outerjoin(Company, CompanyAliasSuggestion.potential_company_id == Company.id)
        .filter(CompanyAliasSuggestion.status == status_value)
        .order_by(CompanyAliasSuggestion.created_at.desc(), CompanyAliasSuggestion.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return [suggestion_to_read(s, company_name) for s, company_name in rows], total


def review_suggestion(
    db: Session,
    suggestion_id: int,
    review: SuggestionReview,
    admin_id: int | None = None,
) -> SuggestionReviewResult:
    """Approve or reject a pending suggestion, optionally materializing an alias.

    The status change is committed first and stands even when the alias is
    not created (no target company, or the name is already an active alias).
    """
    suggestion = (
        db.query(CompanyAliasSuggestion)
        .filter(CompanyAliasSuggestion.id == suggestion_id)
        .first()
    )
    if suggestion is None:
        raise SuggestionNotFoundError(f"Suggestion {suggestion_id} not found")
    if suggestion.status != SuggestionStatus.pending.value:
        raise SuggestionAlreadyReviewedError(
            f"Suggestion {suggestion_id} is already {suggestion.status}"
        )
    if review.company_id is not None:
        require_company(db, review.company_id)

    decision = SuggestionStatus(review.status.value)
    suggestion.status = decision.value
    suggestion.reviewed_by = admin_id
    suggestion.reviewed_at = datetime.now(timezone.utc)
    suggestion.admin_notes = review.admin_notes
    db.commit()
    logger.info("Suggestion %s %s", suggestion.id, decision.value)

    result = SuggestionReviewResult(
        suggestion_id=suggestion.id,
        status=decision,
        message=f"Suggestion {decision.value}",
    )
    if decision is not SuggestionStatus.approved or not review.create_alias:
        return result

    company_id = review.company_id or suggestion.potential_company_id
    if company_id is None:
        result.message = f"Suggestion {decision.value}; alias not created: no company to link"
        return result

    alias = _insert_alias_if_absent(
        db,
        name=suggestion.suggested_name,
        company_id=company_id,
        priority=SUGGESTION_ALIAS_PRIORITY,
        created_by=admin_id,
    )
    if alias is None:
        result.message = f"Suggestion {decision.value}; alias already exists"
        return result

    result.alias_created = True
    result.alias_id = alias.id
    return result


def _insert_alias_if_absent(
    db: Session,
    *,
    name: str,
    company_id: int,
    priority: int,
    created_by: int | None,
) -> CompanyAlias | None:
    """Insert an active common_name alias; None if the normalized name is taken.

    Raises InvalidAliasNameError for a name that is blank after trimming.
    """
    normalized = normalize_name(name)
    if not normalized:
        raise InvalidAliasNameError("Alias name required")
    if find_active_alias(db, normalized) is not None:
        logger.info("Skipping alias %r: active alias already exists", name)
        return None
    alias = CompanyAlias(
        alias_name=name.strip(),
        company_id=company_id,
        alias_type=AliasType.common_name.value,
        priority=priority,
        is_active=True,
        created_by=created_by,
    )
    db.add(alias)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Skipping alias %r: lost insert race", name)
        return None
    db.refresh(alias)
    return alias
