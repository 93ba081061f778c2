"""Company service: creation with official-name alias, profile updates, trust reports."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from studentstay.models.company import Company
from studentstay.schemas.company import (
    CompanyCreate,
    CompanyCreateResponse,
    CompanyRead,
    CompanyTrustScoreResponse,
    CompanyUpdate,
    ProfileTaskRead,
    ProfileTasksResponse,
    VerificationStatus,
)
from studentstay.services.alias_admin import NoFieldsToUpdateError, ensure_official_alias
from studentstay.services.scoring_constants import COMPANY_TRUST_WEIGHTS
from studentstay.services.trust_score import (
    CompanyTrustFactors,
    account_age_days,
    company_data_completeness,
    company_profile_tasks,
    company_trust_components,
    task_points,
    trust_level,
    weighted_breakdown,
    weighted_score,
)

logger = logging.getLogger(__name__)


class InvalidCompanyNameError(ValueError):
    """Raised when a company name is blank after trimming (caller returns 400)."""

    pass


def _schema_to_model_data(data: CompanyCreate | CompanyUpdate, *, is_update: bool = False) -> dict:
    """Map schema fields to model columns; enums become their string values."""
    raw = data.model_dump(exclude_unset=is_update)
    mapped: dict = {}
    for key, value in raw.items():
        if hasattr(value, "value"):
            value = value.value
        if key == "name" and isinstance(value, str):
            value = value.strip()
        mapped[key] = value
    return mapped


def _trust_factors(company: Company, now: datetime | None = None) -> CompanyTrustFactors:
    return CompanyTrustFactors(
        data_completeness=company_data_completeness(company),
        account_age_days=account_age_days(company.created_at, now),
    )


def refresh_company_scores(company: Company, now: datetime | None = None) -> None:
    """Recompute stored data completeness and trust score from the current row."""
    factors = _trust_factors(company, now)
    company.data_completeness_percentage = int(factors.data_completeness)
    company.trust_score = weighted_score(
        company_trust_components(company, factors), COMPANY_TRUST_WEIGHTS
    )


def get_company(db: Session, company_id: int) -> Company | None:
    return db.query(Company).filter(Company.id == company_id).first()


def create_company(db: Session, data: CompanyCreate) -> CompanyCreateResponse:
    """Insert a company and its official-name alias (priority 100).

    If an active alias already holds the official name, the company is still
    created and the collision is reported in warnings.
    """
    fields = _schema_to_model_data(data)
    if not fields.get("name"):
        raise InvalidCompanyNameError("Company name required")
    company = Company(**fields)
    db.add(company)
    db.flush()
    refresh_company_scores(company)
    db.commit()
    db.refresh(company)
    logger.info("Company %s created: %r", company.id, company.name)

    alias, warning = ensure_official_alias(db, company)
    return CompanyCreateResponse(
        company=CompanyRead.model_validate(company),
        official_alias_created=alias is not None,
        official_alias_id=alias.id if alias is not None else None,
        warnings=[warning] if warning else [],
    )


def update_company(db: Session, company_id: int, data: CompanyUpdate) -> Company | None:
    """Apply a partial profile update and recompute scores. None if not found.

    Raises NoFieldsToUpdateError for an empty body and InvalidCompanyNameError
    when the name is blank after trimming.
    """
    company = get_company(db, company_id)
    if company is None:
        return None
    changes = _schema_to_model_data(data, is_update=True)
    if not changes:
        raise NoFieldsToUpdateError("No fields to update")
    if changes.get("name") == "":
        raise InvalidCompanyNameError("Company name required")
    for key, value in changes.items():
        if key in ("name", "company_type") and value is None:
            continue
        setattr(company, key, value)
    refresh_company_scores(company)
    db.commit()
    db.refresh(company)
    return company


def set_verification_status(
    db: Session, company_id: int, status: VerificationStatus
) -> Company | None:
    company = get_company(db, company_id)
    if company is None:
        return None
    company.verification_status = VerificationStatus(status).value
    refresh_company_scores(company)
    db.commit()
    db.refresh(company)
    logger.info("Company %s verification status: %s", company.id, company.verification_status)
    return company


def company_trust_report(company: Company, now: datetime | None = None) -> CompanyTrustScoreResponse:
    """Live trust score for a company with factor values and weighted breakdown."""
    factors = _trust_factors(company, now)
    components = company_trust_components(company, factors)
    score = weighted_score(components, COMPANY_TRUST_WEIGHTS)
    return CompanyTrustScoreResponse(
        company_id=company.id,
        trust_score=score,
        level=trust_level(score),
        data_completeness=int(factors.data_completeness),
        factors=components,
        breakdown=weighted_breakdown(components, COMPANY_TRUST_WEIGHTS),
    )


def company_tasks(company: Company) -> ProfileTasksResponse:
    tasks = company_profile_tasks(company)
    earned, total = task_points(tasks)
    return ProfileTasksResponse(
        tasks=[ProfileTaskRead.model_validate(t) for t in tasks],
        earned_points=earned,
        total_points=total,
    )
