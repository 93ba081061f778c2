"""Company API routes: creation, profile, verification, trust score."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studentstay.api.deps import get_db, require_admin_key
from studentstay.models.company import Company
from studentstay.schemas.company import (
    CompanyCreate,
    CompanyCreateResponse,
    CompanyRead,
    CompanyTrustScoreResponse,
    CompanyUpdate,
    ProfileTasksResponse,
    VerificationUpdate,
)
from studentstay.services.alias_admin import NoFieldsToUpdateError
from studentstay.services.company import (
    InvalidCompanyNameError,
    company_tasks,
    company_trust_report,
    create_company,
    get_company,
    set_verification_status,
    update_company,
)

router = APIRouter()


def _get_or_404(db: Session, company_id: int) -> Company:
    company = get_company(db, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.post("", response_model=CompanyCreateResponse, status_code=201)
def api_create_company(
    data: CompanyCreate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin_key),
) -> CompanyCreateResponse:
    """Create a company and its official-name alias.

    An alias collision on the official name does not fail the request; it is
    reported in ``warnings``.
    """
    try:
        return create_company(db, data)
    except InvalidCompanyNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/{company_id}", response_model=CompanyRead)
def api_get_company(
    company_id: int,
    db: Session = Depends(get_db),
) -> CompanyRead:
    return CompanyRead.model_validate(_get_or_404(db, company_id))


@router.put("/{company_id}", response_model=CompanyRead)
def api_update_company(
    company_id: int,
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin_key),
) -> CompanyRead:
    """Update profile fields; data completeness and trust score are recomputed."""
    try:
        company = update_company(db, company_id, data)
    except (NoFieldsToUpdateError, InvalidCompanyNameError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyRead.model_validate(company)


@router.patch("/{company_id}/verification", response_model=CompanyRead)
def api_set_verification(
    company_id: int,
    data: VerificationUpdate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin_key),
) -> CompanyRead:
    company = set_verification_status(db, company_id, data.verification_status)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyRead.model_validate(company)


@router.get("/{company_id}/trust-score", response_model=CompanyTrustScoreResponse)
def api_company_trust_score(
    company_id: int,
    db: Session = Depends(get_db),
) -> CompanyTrustScoreResponse:
    """Live trust score with factors, weighted breakdown and level."""
    return company_trust_report(_get_or_404(db, company_id))


@router.get("/{company_id}/profile-tasks", response_model=ProfileTasksResponse)
def api_company_profile_tasks(
    company_id: int,
    db: Session = Depends(get_db),
) -> ProfileTasksResponse:
    return company_tasks(_get_or_404(db, company_id))
