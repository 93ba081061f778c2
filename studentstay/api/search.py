"""Public company search, resolution and alias suggestion routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from studentstay.api.deps import get_current_user, get_db
from studentstay.models.user import User
from studentstay.schemas.alias import (
    CompanyAliasesResponse,
    CompanyAliasSummary,
    CompanySearchResponse,
    ResolveLocationResponse,
    SuggestionCreate,
    SuggestionSubmitResponse,
    TrackUsageRequest,
)
from studentstay.services.alias_resolver import (
    CompanyNotFoundError,
    InvalidAliasNameError,
    InvalidSearchQueryError,
    list_company_aliases,
    resolve_location,
    search_companies,
    submit_suggestion,
    track_alias_usage,
)

router = APIRouter()


@router.get("/companies", response_model=CompanySearchResponse)
def api_search_companies(
    q: str | None = Query(None, description="Name prefix, at least 2 characters."),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
) -> CompanySearchResponse:
    """Prefix search over active company aliases (autocomplete)."""
    try:
        return search_companies(db, q, limit)
    except InvalidSearchQueryError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/companies/{company_id}/aliases", response_model=CompanyAliasesResponse)
def api_company_aliases(
    company_id: int,
    db: Session = Depends(get_db),
) -> CompanyAliasesResponse:
    """Active aliases of one company."""
    aliases = list_company_aliases(db, company_id)
    if aliases is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyAliasesResponse(
        company_id=company_id,
        aliases=[CompanyAliasSummary.model_validate(a) for a in aliases],
    )


@router.post("/suggest-alias", response_model=SuggestionSubmitResponse)
def api_suggest_alias(
    data: SuggestionCreate,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
) -> SuggestionSubmitResponse:
    """Suggest an alternate company name. Anonymous suggestions are accepted."""
    try:
        return submit_suggestion(
            db,
            data.suggested_name,
            context=data.context,
            potential_company_id=data.potential_company_id,
            user_id=user.id if user is not None else None,
        )
    except InvalidAliasNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")


@router.get("/resolve-location", response_model=ResolveLocationResponse)
def api_resolve_location(
    location: str | None = Query(None),
    db: Session = Depends(get_db),
) -> ResolveLocationResponse:
    """Resolve a free-text location to a verified company's canonical name."""
    try:
        return resolve_location(db, location)
    except InvalidSearchQueryError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/track-alias-usage")
def api_track_alias_usage(
    data: TrackUsageRequest,
    db: Session = Depends(get_db),
) -> dict:
    """Count one use of an alias."""
    if not track_alias_usage(db, data.alias_id):
        raise HTTPException(status_code=404, detail="Alias not found")
    return {"alias_id": data.alias_id, "tracked": True}
