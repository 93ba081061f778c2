"""Admin alias and suggestion management routes.

Secured with a static admin key (X-Admin-Key header), not user auth.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from studentstay.api.deps import get_db, require_admin_key
from studentstay.config import get_settings
from studentstay.schemas.alias import (
    AliasCreate,
    AliasCreateResponse,
    AliasDeleteResponse,
    AliasLink,
    AliasLinkResponse,
    AliasList,
    AliasRead,
    AliasType,
    AliasUpdate,
    SuggestionList,
    SuggestionReview,
    SuggestionReviewResult,
    SuggestionStatus,
)
from studentstay.services.alias_admin import (
    AliasFilter,
    AliasNotFoundError,
    DuplicateAliasError,
    NoFieldsToUpdateError,
    SuggestionAlreadyReviewedError,
    SuggestionNotFoundError,
    alias_to_read,
    create_alias,
    delete_alias,
    link_alias,
    list_aliases,
    list_suggestions,
    review_suggestion,
    update_alias,
)
from studentstay.services.alias_resolver import CompanyNotFoundError, InvalidAliasNameError

router = APIRouter(dependencies=[Depends(require_admin_key)])


def _conflict(exc: DuplicateAliasError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "message": str(exc),
            "existing_alias_id": exc.existing_alias_id,
            "linked_company_id": exc.linked_company_id,
        },
    )


def _page_limit(limit: int | None) -> int:
    return limit or get_settings().admin_page_size


# ── Aliases ──────────────────────────────────────────────────────────


@router.get("/aliases", response_model=AliasList)
def api_list_aliases(
    company_id: int | None = Query(None),
    unlinked: bool = Query(False, description="Only aliases without a company."),
    alias_type: AliasType | None = Query(None),
    search: str | None = Query(None, description="Substring of the normalized name."),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
) -> AliasList:
    """List aliases with filters and pagination."""
    size = _page_limit(limit)
    filters = AliasFilter(
        company_id=company_id, unlinked=unlinked, alias_type=alias_type, search=search
    )
    items, total = list_aliases(db, filters, page=page, limit=size)
    return AliasList(items=items, total=total, page=page, limit=size)


@router.post("/aliases", response_model=AliasCreateResponse, status_code=201)
def api_create_alias(
    data: AliasCreate,
    db: Session = Depends(get_db),
) -> AliasCreateResponse:
    """Create an alias, linked to a company or unlinked."""
    try:
        alias = create_alias(db, data)
    except InvalidAliasNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except DuplicateAliasError as exc:
        raise _conflict(exc)
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    return AliasCreateResponse(alias=alias_to_read(alias), message="Alias created successfully")


@router.put("/aliases/{alias_id}", response_model=AliasRead)
def api_update_alias(
    alias_id: int,
    data: AliasUpdate,
    db: Session = Depends(get_db),
) -> AliasRead:
    """Update the fields present in the request body."""
    try:
        alias = update_alias(db, alias_id, data)
    except AliasNotFoundError:
        raise HTTPException(status_code=404, detail="Alias not found")
    except (NoFieldsToUpdateError, InvalidAliasNameError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except DuplicateAliasError as exc:
        raise _conflict(exc)
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    return alias_to_read(alias)


@router.post("/aliases/{alias_id}/link", response_model=AliasLinkResponse)
def api_link_alias(
    alias_id: int,
    data: AliasLink,
    db: Session = Depends(get_db),
) -> AliasLinkResponse:
    """Link an alias to a company."""
    try:
        alias, company = link_alias(db, alias_id, data.company_id)
    except AliasNotFoundError:
        raise HTTPException(status_code=404, detail="Alias not found")
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    return AliasLinkResponse(
        alias=alias_to_read(alias, company.name),
        company_id=company.id,
        company_name=company.name,
        message=f"Alias linked to {company.name}",
    )


@router.delete("/aliases/{alias_id}", response_model=AliasDeleteResponse)
def api_delete_alias(
    alias_id: int,
    permanent: bool = Query(False),
    db: Session = Depends(get_db),
) -> AliasDeleteResponse:
    """Deactivate an alias, or remove it with ?permanent=true."""
    try:
        delete_alias(db, alias_id, permanent=permanent)
    except AliasNotFoundError:
        raise HTTPException(status_code=404, detail="Alias not found")
    return AliasDeleteResponse(
        alias_id=alias_id,
        permanent=permanent,
        message="Alias permanently deleted" if permanent else "Alias deactivated",
    )


# ── Suggestions ──────────────────────────────────────────────────────


@router.get("/alias-suggestions", response_model=SuggestionList)
def api_list_suggestions(
    status: SuggestionStatus = Query(SuggestionStatus.pending),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
) -> SuggestionList:
    """List suggestions in one status, newest first."""
    size = _page_limit(limit)
    items, total = list_suggestions(db, status, page=page, limit=size)
    return SuggestionList(items=items, total=total, page=page, limit=size)


@router.post("/alias-suggestions/{suggestion_id}/review", response_model=SuggestionReviewResult)
def api_review_suggestion(
    suggestion_id: int,
    data: SuggestionReview,
    db: Session = Depends(get_db),
) -> SuggestionReviewResult:
    """Approve or reject a pending suggestion, optionally creating the alias."""
    try:
        return review_suggestion(db, suggestion_id, data)
    except SuggestionNotFoundError:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    except SuggestionAlreadyReviewedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
