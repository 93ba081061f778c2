"""Authenticated user profile routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studentstay.api.deps import get_db, require_auth
from studentstay.models.user import User
from studentstay.schemas.company import ProfileTasksResponse
from studentstay.schemas.user import UserProfileRead, UserProfileUpdate, UserTrustScoreResponse
from studentstay.services.alias_admin import NoFieldsToUpdateError
from studentstay.services.user_profile import update_profile, user_tasks, user_trust_report

router = APIRouter()


@router.get("/profile", response_model=UserProfileRead)
def api_get_profile(user: User = Depends(require_auth)) -> UserProfileRead:
    return UserProfileRead.model_validate(user)


@router.put("/profile", response_model=UserProfileRead)
def api_update_profile(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
) -> UserProfileRead:
    """Merge profile fields; completion and trust score are recomputed."""
    try:
        updated = update_profile(db, user, data)
    except NoFieldsToUpdateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return UserProfileRead.model_validate(updated)


@router.get("/trust-score", response_model=UserTrustScoreResponse)
def api_user_trust_score(user: User = Depends(require_auth)) -> UserTrustScoreResponse:
    """Trust score with factors, weighted breakdown and level."""
    return user_trust_report(user)


@router.get("/profile-tasks", response_model=ProfileTasksResponse)
def api_user_profile_tasks(user: User = Depends(require_auth)) -> ProfileTasksResponse:
    return user_tasks(user)
