"""User profile updates and trust score reporting.

Every profile write recomputes profile_completion_percentage and trust_score
so the stored values never drift from the profile they describe.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from studentstay.models.user import User
from studentstay.schemas.company import ProfileTaskRead, ProfileTasksResponse
from studentstay.schemas.user import UserProfileUpdate, UserTrustScoreResponse
from studentstay.services.alias_admin import NoFieldsToUpdateError
from studentstay.services.scoring_constants import (
    ENGAGEMENT_POINTS_PER_REVIEW,
    REVIEW_CONSISTENCY_PLACEHOLDER,
    USER_TRUST_WEIGHTS,
)
from studentstay.services.trust_score import (
    UserTrustFactors,
    account_age_days,
    task_points,
    trust_level,
    user_profile_completion,
    user_profile_tasks,
    user_trust_components,
    weighted_breakdown,
    weighted_score,
)

logger = logging.getLogger(__name__)


def user_trust_factors(user: User, now: datetime | None = None) -> UserTrustFactors:
    """Factors supplied by the profile flow.

    Engagement counts reviews only. With no reviews it is left to the scorer,
    which derives it from the helpful ratio.
    """
    reviews = user.number_of_reviews or 0
    votes = user.number_of_helpful_votes_received or 0
    engagement = min(100.0, reviews * ENGAGEMENT_POINTS_PER_REVIEW)
    return UserTrustFactors(
        profile_completion=user_profile_completion(user),
        engagement_level=engagement or None,
        review_consistency=REVIEW_CONSISTENCY_PLACEHOLDER,
        helpful_votes_ratio=votes / max(1, reviews),
        account_age_days=account_age_days(user.created_at, now),
    )


def refresh_user_scores(user: User, now: datetime | None = None) -> None:
    factors = user_trust_factors(user, now)
    user.profile_completion_percentage = int(factors.profile_completion)
    user.trust_score = weighted_score(user_trust_components(user, factors), USER_TRUST_WEIGHTS)


def update_profile(db: Session, user: User, data: UserProfileUpdate) -> User:
    """Merge the provided fields into the profile and recompute scores.

    Raises NoFieldsToUpdateError when the request carries no fields.
    """
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise NoFieldsToUpdateError("No fields to update")
    if "name" in changes:
        if not changes["name"] or not changes["name"].strip():
            del changes["name"]
        else:
            changes["name"] = changes["name"].strip()

    for key, value in changes.items():
        setattr(user, key, value)
    now = datetime.now(timezone.utc)
    user.last_activity_at = now
    refresh_user_scores(user, now)
    db.commit()
    db.refresh(user)
    logger.info(
        "User %s profile updated: completion=%s trust=%s",
        user.id,
        user.profile_completion_percentage,
        user.trust_score,
    )
    return user


def user_trust_report(user: User, now: datetime | None = None) -> UserTrustScoreResponse:
    factors = user_trust_factors(user, now)
    components = user_trust_components(user, factors)
    score = weighted_score(components, USER_TRUST_WEIGHTS)
    return UserTrustScoreResponse(
        user_id=user.id,
        trust_score=score,
        level=trust_level(score),
        profile_completion=int(factors.profile_completion),
        factors=components,
        breakdown=weighted_breakdown(components, USER_TRUST_WEIGHTS),
    )


def user_tasks(user: User) -> ProfileTasksResponse:
    tasks = user_profile_tasks(user)
    earned, total = task_points(tasks)
    return ProfileTasksResponse(
        tasks=[ProfileTaskRead.model_validate(t) for t in tasks],
        earned_points=earned,
        total_points=total,
    )
