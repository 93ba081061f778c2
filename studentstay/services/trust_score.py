"""Composite score calculator: profile completion, trust scores, review quality.

All functions are total. Omitted factors fall back to the neutral defaults in
scoring_constants and every sub-factor is clamped to 0..100 before weighting,
so results always land in 0..100.

Snapshots may be ORM instances, plain objects or dicts.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from studentstay.services.scoring_constants import (
    ACCOUNT_AGE_DAYS_PER_POINT,
    COMPANY_PROFILE_FIELDS,
    COMPANY_PROFILE_TASKS,
    COMPANY_TRUST_WEIGHTS,
    DEFAULT_ACCOUNT_AGE_DAYS,
    DEFAULT_HELPFUL_VOTES_RATIO,
    DEFAULT_REVIEW_CONSISTENCY,
    ENGAGEMENT_POINTS_PER_HELPFUL_RATIO,
    ENGAGEMENT_POINTS_PER_REVIEW,
    MAX_RATING,
    RESPONSE_TIME_CEILING_HOURS,
    REVIEW_LENGTH_FOR_FULL_SCORE,
    REVIEW_QUALITY_WEIGHTS,
    REVIEWS_FOR_FULL_SCORE,
    TRUST_LEVELS,
    USER_PROFILE_FIELDS,
    USER_PROFILE_TASKS,
    USER_TRUST_WEIGHTS,
    VERIFICATION_STATUS_SCORES,
    VERIFIED_REPS_FOR_FULL_SCORE,
)


@dataclass(frozen=True)
class UserTrustFactors:
    """Externally supplied user factors. None means "derive or use the default"."""

    profile_completion: float | None = None
    review_consistency: float | None = None
    engagement_level: float | None = None
    helpful_votes_ratio: float | None = None  # helpful votes per review, 0..1
    account_age_days: float | None = None


@dataclass(frozen=True)
class CompanyTrustFactors:
    """Externally supplied company factors. None means "derive or use the default"."""

    data_completeness: float | None = None
    account_age_days: float | None = None


@dataclass(frozen=True)
class ReviewQualityFactors:
    review_length: int = 0
    has_photos: bool = False
    has_category_tags: bool = False
    verified_stay: bool = False
    has_detailed_info: bool = False  # rent, dates, roommates, etc.
    sentiment_consistency: float = 0.0  # 0..1 alignment of sentiment with rating


@dataclass(frozen=True)
class ProfileTask:
    field: str
    label: str
    completed: bool
    weight: int


# ── Helpers ─────────────────────────────────────────────────────────────


def _field(snapshot: Any, name: str) -> Any:
    if isinstance(snapshot, Mapping):
        return snapshot.get(name)
    return getattr(snapshot, name, None)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def is_filled(value: Any) -> bool:
    """A field is filled unless it is None, an empty string or an empty collection."""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def account_age_days(created_at: datetime | None, now: datetime | None = None) -> int:
    """Whole days since created_at. Naive timestamps are taken as UTC."""
    if created_at is None:
        return 0
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return max(0, (now - created_at).days)


def _completion(snapshot: Any, fields: tuple[str, ...]) -> int:
    filled = sum(1 for f in fields if is_filled(_field(snapshot, f)))
    return round_half_up(filled / len(fields) * 100)


def _account_age_score(days: float | None) -> float:
    if days is None:
        days = DEFAULT_ACCOUNT_AGE_DAYS
    return _clamp(days / ACCOUNT_AGE_DAYS_PER_POINT)


def weighted_score(components: Mapping[str, float], weights: Mapping[str, float]) -> int:
    total = sum(components[key] * weight for key, weight in weights.items())
    return max(0, min(100, round_half_up(total)))


# ── Profile completion ─────────────────────────────────────────────────


def user_profile_completion(user: Any) -> int:
    """Percentage (0..100) of USER_PROFILE_FIELDS that are filled."""
    return _completion(user, USER_PROFILE_FIELDS)


def company_data_completeness(company: Any) -> int:
    """Percentage (0..100) of COMPANY_PROFILE_FIELDS that are filled."""
    return _completion(company, COMPANY_PROFILE_FIELDS)


# ── User trust score ───────────────────────────────────────────────────


def user_trust_components(
    user: Any, factors: UserTrustFactors | None = None
) -> dict[str, float]:
    """Return each user trust sub-factor normalized to 0..100, keyed like USER_TRUST_WEIGHTS."""
    factors = factors or UserTrustFactors()

    profile = factors.profile_completion
    if profile is None:
        profile = user_profile_completion(user)

    consistency = factors.review_consistency
    if consistency is None:
        consistency = DEFAULT_REVIEW_CONSISTENCY

    ratio = factors.helpful_votes_ratio
    if ratio is None:
        ratio = DEFAULT_HELPFUL_VOTES_RATIO

    engagement = factors.engagement_level
    if engagement is None:
        reviews = _field(user, "number_of_reviews") or 0
        engagement = (
            reviews * ENGAGEMENT_POINTS_PER_REVIEW + ratio * ENGAGEMENT_POINTS_PER_HELPFUL_RATIO
        )

    return {
        "profile_completion": _clamp(profile),
        "review_consistency": _clamp(consistency),
        "engagement_level": _clamp(engagement),
        "helpful_votes_ratio": _clamp(ratio * 100),
        "account_age": _account_age_score(factors.account_age_days),
    }


def user_trust_score(user: Any, factors: UserTrustFactors | None = None) -> int:
    """Weighted user trust score (0..100)."""
    return weighted_score(user_trust_components(user, factors), USER_TRUST_WEIGHTS)


# ── Company trust score ────────────────────────────────────────────────


def company_trust_components(
    company: Any, factors: CompanyTrustFactors | None = None
) -> dict[str, float]:
    """Return each company trust sub-factor normalized to 0..100, keyed like COMPANY_TRUST_WEIGHTS."""
    factors = factors or CompanyTrustFactors()

    verification = VERIFICATION_STATUS_SCORES.get(
        _field(company, "verification_status") or "", 0.0
    )

    completeness = factors.data_completeness
    if completeness is None:
        completeness = company_data_completeness(company)

    response_rate = (_field(company, "response_rate") or 0) * 100
    rating = (_field(company, "average_rating") or 0) / MAX_RATING * 100

    # Lower is better; unknown response time scores as the ceiling
    hours = _field(company, "average_response_time_hours")
    if hours is None:
        hours = RESPONSE_TIME_CEILING_HOURS
    response_time = max(0.0, 100 - hours / RESPONSE_TIME_CEILING_HOURS * 100)

    reviews = (_field(company, "number_of_reviews") or 0) / REVIEWS_FOR_FULL_SCORE * 100
    reps = (_field(company, "number_of_verified_reps") or 0) / VERIFIED_REPS_FOR_FULL_SCORE * 100

    return {
        "verification_status": verification,
        "data_completeness": _clamp(completeness),
        "response_rate": _clamp(response_rate),
        "average_rating": _clamp(rating),
        "response_time": _clamp(response_time),
        "number_of_reviews": _clamp(reviews),
        "verified_reps": _clamp(reps),
        "account_age": _account_age_score(factors.account_age_days),
    }


def company_trust_score(company: Any, factors: CompanyTrustFactors | None = None) -> int:
    """Weighted company trust score (0..100)."""
    return weighted_score(company_trust_components(company, factors), COMPANY_TRUST_WEIGHTS)


# ── Breakdown and levels ───────────────────────────────────────────────


def weighted_breakdown(
    components: Mapping[str, float], weights: Mapping[str, float]
) -> dict[str, int]:
    """Per-factor contribution to the composite, each rounded independently."""
    return {key: round_half_up(components[key] * weight) for key, weight in weights.items()}


def trust_level(score: int) -> str:
    for lower_bound, label in TRUST_LEVELS:
        if score >= lower_bound:
            return label
    return TRUST_LEVELS[-1][1]


# ── Review quality ─────────────────────────────────────────────────────


def review_quality_score(factors: ReviewQualityFactors) -> int:
    """Weighted review quality score (0..100). Not part of any trust score."""
    components = {
        "length": _clamp(factors.review_length / REVIEW_LENGTH_FOR_FULL_SCORE * 100),
        "photos": 100.0 if factors.has_photos else 0.0,
        "tags": 100.0 if factors.has_category_tags else 0.0,
        "verified": 100.0 if factors.verified_stay else 0.0,
        "detailed": 100.0 if factors.has_detailed_info else 0.0,
        "consistency": _clamp(factors.sentiment_consistency * 100),
    }
    return weighted_score(components, REVIEW_QUALITY_WEIGHTS)


# ── Gamification ───────────────────────────────────────────────────────


def _tasks(snapshot: Any, table: tuple[tuple[str, str, int], ...]) -> list[ProfileTask]:
    return [
        ProfileTask(field=f, label=label, completed=bool(_field(snapshot, f)), weight=weight)
        for f, label, weight in table
    ]


def user_profile_tasks(user: Any) -> list[ProfileTask]:
    return _tasks(user, USER_PROFILE_TASKS)


def company_profile_tasks(company: Any) -> list[ProfileTask]:
    return _tasks(company, COMPANY_PROFILE_TASKS)


def task_points(tasks: list[ProfileTask]) -> tuple[int, int]:
    """Return (earned, total) points for a task list."""
    earned = sum(t.weight for t in tasks if t.completed)
    total = sum(t.weight for t in tasks)
    return earned, total
