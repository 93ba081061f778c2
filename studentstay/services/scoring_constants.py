"""Trust score, completion and review quality constants.

Centralized configuration for the composite score calculator. No magic numbers
inside the scoring functions: weights, field checklists and the neutral
defaults used for omitted factors are all defined here.
"""

from __future__ import annotations

# ── Profile completion checklists ───────────────────────────────────────

USER_PROFILE_FIELDS: tuple[str, ...] = (
    "name",
    "nationality",
    "gender",
    "birth_date",
    "language_preferences",
    "current_country",
    "current_city",
    "home_university",
    "destination_university",
    "study_field",
    "study_level",
    "study_start_date",
    "study_end_date",
    "current_housing_type",
    "monthly_rent",
    "is_currently_renting",
    "has_lived_abroad_before",
)

COMPANY_PROFILE_FIELDS: tuple[str, ...] = (
    "tax_id",
    "website",
    "phone_number",
    "address",
    "city",
    "country",
    "housing_units",
    "capacity",
    "price_range",
    "amenities",
)

# ── User trust score ────────────────────────────────────────────────────

USER_TRUST_WEIGHTS: dict[str, float] = {
    "profile_completion": 0.30,
    "review_consistency": 0.25,
    "engagement_level": 0.20,
    "helpful_votes_ratio": 0.15,
    "account_age": 0.10,
}

# Neutral values substituted when a factor is omitted
DEFAULT_REVIEW_CONSISTENCY: float = 50.0
DEFAULT_HELPFUL_VOTES_RATIO: float = 0.0
DEFAULT_ACCOUNT_AGE_DAYS: float = 0.0

# Supplied by profile flows until review variance is measured
REVIEW_CONSISTENCY_PLACEHOLDER: float = 75.0

ENGAGEMENT_POINTS_PER_REVIEW: float = 10.0
ENGAGEMENT_POINTS_PER_HELPFUL_RATIO: float = 50.0

# Account age saturates at ~1 year
ACCOUNT_AGE_DAYS_PER_POINT: float = 3.65

# ── Company trust score ─────────────────────────────────────────────────

COMPANY_TRUST_WEIGHTS: dict[str, float] = {
    "verification_status": 0.25,
    "data_completeness": 0.20,
    "response_rate": 0.20,
    "average_rating": 0.15,
    "response_time": 0.10,
    "number_of_reviews": 0.05,
    "verified_reps": 0.03,
    "account_age": 0.02,
}

VERIFICATION_STATUS_SCORES: dict[str, float] = {
    "verified": 100.0,
    "pending": 50.0,
    "rejected": 0.0,
}

MAX_RATING: float = 5.0
RESPONSE_TIME_CEILING_HOURS: float = 168.0
REVIEWS_FOR_FULL_SCORE: float = 50.0
VERIFIED_REPS_FOR_FULL_SCORE: float = 5.0

# ── Review quality ──────────────────────────────────────────────────────

REVIEW_QUALITY_WEIGHTS: dict[str, float] = {
    "length": 0.20,
    "photos": 0.15,
    "tags": 0.15,
    "verified": 0.25,
    "detailed": 0.15,
    "consistency": 0.10,
}

REVIEW_LENGTH_FOR_FULL_SCORE: float = 300.0

# ── Trust levels (lower bound, label), highest first ────────────────────

TRUST_LEVELS: tuple[tuple[int, str], ...] = (
    (80, "Trusted"),
    (60, "Established"),
    (40, "Growing"),
    (0, "New"),
)

# ── Gamification tasks: (field, label, points) ──────────────────────────

USER_PROFILE_TASKS: tuple[tuple[str, str, int], ...] = (
    ("nationality", "Add your nationality", 5),
    ("birth_date", "Add your birth date", 3),
    ("language_preferences", "Set language preferences", 3),
    ("current_city", "Add your current city", 5),
    ("home_university", "Add your home university", 8),
    ("destination_university", "Add your destination university", 8),
    ("study_field", "Add your field of study", 5),
    ("study_level", "Add your study level", 3),
    ("current_housing_type", "Add your current housing type", 5),
    ("monthly_rent", "Add your monthly rent", 3),
)

COMPANY_PROFILE_TASKS: tuple[tuple[str, str, int], ...] = (
    ("tax_id", "Add tax ID", 10),
    ("website", "Add website URL", 5),
    ("phone_number", "Add phone number", 5),
    ("address", "Add address", 8),
    ("city", "Add city", 5),
    ("country", "Add country", 5),
    ("housing_units", "Add number of housing units", 5),
    ("capacity", "Add capacity", 5),
    ("price_range", "Add price range", 8),
    ("amenities", "Add amenities", 8),
)
