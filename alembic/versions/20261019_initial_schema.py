"""initial schema: users, companies, company aliases and suggestions

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19

At most one active alias may hold a normalized name (partial unique index).
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "20261019_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("nationality", sa.String(length=100), nullable=True),
        sa.Column("gender", sa.String(length=50), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("language_preferences", sa.JSON(), nullable=True),
        sa.Column("current_country", sa.String(length=100), nullable=True),
        sa.Column("current_city", sa.String(length=100), nullable=True),
        sa.Column("home_university", sa.String(length=255), nullable=True),
        sa.Column("destination_university", sa.String(length=255), nullable=True),
        sa.Column("study_field", sa.String(length=255), nullable=True),
        sa.Column("study_level", sa.String(length=100), nullable=True),
        sa.Column("study_start_date", sa.Date(), nullable=True),
        sa.Column("study_end_date", sa.Date(), nullable=True),
        sa.Column("current_housing_type", sa.String(length=100), nullable=True),
        sa.Column("monthly_rent", sa.Float(), nullable=True),
        sa.Column("is_currently_renting", sa.Boolean(), nullable=True),
        sa.Column("has_lived_abroad_before", sa.Boolean(), nullable=True),
        sa.Column("number_of_reviews", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "number_of_helpful_votes_received", sa.Integer(), server_default="0", nullable=False
        ),
        sa.Column("trust_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "profile_completion_percentage", sa.Integer(), server_default="0", nullable=False
        ),
        sa.Column("last_activity_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("company_type", sa.String(length=32), server_default="landlord", nullable=False),
        sa.Column(
            "verification_status", sa.String(length=16), server_default="pending", nullable=False
        ),
        sa.Column("tax_id", sa.String(length=100), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("housing_units", sa.Integer(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("price_range", sa.String(length=100), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=True),
        sa.Column("average_rating", sa.Float(), nullable=True),
        sa.Column("number_of_reviews", sa.Integer(), server_default="0", nullable=False),
        sa.Column("response_rate", sa.Float(), server_default="0", nullable=False),
        sa.Column("average_response_time_hours", sa.Float(), nullable=True),
        sa.Column("number_of_verified_reps", sa.Integer(), server_default="0", nullable=False),
        sa.Column("trust_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "data_completeness_percentage", sa.Integer(), server_default="0", nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(
        "ix_companies_verification_status", "companies", ["verification_status"]
    )

    op.create_table(
        "company_aliases",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("alias_name", sa.String(length=255), nullable=False),
        sa.Column("alias_name_normalized", sa.String(length=255), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=True),
        sa.Column(
            "alias_type", sa.String(length=32), server_default="common_name", nullable=False
        ),
        sa.Column("priority", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("usage_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_company_aliases_alias_name_normalized",
        "company_aliases",
        ["alias_name_normalized"],
    )
    op.create_index("ix_company_aliases_company_id", "company_aliases", ["company_id"])
    op.create_index(
        "ix_company_aliases_active_normalized",
        "company_aliases",
        ["alias_name_normalized"],
        unique=True,
        postgresql_where=sa.text("is_active"),
        sqlite_where=sa.text("is_active = 1"),
    )

    op.create_table(
        "company_alias_suggestions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("suggested_name", sa.String(length=255), nullable=False),
        sa.Column("suggested_name_normalized", sa.String(length=255), nullable=False),
        sa.Column("suggested_by_user_id", sa.Integer(), nullable=True),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column("potential_company_id", sa.Integer(), nullable=True),
        sa.Column("confidence_score", sa.Numeric(precision=3, scale=2), nullable=True),
        sa.Column("status", sa.String(length=16), server_default="pending", nullable=False),
        sa.Column("reviewed_by", sa.Integer(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["suggested_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["potential_company_id"], ["companies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_company_alias_suggestions_suggested_name_normalized",
        "company_alias_suggestions",
        ["suggested_name_normalized"],
    )
    op.create_index(
        "ix_company_alias_suggestions_status", "company_alias_suggestions", ["status"]
    )


def downgrade() -> None:
    op.drop_index("ix_company_alias_suggestions_status", table_name="company_alias_suggestions")
    op.drop_index(
        "ix_company_alias_suggestions_suggested_name_normalized",
        table_name="company_alias_suggestions",
    )
    op.drop_table("company_alias_suggestions")
    op.drop_index("ix_company_aliases_active_normalized", table_name="company_aliases")
    op.drop_index("ix_company_aliases_company_id", table_name="company_aliases")
    op.drop_index("ix_company_aliases_alias_name_normalized", table_name="company_aliases")
    op.drop_table("company_aliases")
    op.drop_index("ix_companies_verification_status", table_name="companies")
    op.drop_table("companies")
    op.drop_table("users")
