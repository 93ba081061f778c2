"""Tests for admin alias management and suggestion review."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from studentstay.models.alias_suggestion import CompanyAliasSuggestion
from studentstay.models.company_alias import CompanyAlias
from studentstay.schemas.alias import (
    AliasCreate,
    AliasType,
    AliasUpdate,
    ReviewDecision,
    SuggestionReview,
)
from studentstay.services.alias_admin import (
    OFFICIAL_NAME_PRIORITY,
    AliasFilter,
    AliasNotFoundError,
    DuplicateAliasError,
    NoFieldsToUpdateError,
    SuggestionAlreadyReviewedError,
    SuggestionNotFoundError,
    create_alias,
    delete_alias,
    ensure_official_alias,
    link_alias,
    list_aliases,
    list_suggestions,
    review_suggestion,
    update_alias,
)
from studentstay.services.alias_resolver import CompanyNotFoundError, InvalidAliasNameError


@pytest.fixture
def ipg(make_company):
    return make_company("Instituto Politécnico da Guarda")


@pytest.fixture
def make_suggestion(db: Session):
    def _make(name: str, company_id: int | None = None, status: str = "pending"):
        suggestion = CompanyAliasSuggestion(
            suggested_name=name,
            suggested_name_normalized=name.strip().lower(),
            potential_company_id=company_id,
            status=status,
        )
        db.add(suggestion)
        db.commit()
        db.refresh(suggestion)
        return suggestion

    return _make


# ── Create / update ──────────────────────────────────────────────────


class TestCreateAlias:
    def test_creates_linked_alias(self, db: Session, ipg) -> None:
        alias = create_alias(db, AliasCreate(alias_name="  IPG ", company_id=ipg.id), created_by=7)

        assert alias.alias_name == "IPG"
        assert alias.alias_name_normalized == "ipg"
        assert alias.is_active is True
        assert alias.usage_count == 0
        assert alias.priority == 50
        assert alias.created_by == 7

    def test_creates_unlinked_alias(self, db: Session) -> None:
        alias = create_alias(db, AliasCreate(alias_name="Poli", alias_type=AliasType.abbreviation))
        assert alias.company_id is None
        assert alias.alias_type == "abbreviation"

    def test_duplicate_reports_existing_alias(self, db: Session, ipg, make_alias) -> None:
        existing = make_alias("IPG", ipg.id)

        with pytest.raises(DuplicateAliasError) as exc_info:
            create_alias(db, AliasCreate(alias_name="ipg "))

        assert exc_info.value.existing_alias_id == existing.id
        assert exc_info.value.linked_company_id == ipg.id
        assert db.query(CompanyAlias).count() == 1

    def test_inactive_alias_does_not_conflict(self, db: Session, ipg, make_alias) -> None:
        make_alias("IPG", ipg.id, is_active=False)
        alias = create_alias(db, AliasCreate(alias_name="IPG", company_id=ipg.id))
        assert alias.is_active is True

    def test_blank_name_rejected(self, db: Session) -> None:
        with pytest.raises(InvalidAliasNameError):
            create_alias(db, AliasCreate(alias_name="   "))

    def test_unknown_company_rejected(self, db: Session) -> None:
        with pytest.raises(CompanyNotFoundError):
            create_alias(db, AliasCreate(alias_name="IPG", company_id=999))


class TestUpdateAlias:
    def test_applies_only_present_fields(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("IPG", ipg.id, priority=10)

        updated = update_alias(db, alias.id, AliasUpdate(priority=80))

        assert updated.priority == 80
        assert updated.alias_name == "IPG"
        assert updated.company_id == ipg.id

    def test_rename_keeps_normalized_in_sync(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("IPG", ipg.id)
        updated = update_alias(db, alias.id, AliasUpdate(alias_name=" Poli Guarda "))
        assert updated.alias_name_normalized == "poli guarda"

    def test_empty_update_rejected(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("IPG", ipg.id)
        with pytest.raises(NoFieldsToUpdateError):
            update_alias(db, alias.id, AliasUpdate())

    def test_rename_onto_active_name_conflicts(self, db: Session, ipg, make_alias) -> None:
        taken = make_alias("IPG", ipg.id)
        other = make_alias("Poli", ipg.id)
        with pytest.raises(DuplicateAliasError) as exc_info:
            update_alias(db, other.id, AliasUpdate(alias_name="IPG"))
        assert exc_info.value.existing_alias_id == taken.id

    def test_reactivation_conflicts(self, db: Session, ipg, make_alias) -> None:
        make_alias("IPG", ipg.id)
        old = make_alias("ipg", ipg.id, is_active=False)
        with pytest.raises(DuplicateAliasError):
            update_alias(db, old.id, AliasUpdate(is_active=True))

    def test_missing_alias(self, db: Session) -> None:
        with pytest.raises(AliasNotFoundError):
            update_alias(db, 999, AliasUpdate(priority=1))


# ── Link / delete ────────────────────────────────────────────────────


class TestLinkAndDelete:
    def test_link_sets_company_only(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("Poli", None, priority=33)

        linked, company = link_alias(db, alias.id, ipg.id)

        assert linked.company_id == ipg.id
        assert linked.priority == 33
        assert company.name == ipg.name

    def test_link_to_unknown_company(self, db: Session, make_alias) -> None:
        alias = make_alias("Poli", None)
        with pytest.raises(CompanyNotFoundError):
            link_alias(db, alias.id, 999)

    def test_soft_delete_deactivates(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("IPG", ipg.id)
        delete_alias(db, alias.id)
        db.refresh(alias)
        assert alias.is_active is False

    def test_permanent_delete_removes_row(self, db: Session, ipg, make_alias) -> None:
        alias = make_alias("IPG", ipg.id)
        delete_alias(db, alias.id, permanent=True)
        assert db.query(CompanyAlias).count() == 0

    def test_delete_missing_alias(self, db: Session) -> None:
        with pytest.raises(AliasNotFoundError):
            delete_alias(db, 999)


# ── Listing ──────────────────────────────────────────────────────────


class TestListAliases:
    def test_filters_and_company_name(self, db: Session, ipg, make_company, make_alias) -> None:
        other = make_company("Casa Nova")
        make_alias("IPG", ipg.id, priority=100)
        make_alias("Poli Guarda", ipg.id, priority=10, alias_type="translation")
        make_alias("Casa", other.id)
        make_alias("Orphan", None)

        items, total = list_aliases(db, AliasFilter(company_id=ipg.id))
        assert total == 2
        assert [i.alias_name for i in items] == ["IPG", "Poli Guarda"]
        assert items[0].company_name == ipg.name

        items, total = list_aliases(db, AliasFilter(unlinked=True))
        assert [i.alias_name for i in items] == ["Orphan"]
        assert items[0].company_name is None

        items, _ = list_aliases(db, AliasFilter(alias_type=AliasType.translation))
        assert [i.alias_name for i in items] == ["Poli Guarda"]

        items, _ = list_aliases(db, AliasFilter(search="GUARD"))
        assert [i.alias_name for i in items] == ["Poli Guarda"]

    def test_search_is_bound_not_interpolated(self, db: Session, ipg, make_alias) -> None:
        make_alias("IPG", ipg.id)
        items, total = list_aliases(db, AliasFilter(search="' OR 1=1 --"))
        assert total == 0
        assert items == []

    def test_pagination(self, db: Session, ipg, make_alias) -> None:
        for i in range(5):
            make_alias(f"alias {i}", ipg.id, priority=i)

        items, total = list_aliases(db, page=2, limit=2)

        assert total == 5
        assert [i.alias_name for i in items] == ["alias 2", "alias 1"]


# ── Official name alias ──────────────────────────────────────────────


class TestEnsureOfficialAlias:
    def test_creates_priority_alias(self, db: Session, ipg) -> None:
        alias, warning = ensure_official_alias(db, ipg)
        assert warning is None
        assert alias.priority == OFFICIAL_NAME_PRIORITY
        assert alias.company_id == ipg.id
        assert alias.alias_type == "common_name"

    def test_collision_returns_warning(self, db: Session, ipg, make_company, make_alias) -> None:
        make_alias("Casa Nova", ipg.id)
        clash = make_company("Casa Nova")

        alias, warning = ensure_official_alias(db, clash)

        assert alias is None
        assert "Casa Nova" in warning
        assert str(ipg.id) in warning
        assert db.query(CompanyAlias).count() == 1

    def test_blank_name_never_reserved(self, db: Session, make_company) -> None:
        blank = make_company("   ")

        with pytest.raises(InvalidAliasNameError):
            ensure_official_alias(db, blank)
        assert db.query(CompanyAlias).count() == 0


# ── Suggestions ──────────────────────────────────────────────────────


class TestReviewSuggestion:
    def test_approve_with_alias_uses_candidate_company(
        self, db: Session, ipg, make_suggestion
    ) -> None:
        suggestion = make_suggestion("Poli Guarda", ipg.id)

        result = review_suggestion(
            db,
            suggestion.id,
            SuggestionReview(status=ReviewDecision.approved, create_alias=True, admin_notes="ok"),
            admin_id=3,
        )

        assert result.status == "approved"
        assert result.alias_created is True
        alias = db.query(CompanyAlias).filter(CompanyAlias.id == result.alias_id).one()
        assert alias.company_id == ipg.id
        assert alias.priority == 50
        assert alias.created_by == 3
        db.refresh(suggestion)
        assert suggestion.status == "approved"
        assert suggestion.reviewed_by == 3
        assert suggestion.reviewed_at is not None
        assert suggestion.admin_notes == "ok"

    def test_approve_is_idempotent_when_alias_exists(
        self, db: Session, ipg, make_alias, make_suggestion
    ) -> None:
        make_alias("Poli Guarda", ipg.id)
        suggestion = make_suggestion("poli guarda", ipg.id)

        result = review_suggestion(
            db, suggestion.id, SuggestionReview(status=ReviewDecision.approved, create_alias=True)
        )

        assert result.status == "approved"
        assert result.alias_created is False
        assert "already exists" in result.message
        assert db.query(CompanyAlias).count() == 1

    def test_approve_without_company_skips_alias(self, db: Session, make_suggestion) -> None:
        suggestion = make_suggestion("Poli Guarda")

        result = review_suggestion(
            db, suggestion.id, SuggestionReview(status=ReviewDecision.approved, create_alias=True)
        )

        assert result.status == "approved"
        assert result.alias_created is False
        assert db.query(CompanyAlias).count() == 0

    def test_review_company_overrides_candidate(
        self, db: Session, ipg, make_company, make_suggestion
    ) -> None:
        other = make_company("Casa Nova")
        suggestion = make_suggestion("CN", ipg.id)

        result = review_suggestion(
            db,
            suggestion.id,
            SuggestionReview(status=ReviewDecision.approved, create_alias=True, company_id=other.id),
        )

        alias = db.query(CompanyAlias).filter(CompanyAlias.id == result.alias_id).one()
        assert alias.company_id == other.id

    def test_reject_creates_nothing(self, db: Session, ipg, make_suggestion) -> None:
        suggestion = make_suggestion("Poli Guarda", ipg.id)

        result = review_suggestion(
            db, suggestion.id, SuggestionReview(status=ReviewDecision.rejected, create_alias=True)
        )

        assert result.status == "rejected"
        assert result.alias_created is False
        assert db.query(CompanyAlias).count() == 0

    def test_terminal_suggestion_cannot_be_reviewed(self, db: Session, make_suggestion) -> None:
        suggestion = make_suggestion("Poli Guarda", status="rejected")
        with pytest.raises(SuggestionAlreadyReviewedError):
            review_suggestion(
                db, suggestion.id, SuggestionReview(status=ReviewDecision.approved)
            )

    def test_unknown_review_company_changes_nothing(
        self, db: Session, make_suggestion
    ) -> None:
        suggestion = make_suggestion("Poli Guarda")
        with pytest.raises(CompanyNotFoundError):
            review_suggestion(
                db,
                suggestion.id,
                SuggestionReview(status=ReviewDecision.approved, company_id=999),
            )
        db.refresh(suggestion)
        assert suggestion.status == "pending"

    def test_missing_suggestion(self, db: Session) -> None:
        with pytest.raises(SuggestionNotFoundError):
            review_suggestion(db, 999, SuggestionReview(status=ReviewDecision.rejected))


class TestListSuggestions:
    def test_defaults_to_pending_with_company_name(
        self, db: Session, ipg, make_suggestion
    ) -> None:
        make_suggestion("Poli Guarda", ipg.id)
        make_suggestion("Old name", status="rejected")

        items, total = list_suggestions(db)

        assert total == 1
        assert items[0].suggested_name == "Poli Guarda"
        assert items[0].potential_company_name == ipg.name

    def test_filters_by_status(self, db: Session, make_suggestion) -> None:
        make_suggestion("Old name", status="rejected")
        items, total = list_suggestions(db, "rejected")
        assert total == 1
        assert items[0].status == "rejected"
