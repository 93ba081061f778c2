"""Tests for the admin alias API (X-Admin-Key protected)."""

from __future__ import annotations

from fastapi.testclient import TestClient

from studentstay.models.alias_suggestion import CompanyAliasSuggestion
from studentstay.models.company_alias import CompanyAlias


class TestAdminKey:
    def test_missing_key_returns_403(self, client_with_db: TestClient) -> None:
        assert client_with_db.get("/api/admin/aliases").status_code == 403

    def test_wrong_key_returns_403(self, client_with_db: TestClient) -> None:
        resp = client_with_db.get("/api/admin/aliases", headers={"X-Admin-Key": "nope"})
        assert resp.status_code == 403

    def test_suggestions_also_protected(self, client_with_db: TestClient) -> None:
        assert client_with_db.get("/api/admin/alias-suggestions").status_code == 403


class TestAliasCrud:
    def test_create_and_list(
        self, client_with_db: TestClient, admin_headers, make_company
    ) -> None:
        company = make_company()

        resp = client_with_db.post(
            "/api/admin/aliases",
            json={"alias_name": "IPG", "company_id": company.id, "alias_type": "abbreviation"},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["alias"]["alias_name_normalized"] == "ipg"

        resp = client_with_db.get(
            "/api/admin/aliases", params={"company_id": company.id}, headers=admin_headers
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["limit"] == 50
        assert data["items"][0]["company_name"] == company.name

    def test_duplicate_returns_409_with_details(
        self, client_with_db: TestClient, admin_headers, make_company, make_alias
    ) -> None:
        company = make_company()
        existing = make_alias("IPG", company.id)

        resp = client_with_db.post(
            "/api/admin/aliases", json={"alias_name": " ipg"}, headers=admin_headers
        )

        assert resp.status_code == 409
        detail = resp.json()["detail"]
        assert detail["existing_alias_id"] == existing.id
        assert detail["linked_company_id"] == company.id

    def test_invalid_alias_type_returns_422(
        self, client_with_db: TestClient, admin_headers
    ) -> None:
        resp = client_with_db.post(
            "/api/admin/aliases",
            json={"alias_name": "IPG", "alias_type": "nickname"},
            headers=admin_headers,
        )
        assert resp.status_code == 422

    def test_update_with_no_fields_returns_400(
        self, client_with_db: TestClient, admin_headers, make_company, make_alias
    ) -> None:
        alias = make_alias("IPG", make_company().id)
        resp = client_with_db.put(f"/api/admin/aliases/{alias.id}", json={}, headers=admin_headers)
        assert resp.status_code == 400

    def test_update_priority(
        self, client_with_db: TestClient, admin_headers, make_company, make_alias
    ) -> None:
        alias = make_alias("IPG", make_company().id)
        resp = client_with_db.put(
            f"/api/admin/aliases/{alias.id}", json={"priority": 90}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["priority"] == 90

    def test_update_missing_alias_returns_404(
        self, client_with_db: TestClient, admin_headers
    ) -> None:
        resp = client_with_db.put("/api/admin/aliases/999", json={"priority": 1}, headers=admin_headers)
        assert resp.status_code == 404

    def test_link(
        self, client_with_db: TestClient, admin_headers, make_company, make_alias
    ) -> None:
        company = make_company()
        alias = make_alias("Poli", None)

        resp = client_with_db.post(
            f"/api/admin/aliases/{alias.id}/link",
            json={"company_id": company.id},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["company_id"] == company.id
        assert data["alias"]["company_id"] == company.id

    def test_soft_then_permanent_delete(
        self, client_with_db: TestClient, admin_headers, db, make_company, make_alias
    ) -> None:
        alias = make_alias("IPG", make_company().id)

        resp = client_with_db.delete(f"/api/admin/aliases/{alias.id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["permanent"] is False
        db.refresh(alias)
        assert alias.is_active is False

        resp = client_with_db.delete(
            f"/api/admin/aliases/{alias.id}", params={"permanent": "true"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert db.query(CompanyAlias).count() == 0

    def test_unlinked_filter(
        self, client_with_db: TestClient, admin_headers, make_company, make_alias
    ) -> None:
        make_alias("IPG", make_company().id)
        make_alias("Orphan", None)
        resp = client_with_db.get(
            "/api/admin/aliases", params={"unlinked": "true"}, headers=admin_headers
        )
        assert [i["alias_name"] for i in resp.json()["items"]] == ["Orphan"]


class TestSuggestionReviewApi:
    def _suggestion(self, db, company_id=None, status="pending") -> CompanyAliasSuggestion:
        suggestion = CompanyAliasSuggestion(
            suggested_name="Poli Guarda",
            suggested_name_normalized="poli guarda",
            potential_company_id=company_id,
            status=status,
        )
        db.add(suggestion)
        db.commit()
        db.refresh(suggestion)
        return suggestion

    def test_list_pending(self, client_with_db: TestClient, admin_headers, db) -> None:
        self._suggestion(db)
        resp = client_with_db.get("/api/admin/alias-suggestions", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["total"] == 1

    def test_approve_creates_alias(
        self, client_with_db: TestClient, admin_headers, db, make_company
    ) -> None:
        company = make_company()
        suggestion = self._suggestion(db, company.id)

        resp = client_with_db.post(
            f"/api/admin/alias-suggestions/{suggestion.id}/review",
            json={"status": "approved", "create_alias": True},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "approved"
        assert data["alias_created"] is True

    def test_second_review_returns_409(
        self, client_with_db: TestClient, admin_headers, db
    ) -> None:
        suggestion = self._suggestion(db, status="approved")
        resp = client_with_db.post(
            f"/api/admin/alias-suggestions/{suggestion.id}/review",
            json={"status": "rejected"},
            headers=admin_headers,
        )
        assert resp.status_code == 409

    def test_invalid_decision_returns_422(
        self, client_with_db: TestClient, admin_headers, db
    ) -> None:
        suggestion = self._suggestion(db)
        resp = client_with_db.post(
            f"/api/admin/alias-suggestions/{suggestion.id}/review",
            json={"status": "merged"},
            headers=admin_headers,
        )
        assert resp.status_code == 422

    def test_missing_suggestion_returns_404(
        self, client_with_db: TestClient, admin_headers
    ) -> None:
        resp = client_with_db.post(
            "/api/admin/alias-suggestions/999/review",
            json={"status": "rejected"},
            headers=admin_headers,
        )
        assert resp.status_code == 404
