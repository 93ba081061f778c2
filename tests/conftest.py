"""
Pytest configuration and fixtures.

Tests run against a shared in-memory SQLite database whose schema is created
from model metadata; no PostgreSQL is needed.
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.test_constants import TEST_ADMIN_KEY, TEST_SECRET_KEY

# Must be set before studentstay is imported; don't inherit DATABASE_URL from .env
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = TEST_SECRET_KEY
os.environ["ADMIN_SECRET_KEY"] = TEST_ADMIN_KEY


@pytest.fixture(scope="session")
def _schema() -> None:
    """Create all tables once per test session."""
    import studentstay.models  # noqa: F401
    from studentstay.db.session import Base, engine

    Base.metadata.create_all(engine)


@pytest.fixture
def db(_schema: None) -> Session:
    """Database session. Every row written during the test is deleted afterwards."""
    from studentstay.db.session import Base, SessionLocal, engine

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from studentstay.main import app

    return TestClient(app)


@pytest.fixture
def client_with_db(db: Session) -> TestClient:
    """TestClient with get_db overridden to use the test db session."""
    from studentstay.db.session import get_db
    from studentstay.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    c = TestClient(app)
    yield c
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": TEST_ADMIN_KEY}


# ── Factories ────────────────────────────────────────────────────────


@pytest.fixture
def make_company(db: Session):
    """Insert a company directly (no official alias)."""
    from studentstay.models.company import Company

    def _make(name: str = "Instituto Politécnico da Guarda", **fields) -> Company:
        fields.setdefault("verification_status", "verified")
        company = Company(name=name, **fields)
        db.add(company)
        db.commit()
        db.refresh(company)
        return company

    return _make


@pytest.fixture
def make_alias(db: Session):
    """Insert an alias directly."""
    from studentstay.models.company_alias import CompanyAlias

    def _make(alias_name: str, company_id: int | None = None, **fields) -> CompanyAlias:
        fields.setdefault("priority", 50)
        alias = CompanyAlias(alias_name=alias_name, company_id=company_id, **fields)
        db.add(alias)
        db.commit()
        db.refresh(alias)
        return alias

    return _make
