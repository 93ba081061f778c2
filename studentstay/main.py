"""
StudentStay FastAPI application entry point.

Company name resolution (aliases and suggestions) and trust scoring for
student housing reviews.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from studentstay import __version__
from studentstay.config import get_settings
from studentstay.db.session import check_db_connection, engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("StudentStay starting")
    try:
        try:
            check_db_connection()
            logger.info("Database connection verified")
        except SQLAlchemyError as e:
            logger.critical("Database unreachable: %s", e)
            raise
        if not get_settings().admin_secret_key:
            logger.warning("ADMIN_SECRET_KEY is not set; admin endpoints will reject all requests")
        yield
    finally:
        logger.info("StudentStay shutting down")
        engine.dispose()
        logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    from studentstay.api.admin_aliases import router as admin_aliases_router
    from studentstay.api.auth import router as auth_router
    from studentstay.api.companies import router as companies_router
    from studentstay.api.search import router as search_router
    from studentstay.api.users import router as users_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(search_router, prefix="/api/search", tags=["search"])
    app.include_router(companies_router, prefix="/api/companies", tags=["companies"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(admin_aliases_router, prefix="/api/admin", tags=["admin"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity."""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
            }
        except SQLAlchemyError:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
