import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import settings
from app.database import Base, engine
from app.exception_handlers import register_exception_handlers
from app.i18n.locale import get_locale_table
from app.i18n.negotiation import CookiePreferenceSource
from app.middleware.language import LocaleRoutingMiddleware
from app.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from app.routes import monitoring, pages, seo
from app.routes.translations import i18n_router, translations_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    if settings.debug or settings.database_url.startswith("sqlite"):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")
    yield
    logger.info("Shutting down the application...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Locale-aware routing and recipe handle resolution",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration: logging
    # wraps locale routing so redirects are logged as well
    app.add_middleware(
        LocaleRoutingMiddleware,
        table=get_locale_table(),
        preferences=CookiePreferenceSource(settings.locale_cookie_name),
    )
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    # API and fixed-path routers first; the page router's /{lang} would shadow them
    app.include_router(monitoring.router)
    app.include_router(seo.router)
    app.include_router(translations_router, prefix="/api/v1/recipes")
    app.include_router(i18n_router, prefix="/api/v1/i18n")
    app.include_router(pages.router)

    if settings.debug:
        logger.info("Running in %s mode", settings.environment)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
