"""FastAPI entrypoint for the restaurant ordering backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from restaurant_api.api.router import api_router
from restaurant_api.core.config import Settings
from restaurant_api.core.errors import register_exception_handlers
from restaurant_api.core.security import TokenService
from restaurant_api.db.base import Base
from restaurant_api.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one explicit ``Settings`` instance.

    Engine, session factory and token service are created here and kept on
    ``app.state``; request dependencies read them from there.
    """
    settings = settings or Settings()
    engine = build_engine(settings)

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    def startup() -> None:
        if settings.uses_dev_secret:
            logger.warning("JWT_SECRET not set; using development fallback secret.")
        else:
            logger.info("JWT secret source: env")
        Base.metadata.create_all(bind=engine)
        logger.info("[BOOTSTRAP] Database schema ready (%s)", settings.app_env)

    @app.on_event("shutdown")
    def shutdown() -> None:
        engine.dispose()

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
