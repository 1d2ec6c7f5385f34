"""
FastAPI Main Application
Dividend goal planner: calculator, saved configurations, price refresh
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy import text
import logging

from dividend_planner.config import settings
from dividend_planner.core.logging import setup_logging
from dividend_planner.domain.services.price_refresh_service import PriceRefreshService
from dividend_planner.infrastructure.db.database import init_db, close_db
from dividend_planner.infrastructure.market_data.provider_factory import get_price_provider
from dividend_planner.infrastructure.remote_sync.sync_client import RemoteSyncClient
from dividend_planner.infrastructure.session_store import SessionDraftStore

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def build_sync_client() -> RemoteSyncClient | None:
    if not settings.REMOTE_SYNC_ENABLED:
        return None
    if not settings.REMOTE_SYNC_URL:
        logger.warning("Remote sync enabled but REMOTE_SYNC_URL is empty; sync disabled")
        return None
    return RemoteSyncClient(
        base_url=settings.REMOTE_SYNC_URL,
        key=settings.REMOTE_SYNC_KEY,
        auth_token=settings.REMOTE_SYNC_AUTH_TOKEN,
        timeout_seconds=settings.REMOTE_SYNC_TIMEOUT_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    logger.info("Starting Dividend Planner")

    # 1. Database
    await init_db()
    logger.info("Database initialized")

    # 2. Session drafts (process memory, session-only)
    app.state.draft_store = SessionDraftStore()

    # 3. Price lookup
    try:
        provider = get_price_provider(settings)
        app.state.price_refresh_service = PriceRefreshService(
            provider,
            timeout_seconds=settings.PRICE_LOOKUP_TIMEOUT_SECONDS,
        )
        logger.info(f"Price providers: {', '.join(p.name for p in provider.providers)}")
    except RuntimeError as e:
        app.state.price_refresh_service = None
        logger.error(f"Price lookup disabled: {e}")

    # 4. Remote sync
    app.state.sync_client = build_sync_client()
    logger.info(f"Remote sync: {'Enabled' if app.state.sync_client else 'Disabled'}")

    yield

    logger.info("Shutting down Dividend Planner")
    await close_db()
    logger.info("Database connections closed")


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="Dividend Goal Planner",
        description="Units to buy per asset to reach a monthly dividend goal",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from dividend_planner.api.routes import calculator, configurations, session, sync

    app.include_router(calculator.router, prefix="/api/v1/calculator", tags=["Calculator"])
    app.include_router(configurations.router, prefix="/api/v1/configurations", tags=["Configurations"])
    app.include_router(session.router, prefix="/api/v1/session", tags=["Session Draft"])
    app.include_router(sync.router, prefix="/api/v1/sync", tags=["Remote Sync"])

    @app.get("/health")
    async def health_check():
        """Health check with database probe"""
        db_status = "disconnected"
        db_error = None
        try:
            from dividend_planner.infrastructure.db.database import engine
            if engine is None:
                db_status = "not_initialized"
            else:
                async with engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                db_status = "connected"
        except Exception as exc:
            # Reported in the payload; health must answer even when the DB is down
            db_status = "error"
            db_error = str(exc)

        return {
            "status": "healthy",
            "service": "Dividend Planner",
            "version": "1.0.0",
            "services": {
                "api": "running",
                "database": db_status,
                "price_lookup": "enabled" if getattr(app.state, "price_refresh_service", None) else "disabled",
                "remote_sync": "enabled" if getattr(app.state, "sync_client", None) else "disabled",
            },
            "database_error": db_error,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dividend_planner.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
