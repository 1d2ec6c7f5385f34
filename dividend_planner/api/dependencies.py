"""Dependency injection for API routes."""

from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException, Request

from dividend_planner.domain.services.dividend_calculator import DividendCalculator
from dividend_planner.domain.services.price_refresh_service import PriceRefreshService
from dividend_planner.infrastructure.remote_sync.sync_client import RemoteSyncClient
from dividend_planner.infrastructure.session_store import SessionDraftStore


@lru_cache()
def get_calculator() -> DividendCalculator:
    """
    Get calculator instance.

    Returns:
        DividendCalculator (cached singleton, stateless)
    """
    return DividendCalculator()


def get_session_id(x_session_id: Optional[str] = Header(default=None)) -> str:
    """Client session key for the draft store"""
    return (x_session_id or "").strip() or "default"


def get_draft_store(request: Request) -> SessionDraftStore:
    store = getattr(request.app.state, "draft_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Session store not initialized")
    return store


def get_price_refresh_service(request: Request) -> PriceRefreshService:
    service = getattr(request.app.state, "price_refresh_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Price lookup not configured")
    return service


def get_sync_client(request: Request) -> RemoteSyncClient:
    client = getattr(request.app.state, "sync_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Remote sync is disabled")
    return client
