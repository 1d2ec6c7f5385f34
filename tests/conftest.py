import asyncio
from decimal import Decimal
from typing import AsyncGenerator, Dict, Iterable, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dividend_planner.infrastructure.db.database import Base, get_db
from dividend_planner.infrastructure.db import models  # noqa: F401
from dividend_planner.domain.services.price_refresh_service import PriceRefreshService
from dividend_planner.infrastructure.session_store import SessionDraftStore
from dividend_planner.main import create_app


class FakePriceProvider:
    """Scripted price source: fixed prices, failures and hanging lookups"""

    def __init__(
        self,
        prices: Optional[Dict[str, Decimal]] = None,
        errors: Iterable[str] = (),
        hang: Iterable[str] = (),
    ):
        self.prices = dict(prices or {})
        self.errors = set(errors)
        self.hang = set(hang)
        self.calls = []

    async def get_current_price(self, identifier: str) -> Optional[Decimal]:
        self.calls.append(identifier)
        if identifier in self.hang:
            await asyncio.sleep(3600)
        if identifier in self.errors:
            raise ConnectionError(f"network down for {identifier}")
        return self.prices.get(identifier)


class FakeSyncClient:
    def __init__(self):
        self.uploads = []

    async def upload_saves(self, configurations) -> bool:
        self.uploads.append(list(configurations))
        return True


@pytest.fixture()
def fake_provider_cls():
    return FakePriceProvider


@pytest.fixture()
def price_provider() -> FakePriceProvider:
    return FakePriceProvider(
        prices={"HGLG11": Decimal("160.50"), "MXRF11": Decimal("10.12")},
        errors={"BROKEN11"},
        hang={"SLOW11"},
    )


@pytest.fixture()
def sync_client() -> FakeSyncClient:
    return FakeSyncClient()


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture()
async def app(db_session, price_provider, sync_client) -> FastAPI:
    app = create_app(use_lifespan=False)

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    app.state.draft_store = SessionDraftStore()
    app.state.price_refresh_service = PriceRefreshService(price_provider, timeout_seconds=0.2)
    app.state.sync_client = sync_client

    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
