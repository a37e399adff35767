from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gamestore.db.database import get_session
from gamestore.main import app
from gamestore.models.customer import Customer
from gamestore.models.db import Base
from gamestore.models.game import Game


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def free_game() -> Game:
    return Game(id=1, name="Fortnite", price=Decimal("0.00"), category="Battle Royale", age_rating=12)


@pytest.fixture
def paid_game() -> Game:
    return Game(id=2, name="FIFA 2023", price=Decimal("199.90"), category="Sports", age_rating=0)


@pytest.fixture
def customer() -> Customer:
    return Customer(id=1, name="Ana Souza", email="ana@example.com", balance=Decimal("100.00"), age=25)
