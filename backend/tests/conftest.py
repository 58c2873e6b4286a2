import itertools
import os

# must be set before rentalhub.db.session builds its engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rentalhub.core.security import create_access_token
from rentalhub.db.base import Base
from rentalhub.db.models import Item, User
from rentalhub.db.session import get_db
from rentalhub.main import app
from rentalhub.schemas.auth import Principal


@pytest.fixture
async def engine():
    """Fresh in-memory schema per test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """User factory (Factories as fixtures); each call commits its own row."""
    counter = itertools.count(1)

    async def _factory(role: str = "customer", name: str | None = None) -> User:
        n = next(counter)
        user = User(
            name=name or f"{role.title()} {n}",
            email=f"{role}{n}@example.com",
            phone="081234567890",
            hashed_password="unused",
            role=role,
        )
        async with session_factory() as session:
            session.add(user)
            await session.commit()
        return user

    return _factory


@pytest.fixture
def make_item(session_factory):
    async def _factory(
        host: User,
        name: str = "Camera",
        price_per_day: int = 100,
        deposit_per_unit: int = 50,
        is_active: bool = True,
    ) -> Item:
        item = Item(
            host_id=host.id,
            name=name,
            price_per_day=price_per_day,
            deposit_per_unit=deposit_per_unit,
            stock=1,
            is_active=is_active,
        )
        async with session_factory() as session:
            session.add(item)
            await session.commit()
        return item

    return _factory


@pytest.fixture
def principal_of():
    def _principal(user: User) -> Principal:
        return Principal(user_id=user.id, role=user.role)

    return _principal


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = create_access_token({"user_id": user.id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
