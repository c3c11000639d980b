import os

# Settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REVENUECAT_WEBHOOK_SECRET"] = "rc-webhook-secret"
os.environ["GOOGLE_CLIENT_ID"] = ""

import uuid
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from quintave.core.auth import User, create_session_token
from quintave.core.database import Base, get_async_session
from quintave.main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_async_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _create_user(session_maker, **fields) -> User:
    now = datetime.utcnow()
    values = {
        "google_id": f"google-{uuid.uuid4().hex}",
        "email": "saver@example.com",
        "full_name": "Test Saver",
        "hashed_password": "",
        "login_method": "google",
        "created_at": now,
        "last_signed_in": now,
    }
    values.update(fields)
    async with session_maker() as session:
        user = User(**values)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
def make_user(session_maker):
    async def factory(**fields) -> User:
        return await _create_user(session_maker, **fields)
    return factory


@pytest_asyncio.fixture
async def user(make_user):
    return await make_user(google_id="google-trial-user")


@pytest_asyncio.fixture
async def expired_user(make_user):
    return await make_user(
        google_id="google-expired-user",
        email="late@example.com",
        created_at=datetime.utcnow() - timedelta(days=31),
    )


async def auth_headers_for(user: User) -> dict:
    token = await create_session_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(user):
    return await auth_headers_for(user)


@pytest.fixture
def create_buckets(client, auth_headers):
    async def factory(count: int = 5, headers: dict = None):
        headers = headers or auth_headers
        created = []
        for i in range(1, count + 1):
            response = await client.post("/api/v1/buckets", json={"name": f"Bucket {i}"}, headers=headers)
            assert response.status_code == 201, response.text
            created.append(response.json())
        return created
    return factory


@pytest.fixture
def headers_for():
    return auth_headers_for
