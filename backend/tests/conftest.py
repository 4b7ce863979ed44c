"""Shared fixtures: a throwaway sqlite database per test and an ASGI client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import replyhub.models  # noqa: F401
from replyhub.models import SandboxApiEndpoint, SandboxEnvironment
from replyhub.db.postgres import Base, get_db
from replyhub.main import app
from replyhub.services.sandbox.provisioning import ensure_demo_environment
from replyhub.services.sandbox.request_logger import RequestLogger, get_request_logger


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'sandbox.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def request_logger(session_factory):
    logger = RequestLogger(session_factory, enabled=True)
    yield logger
    await logger.drain()


@pytest_asyncio.fixture
async def demo_environment(db):
    return await ensure_demo_environment(db)


@pytest_asyncio.fixture
async def client(session_factory, request_logger):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_request_logger] = lambda: request_logger

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(client):
    resp = await client.post(
        "/api/auth/register",
        json={"email": "owner@replyhub.io", "password": "s3cret-pass", "name": "Owner"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest_asyncio.fixture
async def other_auth_headers(client):
    resp = await client.post(
        "/api/auth/register",
        json={"email": "intruder@replyhub.io", "password": "s3cret-pass", "name": "Intruder"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest_asyncio.fixture
async def environment(db, demo_environment):
    # Created after the demo environment, which claims a fixed id
    environment = SandboxEnvironment(name="Team sandbox", is_active=True)
    db.add(environment)
    await db.commit()
    return environment


@pytest.fixture
def make_endpoint(db, environment):
    async def make(path, api_type="app_store_connect", method="GET", environment_id=None):
        endpoint = SandboxApiEndpoint(
            environment_id=environment_id or environment.id,
            api_type=api_type,
            path=path,
            method=method,
        )
        db.add(endpoint)
        await db.flush()
        return endpoint

    return make
