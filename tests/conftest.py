"""Shared pytest fixtures for VDV Inventory tests."""

import os

# Settings are read at import time, so configure before importing the app
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PUBLIC_BASE_URL"] = "https://inventory.example.com"
os.environ["ENCRYPTION_MASTER_KEY"] = "test-master-key"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from vdv_inventory.auth.tokens import issue_token
from vdv_inventory.db import get_db
from vdv_inventory.main import app
from vdv_inventory.models import Base

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def _override_db(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client(_override_db):
    """Client with no credentials at all."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def client(_override_db):
    """Client authenticated with a bearer token."""
    headers = {"Authorization": f"Bearer {issue_token()}"}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test", headers=headers) as ac:
        yield ac


async def create_store(client, **fields):
    payload = {"storeId": "S1", "name": "Main St"}
    payload.update(fields)
    response = await client.post("/api/stores", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_machine(client, **fields):
    payload = {"machineId": "M1"}
    payload.update(fields)
    response = await client.post("/api/machines", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def generate_tags(client, count=1):
    response = await client.post("/api/tags/generate", json={"count": count})
    assert response.status_code == 201, response.text
    return response.json()
