"""Shared fixtures: an in-memory database per test and an HTTP client on the app."""

import os

# Must be set before cardflow is imported; config is read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest
from sqlalchemy.pool import StaticPool

from cardflow.database import build_engine, build_sessionmaker, get_db
from cardflow.main import app
from cardflow.models import Base

PASSWORD = "pw12345a"


@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(sessionmaker):
    async with sessionmaker() as session:
        yield session


@pytest.fixture
async def client(sessionmaker):
    async def override_get_db():
        async with sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register(client, email="a@x.com", name="A", password=PASSWORD):
    resp = await client.post(
        "/auth/register",
        json={"email": email, "password": password, "confirmPassword": password, "name": name},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def alice(client):
    data = await register(client, "a@x.com", "A")
    return {**data, "headers": bearer(data["token"])}


@pytest.fixture
async def bob(client):
    data = await register(client, "b@x.com", "B")
    return {**data, "headers": bearer(data["token"])}


@pytest.fixture
async def main_workspace(client, alice):
    resp = await client.get("/workspaces", headers=alice["headers"])
    return resp.json()["workspaces"][0]
