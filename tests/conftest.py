"""Shared fixtures: a fresh SQLite database and an HTTP client per test."""
import os
import tempfile

# Settings are read at import time, so configure before importing groundbook
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="groundbook-uploads-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from groundbook.core.database import Base, get_db
from groundbook.main import app
import groundbook.models  # noqa: F401


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth(token):
    return {"Authorization": f"Bearer {token}"}


async def signup(client, email, role="renter", **extra):
    payload = {"name": email.split("@")[0].title(), "email": email, "password": "secret123", "role": role}
    payload.update(extra)
    response = await client.post("/api/signup", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_ground(client, token, **overrides):
    payload = {
        "title": "Green Turf Arena",
        "description": "Floodlit 5-a-side turf",
        "price": {"amount": 500, "negotiable": False},
        "sport_tags": ["Football", "Cricket"],
        "facility_tags": ["Parking", "Floodlights"],
        "location": {"address": "12 MG Road, Pune", "lat": 18.52, "lng": 73.85},
    }
    payload.update(overrides)
    response = await client.post("/api/grounds", json=payload, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def owner(client):
    return await signup(client, "owner@example.com", role="owner", upi_id="owner@okbank")


@pytest_asyncio.fixture
async def renter(client):
    return await signup(client, "renter@example.com")


@pytest_asyncio.fixture
async def ground(client, owner):
    return await create_ground(client, owner["token"])
