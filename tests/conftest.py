import asyncio
import os
import tempfile

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="daycare-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("SESSION_SECRET", "test-secret")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import daycare.db as db_module
from daycare.models import Base
from daycare.models.user_profile import UserProfile

# Fresh connection per use so nothing is shared between event loops
test_engine = create_async_engine(os.environ["DATABASE_URL"], poolclass=NullPool)
TestSession = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
db_module.engine = test_engine
db_module.async_session = TestSession

from daycare.main import app  # noqa: E402


async def _override_get_db():
    async with TestSession() as session:
        yield session

app.dependency_overrides[db_module.get_db] = _override_get_db

PINS = {"director": "1111", "staff": "2222", "staff2": "3333", "parent": "4444"}


async def _reset_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSession() as session:
        users = {
            "director": UserProfile(first_name="Dana", last_name="Director", role="director", pin_code=PINS["director"]),
            "staff": UserProfile(first_name="Sam", last_name="Lee", role="staff", pin_code=PINS["staff"]),
            "staff2": UserProfile(first_name="Riley", last_name="Aide", role="staff", pin_code=PINS["staff2"]),
            "parent": UserProfile(first_name="Pat", last_name="Parent", role="parent", pin_code=PINS["parent"]),
        }
        session.add_all(users.values())
        await session.commit()
        return {key: u.id for key, u in users.items()}


@pytest.fixture
def users():
    return asyncio.run(_reset_db())


@pytest.fixture
def client(users):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(who):
        res = client.post("/auth/login", json={"pin_code": PINS[who]})
        assert res.status_code == 200, res.text
        return res.json()
    return _login


@pytest.fixture
def make_classroom(client):
    def _make(name="Ladybugs", capacity=12):
        res = client.post("/api/classrooms", json={"name": name, "capacity": capacity})
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_child(client):
    def _make(first_name="Mia", last_name="Johnson", date_of_birth=None, kindergarten=False):
        res = client.post(
            "/api/children",
            json={
                "first_name": first_name,
                "last_name": last_name,
                "date_of_birth": date_of_birth,
                "is_kindergarten_enrolled": kindergarten,
            },
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def run_db():
    """Run ``fn(session)`` against the test database outside a request."""
    def _run(fn):
        async def _go():
            async with TestSession() as session:
                return await fn(session)
        return asyncio.run(_go())
    return _run
