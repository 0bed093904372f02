import os

# Keep the audit trail in memory during tests
os.environ["AUDIT_LOG_FILE"] = ""

import httpx
import pytest

from database import RecordStore
from main import create_app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def store(tmp_path):
    store = RecordStore(f"sqlite+aiosqlite:///{tmp_path / 'fees.db'}")
    await store.init()
    yield store
    await store.close()


@pytest.fixture
def app(store):
    app = create_app()
    app.state.store = store
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def register(client):
    """Sign up and log in a user; returns (user_id, auth headers)."""
    async def _register(email: str, role: str, name: str | None = None, password: str = "secret123"):
        r = await client.post("/auth/signup", json={
            "email": email, "password": password, "name": name or email.split("@")[0], "role": role,
        })
        assert r.status_code == 200, r.text
        user_id = r.json()["userId"]
        r = await client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return user_id, {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _register


@pytest.fixture
async def seeded(client):
    r = await client.post("/init-sample-data")
    assert r.status_code == 200
    return client


@pytest.fixture
async def staff(register):
    _, headers = await register("bursar@school.test", "staff", name="Grace Moyo")
    return headers


@pytest.fixture
async def admin(register):
    _, headers = await register("admin@school.test", "admin", name="Admin")
    return headers
