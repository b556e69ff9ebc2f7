import os
import tempfile

_tmpdir = tempfile.mkdtemp(prefix="eclinic-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmpdir}/test.db"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["STATIC_DIR"] = os.path.join(_tmpdir, "no-frontend")
os.environ["JWT_SECRET_KEY"] = "test-secret"

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from eclinic.database import Base, engine, init_db  # noqa: E402
from eclinic.main import app  # noqa: E402
from eclinic.seed import seed_default_user, seed_demo_records  # noqa: E402
from eclinic.client.api import ClinicAPI  # noqa: E402


async def _drop_all():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
        c.portal.call(_drop_all)


@pytest.fixture
def admin_headers(client):
    r = client.post("/api/login", json={"username": "admin", "password": "password123"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def api():
    await init_db()
    await seed_default_user()
    await seed_demo_records()
    transport = httpx.ASGITransport(app=app)
    async with ClinicAPI(base_url="http://testserver", transport=transport) as clinic_api:
        yield clinic_api
    await _drop_all()
    await engine.dispose()
