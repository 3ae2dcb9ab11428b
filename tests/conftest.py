import base64
import os
import tempfile
from pathlib import Path

_db_dir = tempfile.mkdtemp(prefix="accounts-test-")
os.environ["ACCOUNTS_DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_db_dir) / 'test.db'}"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from account_service.core.config import get_settings  # noqa: E402
from account_service.core.security import PasswordHasher  # noqa: E402
from account_service.db.base import Base  # noqa: E402
from account_service.db.session import engine, get_session  # noqa: E402
from account_service.main import app  # noqa: E402
from account_service.repositories.users import UserRepository  # noqa: E402
from account_service.services.users import UserService  # noqa: E402


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def hasher():
    return PasswordHasher()


@pytest.fixture
async def session(database):
    async with get_session() as db:
        yield db


@pytest.fixture
def service(session, hasher):
    return UserService(UserRepository(session), hasher)


@pytest.fixture
async def client(database):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


def basic_auth(username: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def auth_header():
    return basic_auth
