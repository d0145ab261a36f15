import os

# the module-level engine is never used by the tests; keep it off Postgres
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from admin_panel.auth import token_for_user
from admin_panel.database import Base, get_session, get_session_maker
from admin_panel.main import app as admin_app
from admin_panel.seed import seed_demo


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}")

    # SQLite only honours ON DELETE rules with foreign keys switched on
    @event.listens_for(eng.sync_engine, "connect")
    def _enable_fk(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def seeded(session_maker):
    async with session_maker() as session:
        return await seed_demo(session)


@pytest.fixture
def app(session_maker):
    async def _get_session():
        async with session_maker() as session:
            yield session

    admin_app.dependency_overrides[get_session] = _get_session
    admin_app.dependency_overrides[get_session_maker] = lambda: session_maker
    yield admin_app
    admin_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_token(seeded):
    return token_for_user(seeded["users"]["admin@example.com"])


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
