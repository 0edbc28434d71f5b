import os
import tempfile

# Settings are read at import time, so the test environment goes in first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(), "format.db"))
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp())

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from format_api.core.database import create_engine_for, get_db_session, init_db
from format_api.main import app
from format_api.models.community import Community
from format_api.models.topic import Topic
from format_api.services.media_service import MediaStorage, get_media_storage


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def media_storage(upload_dir):
    return MediaStorage(
        upload_dir=str(upload_dir),
        url_prefix="/uploads",
        max_bytes=5 * 1024 * 1024,
        allowed_extensions=[".jpg", ".jpeg", ".png", ".gif"],
    )


@pytest.fixture
async def client(session_factory, media_storage):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_media_storage] = lambda: media_storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ─── Data helpers ──────────────────────────────────────────────────────
async def register(client, login, email=None, password="secret"):
    resp = await client.post("/users/register", json={
        "login": login,
        "email": email or f"{login}@x.com",
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]["id"]


async def create_post(client, user_id, content="hello", **form):
    data = {"content": content}
    data.update({k: str(v) for k, v in form.items() if v is not None})
    resp = await client.post(
        f"/users/{user_id}/posts",
        data=data,
        headers=as_user(user_id),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def as_user(user_id):
    return {"X-User-Id": str(user_id)}


@pytest.fixture
def add_community(session_factory):
    async def _add(name, publication_count=0, description=None):
        async with session_factory() as session:
            community = Community(
                name=name,
                description=description,
                publication_count=publication_count,
            )
            session.add(community)
            await session.commit()
            return community.id
    return _add


@pytest.fixture
def add_topic(session_factory):
    async def _add(name):
        async with session_factory() as session:
            topic = Topic(name=name)
            session.add(topic)
            await session.commit()
            return topic.id
    return _add
