import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import AsyncGenerator

from sqlalchemy import event, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from format_api.core.config import settings

logger = logging.getLogger(__name__)

# Optional .env file with deployment overrides
ENV_PATH = Path(__file__).resolve().parent.parent / "config" / "settings.env"

def load_env(env_path: Path = ENV_PATH) -> None:
    """
    Load the given .env file into the process environment when it exists
    """
    if not env_path.exists():
        logger.debug("No env file at %s, using process environment only", env_path)
        return
    load_dotenv(env_path, override=True)


def build_database_urls() -> tuple[str, str]:
    """
    Return the (async, sync) pair of connection URLs derived from settings.DATABASE_URL
    - the sync URL is what alembic and other blocking tools use
    """
    async_url = settings.DATABASE_URL
    if async_url.startswith('mysql+asyncmy://'):
        sync_url = async_url.replace('mysql+asyncmy://', 'mysql+pymysql://', 1)
    elif async_url.startswith('sqlite+aiosqlite://'):
        sync_url = async_url.replace('sqlite+aiosqlite://', 'sqlite://', 1)
    else:
        sync_url = async_url
    return async_url, sync_url


def _engine_options(url: str) -> dict:
    """
    Driver specific engine keyword arguments
    """
    backend = make_url(url).get_backend_name()
    if backend == "mysql":
        return {
            "connect_args": {
                "charset": "utf8mb4",
                "init_command": "SET NAMES utf8mb4 COLLATE utf8mb4_unicode_ci",
            },
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        }
    return {}


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    SQLite ignores FOREIGN KEY clauses unless asked per connection.
    Cascade and set-null on delete depend on it.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_for(url: str) -> AsyncEngine:
    """
    Build an async engine for the URL, with foreign keys enforced on every backend
    """
    engine = create_async_engine(url, echo=False, future=True, **_engine_options(url))
    enable_sqlite_foreign_keys(engine)
    return engine


# Load environment
load_env()

# DB URLs
DB_ASYNC_URL, DB_SYNC_URL = build_database_urls()

# Async engine and session factory
async_engine = create_engine_for(DB_ASYNC_URL)
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# ORM base
Base = declarative_base()


def import_models() -> None:
    """
    Import every model module so its table is registered on Base.metadata
    """
    from format_api.models import (  # noqa: F401
        role, user, community, topic, post,
        comment, like, subscription,
    )


async def seed_roles(session: AsyncSession) -> None:
    """
    Insert the reference roles that are missing
    """
    from format_api.models.role import Role, DEFAULT_ROLES

    result = await session.execute(select(Role.id))
    existing = set(result.scalars().all())
    for role_id, name in DEFAULT_ROLES:
        if role_id not in existing:
            session.add(Role(id=role_id, name=name))
    await session.commit()


async def init_db(engine: AsyncEngine = async_engine) -> None:
    """
    Called at application start: create tables from metadata and seed roles
    """
    import_models()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_roles(session)
    logger.info("Database schema ready")

async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request, closed on every exit path
    """
    async with async_session_factory() as session:
        yield session
