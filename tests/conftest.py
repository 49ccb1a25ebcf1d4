"""테스트 인프라: 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure. Each test gets a fresh in-memory SQLite database
(aiosqlite + StaticPool), a session bound to it, and an httpx client whose
``get_db`` dependency yields that same session.
"""

import os

# 설정 모듈 임포트 전에 테스트 DB URL 지정 (Must precede any lists_api import)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-test-suite-only")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lists_api.database import Base, get_db
from lists_api.main import app
from lists_api.models import AppUser, Role  # registers every model with the metadata
from lists_api.security.passwords import make_credential
from lists_api.utils.jwt import create_access_token

TEST_DATABASE_URL = "sqlite+aiosqlite://"

ALICE_PASSWORD = "correct-password"
BOB_PASSWORD = "bob-password"
ADMIN_PASSWORD = "admin-password"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB를 만들고 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트: DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_user(db: AsyncSession, username: str, password: str, roles: list[Role] | None = None) -> AppUser:
    """활성 사용자를 생성하고 flush 합니다."""
    user = AppUser(credential=make_credential(username, password), roles=roles or [])
    db.add(user)
    await db.flush()
    return user


@pytest_asyncio.fixture
async def admin_role(db: AsyncSession) -> Role:
    """관리자 역할을 생성합니다."""
    role = Role(code="ADMIN", description="Administrator")
    db.add(role)
    await db.flush()
    return role


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, admin_role: Role) -> AppUser:
    return await make_user(db, "admin", ADMIN_PASSWORD, [admin_role])


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> AppUser:
    """관리자가 아닌 일반 사용자."""
    return await make_user(db, "alice", ALICE_PASSWORD)


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> AppUser:
    return await make_user(db, "bob", BOB_PASSWORD)


@pytest.fixture
def admin_token(admin_user: AppUser) -> str:
    return create_access_token(admin_user.username)


@pytest.fixture
def alice_token(alice: AppUser) -> str:
    return create_access_token(alice.username)


@pytest.fixture
def bob_token(bob: AppUser) -> str:
    return create_access_token(bob.username)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
