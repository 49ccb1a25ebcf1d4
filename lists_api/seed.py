"""초기 데이터 시드 스크립트: 관리자 역할과 관리자 계정 생성.

Seed script. Creates the tables, the admin role and a bootstrap admin user.

Usage:
    python -m lists_api.seed

Idempotent: 이미 존재하는 항목은 건너뜁니다 (Existing rows are left alone).
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.config import settings
from lists_api.database import Base, async_session, engine
from lists_api.models import AppUser, Role
from lists_api.repositories.role_repository import role_repository
from lists_api.repositories.user_repository import user_repository
from lists_api.security.passwords import make_credential

logger = logging.getLogger(__name__)


async def seed_admin(db: AsyncSession) -> AppUser:
    """관리자 역할과 관리자 계정을 보장합니다.

    Ensure the admin role and the bootstrap admin user exist, returning the user.
    """
    admin_role: Role | None = await role_repository.get_active_by_code(db, settings.ADMIN_ROLE_CODE)
    if admin_role is None:
        admin_role = await role_repository.add(
            db, Role(code=settings.ADMIN_ROLE_CODE, description="Administrator")
        )
        logger.info("Created role '%s'", admin_role.code)

    admin: AppUser | None = await user_repository.get_active_by_username(db, settings.SEED_ADMIN_USERNAME)
    if admin is None:
        admin = await user_repository.add(
            db,
            AppUser(
                credential=make_credential(settings.SEED_ADMIN_USERNAME, settings.SEED_ADMIN_PASSWORD),
                roles=[admin_role],
            ),
        )
        logger.info("Created admin user '%s'", admin.username)
    else:
        logger.info("Admin user '%s' already exists. Skipping.", admin.username)
    return admin


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다 (Create tables, then seed)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        await seed_admin(db)
        await db.commit()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(seed())
