"""사용자 레포지토리: 사용자명/자격 증명 기반 조회.

AppUser Repository: lookups by username and by credential.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.user import AppUser, Credential
from lists_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[AppUser]):
    """app_users 테이블 쿼리 (Queries over the app_users table)."""

    def __init__(self) -> None:
        super().__init__(AppUser)

    async def get_active_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> AppUser | None:
        """사용자명으로 활성 사용자를 조회합니다.

        Retrieve the single active user holding ``username``, or None.
        """
        query: Select = select(AppUser).where(
            AppUser.username == username,
            AppUser.retired.is_(False),
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_credential(
        self,
        db: AsyncSession,
        credential: Credential,
    ) -> AppUser | None:
        """자격 증명 전체(사용자명 + 해시)로 활성 사용자를 조회합니다.

        Retrieve the active user whose stored credential equals ``credential``.
        """
        query: Select = select(AppUser).where(
            AppUser.credential == credential,
            AppUser.retired.is_(False),
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 (Singleton instance)
user_repository: UserRepository = UserRepository()
