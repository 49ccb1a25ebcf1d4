"""사용자 서비스: 사용자 CRUD 및 역할 할당 비즈니스 로직.

AppUser Service: lookups, creation, credential changes, role assignment
and retirement. Guarded operations take the authenticated ``caller``
explicitly and check it before touching any state.
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.user import AppUser, Credential
from lists_api.repositories.user_repository import user_repository
from lists_api.schemas.user import UserCreate, UserUpdate
from lists_api.security.passwords import hash_password, make_credential
from lists_api.security.user_security import user_security
from lists_api.services.role_service import role_service
from lists_api.utils.exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class AppUserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling AppUser business logic.
    """

    async def get_by_id(self, db: AsyncSession, user_id: int) -> AppUser:
        """권한 검사 없이 활성 사용자를 조회합니다 (내부용).

        Load an active user by id without a guard. Used by other services
        after they have run their own guard.

        Raises:
            NotFoundError: 활성 사용자가 없을 때 (No active user with that id)
        """
        user: AppUser | None = await user_repository.get_active_by_id(db, user_id)
        if user is None:
            logger.warning("No user was found with ID '%s'", user_id)
            raise NotFoundError(f"No user was found with ID '{user_id}'")
        return user

    async def find_by_id(self, db: AsyncSession, caller: AppUser, user_id: int) -> AppUser:
        """사용자를 조회합니다 (관리자 또는 본인).

        Find an active user. Guarded by admin-or-same-user.

        Raises:
            ForbiddenError: 관리자도 본인도 아닐 때 (Caller is neither admin nor the user)
            NotFoundError: 활성 사용자가 없을 때 (No active user with that id)
        """
        user_security.require_admin_or_same_user(caller, user_id)
        return await self.get_by_id(db, user_id)

    async def find_by_username(self, db: AsyncSession, username: str) -> AppUser:
        """사용자명으로 활성 사용자를 조회합니다.

        Raises:
            NotFoundError: 활성 사용자가 없을 때 (No active user with that username)
        """
        user: AppUser | None = await user_repository.get_active_by_username(db, username)
        if user is None:
            logger.warning("No user was found with username '%s'", username)
            raise NotFoundError(f"No user was found with username '{username}'")
        return user

    async def find_by_credential(self, db: AsyncSession, credential: Credential) -> AppUser:
        """자격 증명으로 활성 사용자를 조회합니다.

        Raises:
            NotFoundError: 일치하는 활성 사용자가 없을 때 (No active user with that credential)
        """
        user: AppUser | None = await user_repository.get_active_by_credential(db, credential)
        if user is None:
            logger.warning("No user was found for credential '%s'", credential.username)
            raise NotFoundError(f"No user was found for credential '{credential.username}'")
        return user

    async def find_all(
        self,
        db: AsyncSession,
        caller: AppUser,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[AppUser], int]:
        """활성 사용자 페이지 (관리자 전용) (Page of active users, admin only)."""
        user_security.require_admin(caller)
        return await user_repository.get_active_page(db, page, per_page)

    async def create(self, db: AsyncSession, caller: AppUser, data: UserCreate) -> AppUser:
        """새 사용자를 생성합니다 (관리자 전용).

        Create a user with a freshly hashed credential and the given roles.

        Raises:
            ForbiddenError: 관리자가 아닐 때 (Caller is not an admin)
            DuplicateError: 같은 사용자명의 활성 사용자가 있을 때 (Username in use)
            NotFoundError: 알 수 없는 역할 코드 (Unknown role code)
        """
        user_security.require_admin(caller)

        if await user_repository.get_active_by_username(db, data.username) is not None:
            logger.warning("User with username '%s' already exists", data.username)
            raise DuplicateError(f"Can't create user '{data.username}' as it already exists")

        roles = await role_service.find_all_by_codes(db, data.roles)
        user = AppUser(credential=make_credential(data.username, data.password), roles=roles)
        user = await user_repository.add(db, user)
        logger.info("Created user %s", user.id)
        return user

    async def update(
        self,
        db: AsyncSession,
        caller: AppUser,
        user_id: int,
        data: UserUpdate,
    ) -> AppUser:
        """사용자명 또는 비밀번호를 변경합니다 (관리자 또는 본인).

        Replace the user's credential. The username uniqueness check only
        runs when the username changes.

        Raises:
            ForbiddenError: 관리자도 본인도 아닐 때 (Caller is neither admin nor the user)
            NotFoundError: 활성 사용자가 없을 때 (No active user with that id)
            DuplicateError: 새 사용자명이 사용 중일 때 (New username in use)
        """
        user = await self.find_by_id(db, caller, user_id)
        current: Credential = user.credential

        username = data.username if data.username is not None else current.username
        if username != current.username and await user_repository.get_active_by_username(db, username) is not None:
            logger.warning("User with username '%s' already exists", username)
            raise DuplicateError(f"Can't update user to '{username}' as it already exists")

        password_hash = hash_password(data.password) if data.password is not None else current.password_hash
        user.credential = Credential(username=username, password_hash=password_hash)
        logger.info("Updating user %s", user.id)
        return await user_repository.save(db, user)

    async def assign_roles(
        self,
        db: AsyncSession,
        caller: AppUser,
        user_id: int,
        codes: set[str],
    ) -> AppUser:
        """사용자 역할을 교체합니다 (관리자 전용).

        Replace the user's roles with the roles named by ``codes``.
        """
        user_security.require_admin(caller)
        user = await self.get_by_id(db, user_id)
        user.roles = await role_service.find_all_by_codes(db, codes)
        logger.info("Assigning roles %s to user %s", sorted(codes), user.id)
        return await user_repository.save(db, user)

    async def retire(self, db: AsyncSession, caller: AppUser, user_id: int) -> None:
        """사용자를 은퇴 처리합니다 (관리자 또는 본인).

        Retire an active user.
        """
        user_security.require_admin_or_same_user(caller, user_id)
        try:
            user = await self.get_by_id(db, user_id)
        except NotFoundError:
            logger.warning("Cannot retire a user as none exists with the ID '%s'", user_id)
            raise
        user.retire()
        logger.info("Retiring user %s", user.id)
        await user_repository.save(db, user)


# 싱글턴 인스턴스 (Singleton instance)
user_service: AppUserService = AppUserService()
