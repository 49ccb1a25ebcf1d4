"""역할 서비스: 역할 CRUD 비즈니스 로직.

Role Service: find / create / update / retire for roles, with code
uniqueness among active roles and permission grants resolved by code.
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.user import Role
from lists_api.repositories.role_repository import role_repository
from lists_api.schemas.user import RoleCreate, RoleUpdate
from lists_api.services.permission_service import permission_service
from lists_api.utils.exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class RoleService:
    """역할 관련 비즈니스 로직을 처리하는 서비스.

    Service handling role business logic.
    """

    async def find_by_code(self, db: AsyncSession, code: str) -> Role:
        """코드로 활성 역할을 조회합니다.

        Find a distinct active role by its code.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            code: 역할 코드 (Role code)

        Returns:
            Role: 활성 역할 (The active role)

        Raises:
            NotFoundError: 활성 역할이 없을 때 (No active role with that code)
        """
        role: Role | None = await role_repository.get_active_by_code(db, code)
        if role is None:
            logger.warning("Could not find role with code '%s'", code)
            raise NotFoundError(f"Could not find role with code '{code}'")
        return role

    async def find_multiple(self, db: AsyncSession, codes: set[str]) -> list[Role]:
        """코드 집합에 해당하는 활성 역할 목록 (Active roles matching ``codes``)."""
        return await role_repository.get_active_by_codes(db, codes)

    async def find_all_by_codes(self, db: AsyncSession, codes: set[str]) -> list[Role]:
        """모든 코드가 활성 역할이어야 하는 조회.

        Raises:
            NotFoundError: 일부 코드가 없을 때 (Some codes have no active role)
        """
        roles = await self.find_multiple(db, codes)
        missing = codes - {r.code for r in roles}
        if missing:
            logger.warning("Could not find roles with codes %s", sorted(missing))
            raise NotFoundError(f"Could not find roles with codes {sorted(missing)}")
        return roles

    async def find_all(
        self, db: AsyncSession, page: int = 1, per_page: int = 20
    ) -> tuple[Sequence[Role], int]:
        """활성 역할 페이지 (Page of active roles)."""
        return await role_repository.get_active_page(db, page, per_page)

    async def create(self, db: AsyncSession, data: RoleCreate) -> Role:
        """새 역할을 생성합니다.

        Create a new role. Permission codes must all resolve.

        Raises:
            DuplicateError: 같은 코드의 활성 역할이 이미 있을 때 (Active role with that code exists)
            NotFoundError: 알 수 없는 권한 코드 (Unknown permission code)
        """
        if await role_repository.code_in_use(db, data.code):
            logger.warning("Role with code '%s' already exists", data.code)
            raise DuplicateError(f"Can't create role with code '{data.code}' as it already exists")

        permissions = await permission_service.find_all_by_codes(db, data.permissions)
        role = Role(code=data.code, description=data.description, permissions=permissions)
        return await role_repository.add(db, role)

    async def update(self, db: AsyncSession, code: str, data: RoleUpdate) -> Role:
        """코드로 식별되는 역할을 수정합니다.

        Update an existing role identified by its code. The uniqueness check
        only runs when the code changes.

        Raises:
            NotFoundError: 활성 역할이 없을 때 (No active role with that code)
            DuplicateError: 새 코드가 다른 활성 역할과 충돌할 때 (New code collides)
        """
        existing: Role = await self.find_by_code(db, code)

        if data.code != code and await role_repository.code_in_use(db, data.code):
            logger.warning("Role with code '%s' already exists", data.code)
            raise DuplicateError(f"Can't update role with code '{data.code}' as it already exists")

        if data.permissions is not None:
            existing.permissions = await permission_service.find_all_by_codes(db, data.permissions)
        existing.code = data.code
        existing.description = data.description
        logger.info("Updating role %s", existing.id)
        return await role_repository.save(db, existing)

    async def retire(self, db: AsyncSession, code: str) -> None:
        """역할을 은퇴 처리합니다.

        Retire an existing role identified by its code.

        Raises:
            NotFoundError: 활성 역할이 없을 때 (No active role with that code)
        """
        try:
            role = await self.find_by_code(db, code)
        except NotFoundError:
            logger.warning("Cannot retire a role as none exists with the code '%s'", code)
            raise
        role.retire()
        logger.info("Retiring role %s", role.id)
        await role_repository.save(db, role)


# 싱글턴 인스턴스 (Singleton instance)
role_service: RoleService = RoleService()
