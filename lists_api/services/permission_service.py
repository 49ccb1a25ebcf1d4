"""권한 서비스: 권한 CRUD 비즈니스 로직.

Permission Service: find / create / update / retire for permissions,
with code uniqueness among active permissions.
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.user import Permission
from lists_api.repositories.permission_repository import permission_repository
from lists_api.schemas.user import PermissionCreate, PermissionUpdate
from lists_api.utils.exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class PermissionService:
    """권한 관련 비즈니스 로직을 처리하는 서비스.

    Service handling permission business logic.
    """

    async def find_by_code(self, db: AsyncSession, code: str) -> Permission:
        """코드로 활성 권한을 조회합니다.

        Raises:
            NotFoundError: 활성 권한이 없을 때 (No active permission with that code)
        """
        permission = await permission_repository.get_active_by_code(db, code)
        if permission is None:
            logger.warning("Could not find permission with code '%s'", code)
            raise NotFoundError(f"Could not find permission with code '{code}'")
        return permission

    async def find_multiple(self, db: AsyncSession, codes: set[str]) -> list[Permission]:
        """코드 집합에 해당하는 활성 권한 목록 (Active permissions matching ``codes``)."""
        return await permission_repository.get_active_by_codes(db, codes)

    async def find_all_by_codes(self, db: AsyncSession, codes: set[str]) -> list[Permission]:
        """모든 코드가 존재해야 하는 조회.

        Like find_multiple, but every code must resolve to an active permission.

        Raises:
            NotFoundError: 일부 코드가 없을 때 (Some codes have no active permission)
        """
        permissions = await self.find_multiple(db, codes)
        missing = codes - {p.code for p in permissions}
        if missing:
            logger.warning("Could not find permissions with codes %s", sorted(missing))
            raise NotFoundError(f"Could not find permissions with codes {sorted(missing)}")
        return permissions

    async def find_all(
        self, db: AsyncSession, page: int = 1, per_page: int = 20
    ) -> tuple[Sequence[Permission], int]:
        return await permission_repository.get_active_page(db, page, per_page)

    async def create(self, db: AsyncSession, data: PermissionCreate) -> Permission:
        """새 권한을 생성합니다.

        Raises:
            DuplicateError: 같은 코드의 활성 권한이 이미 있을 때 (Active permission with that code exists)
        """
        if await permission_repository.code_in_use(db, data.code):
            logger.warning("Permission with code '%s' already exists", data.code)
            raise DuplicateError(f"Can't create permission with code '{data.code}' as it already exists")

        permission = Permission(code=data.code, description=data.description)
        return await permission_repository.add(db, permission)

    async def update(self, db: AsyncSession, code: str, data: PermissionUpdate) -> Permission:
        """코드로 식별되는 권한을 수정합니다.

        Update an existing permission. The uniqueness check only runs when
        the code actually changes.
        """
        existing = await self.find_by_code(db, code)

        if data.code != code and await permission_repository.code_in_use(db, data.code):
            logger.warning("Permission with code '%s' already exists", data.code)
            raise DuplicateError(f"Can't update permission with code '{data.code}' as it already exists")

        existing.code = data.code
        existing.description = data.description
        return await permission_repository.save(db, existing)

    async def retire(self, db: AsyncSession, code: str) -> None:
        """권한을 은퇴 처리합니다 (Retire a permission by code)."""
        try:
            permission = await self.find_by_code(db, code)
        except NotFoundError:
            logger.warning("Cannot retire a permission as none exists with the code '%s'", code)
            raise
        permission.retire()
        logger.info("Retiring permission %s", permission.id)
        await permission_repository.save(db, permission)


# 싱글턴 인스턴스 (Singleton instance)
permission_service: PermissionService = PermissionService()
