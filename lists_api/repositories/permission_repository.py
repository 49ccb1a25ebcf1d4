"""권한 레포지토리.

Permission Repository: active-permission lookups by code.
"""

from lists_api.models.user import Permission
from lists_api.repositories.base import CodeRepository


class PermissionRepository(CodeRepository[Permission]):
    """permissions 테이블 쿼리 (Queries over the permissions table)."""

    def __init__(self) -> None:
        super().__init__(Permission)


# 싱글턴 인스턴스 (Singleton instance)
permission_repository: PermissionRepository = PermissionRepository()
