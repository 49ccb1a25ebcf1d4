"""역할 레포지토리.

Role Repository: active-role lookups by code.
"""

from lists_api.models.user import Role
from lists_api.repositories.base import CodeRepository


class RoleRepository(CodeRepository[Role]):
    """roles 테이블 쿼리 (Queries over the roles table)."""

    def __init__(self) -> None:
        super().__init__(Role)


# 싱글턴 인스턴스 (Singleton instance)
role_repository: RoleRepository = RoleRepository()
