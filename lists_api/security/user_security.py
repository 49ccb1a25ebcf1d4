"""권한 검사(guard) 모듈.

Authorization guards evaluated before an operation runs.

    is_admin(caller):                        관리자 역할 보유 (holds the admin role)
    is_admin_or_same_user(caller, user_id):  관리자 또는 본인 (admin, or caller is the target)
    is_admin_or_member(caller, team):        관리자 또는 팀 멤버 (admin, or caller is a member)

``require_*`` variants raise ForbiddenError so callers can guard with a
single line before touching any state. The caller is always passed in
explicitly from the request boundary.
"""

import logging

from lists_api.config import settings
from lists_api.models.team import Team
from lists_api.models.user import AppUser
from lists_api.utils.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


class UserSecurity:
    """현재 사용자 기반 권한 판단.

    Ownership and admin checks over an explicitly passed caller.
    """

    def __init__(self, admin_role_code: str | None = None) -> None:
        self._admin_role_code = admin_role_code

    @property
    def admin_role_code(self) -> str:
        return self._admin_role_code or settings.ADMIN_ROLE_CODE

    def is_admin(self, caller: AppUser) -> bool:
        return self.admin_role_code in caller.role_codes()

    def is_admin_or_same_user(self, caller: AppUser, target_user_id: int) -> bool:
        return caller.id == target_user_id or self.is_admin(caller)

    def is_admin_or_member(self, caller: AppUser, team: Team) -> bool:
        return team.has_member(caller.id) or self.is_admin(caller)

    def require_admin(self, caller: AppUser) -> None:
        if not self.is_admin(caller):
            logger.warning("User %s denied: admin role required", caller.id)
            raise ForbiddenError("Administrator role required")

    def require_admin_or_same_user(self, caller: AppUser, target_user_id: int) -> None:
        if not self.is_admin_or_same_user(caller, target_user_id):
            logger.warning("User %s denied access to user %s", caller.id, target_user_id)
            raise ForbiddenError("Not allowed to access another user")

    def require_admin_or_member(self, caller: AppUser, team: Team) -> None:
        if not self.is_admin_or_member(caller, team):
            logger.warning("User %s denied access to team %s", caller.id, team.id)
            raise ForbiddenError("Not a member of this team")


# 싱글턴 인스턴스 (Singleton instance)
user_security: UserSecurity = UserSecurity()
