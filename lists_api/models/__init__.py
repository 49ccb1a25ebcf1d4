"""SQLAlchemy ORM 모델 패키지: 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package. Importing from this package registers every
model with the metadata, which Alembic and ``create_all`` rely on.

Modules:
    base: 소프트 삭제 믹스인 (Retire mixin)
    user: 사용자, 역할, 권한, 자격 증명 (AppUser, Role, Permission, Credential)
    team: 팀 및 멤버십 (Team and membership)
"""

from lists_api.models.user import AppUser, Credential, Permission, Role, role_permissions, user_roles
from lists_api.models.team import Team, team_members

__all__ = [
    "AppUser", "Credential", "Permission", "Role",
    "Team",
    "role_permissions", "user_roles", "team_members",
]
