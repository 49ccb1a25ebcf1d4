"""사용자, 역할, 권한 SQLAlchemy ORM 모델 정의.

AppUser, Role and Permission SQLAlchemy ORM model definitions.

Tables:
    - permissions: 권한 코드 (Permission codes)
    - roles: 역할 (Roles, each holding a set of permissions)
    - role_permissions: 역할-권한 매핑 (Role ↔ permission join)
    - app_users: 사용자 계정 (User accounts)
    - user_roles: 사용자-역할 매핑 (User ↔ role join)

Natural keys (roles.code, permissions.code, app_users.username) are unique
among non-retired rows only, enforced by partial unique indexes.
"""

from dataclasses import dataclass

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text, text
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from lists_api.database import Base
from lists_api.models.base import RetirableMixin

# 활성 행 조건: 부분 유니크 인덱스에 사용 (Predicate for partial unique indexes)
ACTIVE_ROWS = text("retired = false")


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("app_user_id", Integer, ForeignKey("app_users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


@dataclass(frozen=True)
class Credential:
    """자격 증명 값 객체: 사용자명 + 비밀번호 해시.

    Value object pairing a username with a bcrypt password hash.
    Replaced as a whole, never mutated in place.
    """

    username: str
    password_hash: str


class Permission(RetirableMixin, Base):
    """권한 모델.

    Attributes:
        id: 고유 식별자 (Surrogate integer key)
        code: 권한 코드, 활성 행 중 고유 (e.g. "LISTS_WRITE", unique among active rows)
        description: 설명 (Human-readable description)
        retired: 소프트 삭제 플래그 (Soft-delete flag)
    """

    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_permissions_code_active", "code", unique=True,
            postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS,
        ),
    )


class Role(RetirableMixin, Base):
    """역할 모델: 권한 집합을 묶는 단위.

    Role model grouping a set of permissions.

    Attributes:
        id: 고유 식별자 (Surrogate integer key)
        code: 역할 코드, 활성 행 중 고유 (e.g. "ADMIN", unique among active rows)
        description: 설명 (Human-readable description)
        retired: 소프트 삭제 플래그 (Soft-delete flag)

    Relationships:
        permissions: 역할에 부여된 권한 (Permissions granted by this role)
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_roles_code_active", "code", unique=True,
            postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS,
        ),
    )

    # async 세션에서 지연 로딩 불가: selectin으로 즉시 로드
    # Lazy loading is unavailable under AsyncSession, so load eagerly
    permissions: Mapped[list[Permission]] = relationship(secondary=role_permissions, lazy="selectin")


class AppUser(RetirableMixin, Base):
    """사용자 모델.

    AppUser model. ``credential`` is a composite over the username and
    password_hash columns; at most one active user exists per username.

    Attributes:
        id: 고유 식별자 (Surrogate integer key)
        username: 로그인 아이디 (Login username)
        password_hash: bcrypt 해시 (bcrypt password hash)
        credential: Credential 값 객체 (Credential value object)
        retired: 소프트 삭제 플래그 (Soft-delete flag)

    Relationships:
        roles: 사용자 역할 (Roles held by the user)
    """

    __tablename__ = "app_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    credential: Mapped[Credential] = composite("username", "password_hash")

    __table_args__ = (
        Index(
            "uq_app_users_username_active", "username", unique=True,
            postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS,
        ),
    )

    roles: Mapped[list[Role]] = relationship(secondary=user_roles, lazy="selectin")

    def role_codes(self) -> set[str]:
        """활성 역할 코드 집합 (Codes of the user's non-retired roles)."""
        return {role.code for role in self.roles if not role.retired}
