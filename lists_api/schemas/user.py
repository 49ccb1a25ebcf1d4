"""사용자, 역할, 권한 Pydantic 스키마.

AppUser, Role and Permission request/response schemas.
"""

from pydantic import Field, field_validator

from lists_api.models.user import AppUser, Permission, Role
from lists_api.schemas.common import ApiModel
from lists_api.security.passwords import MAX_PASSWORD_BYTES, password_fits


def _check_password_length(password: str | None) -> str | None:
    if password is not None and not password_fits(password):
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return password


# === 권한 (Permission) ===

class PermissionCreate(ApiModel):
    code: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class PermissionUpdate(ApiModel):
    """권한 수정 요청: code 변경 시 충돌 검사 (Changing the code re-checks uniqueness)."""

    code: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class PermissionResponse(ApiModel):
    id: int
    code: str
    description: str | None

    @classmethod
    def from_model(cls, permission: Permission) -> "PermissionResponse":
        return cls(id=permission.id, code=permission.code, description=permission.description)


# === 역할 (Role) ===

class RoleCreate(ApiModel):
    """역할 생성 요청.

    Attributes:
        code: 역할 코드 (Role code, unique among active roles)
        description: 설명 (Description, optional)
        permissions: 부여할 권한 코드 (Permission codes to grant)
    """

    code: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    permissions: set[str] = Field(default_factory=set)


class RoleUpdate(ApiModel):
    """역할 수정 요청. permissions가 None이면 기존 권한 유지.

    Role update. ``permissions`` left as None keeps the current grants.
    """

    code: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    permissions: set[str] | None = None


class RoleResponse(ApiModel):
    id: int
    code: str
    description: str | None
    permissions: list[str]

    @classmethod
    def from_model(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.id,
            code=role.code,
            description=role.description,
            permissions=sorted(p.code for p in role.permissions if not p.retired),
        )


# === 사용자 (AppUser) ===

class UserCreate(ApiModel):
    """사용자 생성 요청 (관리자 전용).

    Attributes:
        username: 로그인 아이디 (Unique among active users)
        password: 평문 비밀번호, 서버에서 bcrypt 해싱 (Plain text, hashed server-side)
        roles: 부여할 역할 코드 (Role codes to assign)
    """

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    roles: set[str] = Field(default_factory=set)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, password: str | None) -> str | None:
        return _check_password_length(password)


class UserUpdate(ApiModel):
    """사용자 수정 요청: 사용자명/비밀번호 변경 (Change username and/or password)."""

    username: str | None = Field(default=None, min_length=1, max_length=100)
    password: str | None = Field(default=None, min_length=1)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, password: str | None) -> str | None:
        return _check_password_length(password)


class UserRolesUpdate(ApiModel):
    roles: set[str]


class UserResponse(ApiModel):
    id: int
    username: str
    roles: list[str]

    @classmethod
    def from_model(cls, user: AppUser) -> "UserResponse":
        return cls(id=user.id, username=user.username, roles=sorted(user.role_codes()))
