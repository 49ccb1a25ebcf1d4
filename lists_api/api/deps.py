"""FastAPI 의존성 주입 모듈: 인증 및 권한 검사.

FastAPI dependencies for authentication and admin-only surfaces.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. 토큰 서명/만료/타입(access) 검증 (Signature, expiry and access type verified)
    3. "sub"의 사용자명으로 활성 사용자를 조회 (Active user loaded by the "sub" username)
    4. 사용자를 라우터에 전달, 라우터가 서비스에 caller로 명시적 전달
       (The user is handed to the router, which passes it to services as ``caller``)
"""

from typing import Annotated

import jwt
from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.database import get_db
from lists_api.models.user import AppUser
from lists_api.repositories.user_repository import user_repository
from lists_api.security.user_security import user_security
from lists_api.utils.exceptions import UnauthorizedError
from lists_api.utils.jwt import ACCESS_TOKEN_TYPE, get_username_from_token

# auto_error=False: 헤더 누락도 봉투 형식의 401로 응답
# Missing headers are reported through UnauthorizedError like any other auth failure
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AppUser:
    """JWT 액세스 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer access token and return the active user it names.

    Raises:
        UnauthorizedError: 토큰 누락/무효/만료, 리프레시 토큰 사용, 사용자 없음
            (Missing, invalid or expired token, refresh token used, or user gone)
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    try:
        username: str = get_username_from_token(credentials.credentials, ACCESS_TOKEN_TYPE)
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid or expired token") from exc

    user: AppUser | None = await user_repository.get_active_by_username(db, username)
    if user is None:
        raise UnauthorizedError("User not found or retired")
    return user


async def require_admin(
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> AppUser:
    """관리자 전용 엔드포인트용 의존성 (Dependency for admin-only endpoints).

    Raises:
        ForbiddenError: 관리자 역할이 없을 때 (Caller lacks the admin role)
    """
    user_security.require_admin(current_user)
    return current_user


class PageParams:
    """페이지네이션 쿼리 파라미터 (?page=1&perPage=20)."""

    def __init__(
        self,
        page: Annotated[int, Query(ge=1, description="페이지 번호 (1-indexed page)")] = 1,
        per_page: Annotated[int, Query(ge=1, le=100, alias="perPage", description="페이지당 항목 수")] = 20,
    ) -> None:
        self.page = page
        self.per_page = per_page


CurrentUser = Annotated[AppUser, Depends(get_current_user)]
AdminUser = Annotated[AppUser, Depends(require_admin)]
Db = Annotated[AsyncSession, Depends(get_db)]
Paging = Annotated[PageParams, Depends()]
