"""인증 서비스: 로그인 및 토큰 갱신 비즈니스 로직.

Auth Service: authenticates credentials and issues / refreshes the
access + refresh token pair. Every failure surfaces as the same
UnauthorizedError so callers cannot tell which part was wrong.
"""

import logging

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.config import settings
from lists_api.models.user import AppUser
from lists_api.repositories.user_repository import user_repository
from lists_api.schemas.auth import JwtResponse
from lists_api.security.passwords import verify_password
from lists_api.utils.exceptions import UnauthorizedError
from lists_api.utils.jwt import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    get_username_from_token,
)

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS: str = "Invalid username or password"
_INVALID_REFRESH_TOKEN: str = "Invalid or expired refresh token"


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication and token refresh.
    """

    def _generate_tokens(self, user: AppUser) -> JwtResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate the access and refresh token pair for a user.
        """
        return JwtResponse(
            access_token=create_access_token(user.username),
            refresh_token=create_refresh_token(user.username),
        )

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> JwtResponse:
        """자격 증명을 인증하고 토큰 쌍을 발급합니다.

        Authenticate a username/password pair and issue tokens.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 사용자명 (Username)
            password: 평문 비밀번호 (Plain text password)

        Returns:
            JwtResponse: 액세스/리프레시 토큰 쌍 (Access + refresh token pair)

        Raises:
            UnauthorizedError: 알 수 없는 사용자, 은퇴한 사용자, 잘못된 비밀번호
                (Unknown user, retired user or wrong password)
        """
        user: AppUser | None = await user_repository.get_active_by_username(db, username)
        stored_hash = user.password_hash if user is not None else None

        if not verify_password(password, stored_hash) or user is None:
            reason = "unknown user" if user is None else "bad credentials"
            logger.warning("'%s' failed to authenticate due to '%s'", username, reason)
            raise UnauthorizedError(_INVALID_CREDENTIALS)

        logger.info("'%s' authenticated", username)
        return self._generate_tokens(user)

    async def refresh(self, db: AsyncSession, refresh_token: str) -> JwtResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Verify the refresh token's signature and expiry, then re-issue both
        tokens for its subject. The ``type`` claim is only enforced when
        JWT_REFRESH_REQUIRES_REFRESH_TYPE is enabled.

        Raises:
            UnauthorizedError: 서명/만료 검증 실패 또는 사용자 없음
                (Signature or expiry failure, or the user is gone)
        """
        expected_type = REFRESH_TOKEN_TYPE if settings.JWT_REFRESH_REQUIRES_REFRESH_TYPE else None
        try:
            username: str = get_username_from_token(refresh_token, expected_type)
        except jwt.InvalidTokenError as exc:
            logger.warning("Refresh token failed to authenticate due to '%s'", exc)
            raise UnauthorizedError(_INVALID_REFRESH_TOKEN) from exc

        user: AppUser | None = await user_repository.get_active_by_username(db, username)
        if user is None:
            logger.warning("'%s' failed to refresh due to 'unknown user'", username)
            raise UnauthorizedError(_INVALID_REFRESH_TOKEN)

        return self._generate_tokens(user)


# 싱글턴 인스턴스 (Singleton instance)
auth_service: AuthService = AuthService()
