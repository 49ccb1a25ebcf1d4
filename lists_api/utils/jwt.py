"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.

JWT Payload Structure:
    {
        "sub": "alice",             # 사용자명 (Username)
        "exp": 1234567890,          # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"|"refresh"  # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from lists_api.config import settings

ACCESS_TOKEN_TYPE: str = "access"
REFRESH_TOKEN_TYPE: str = "refresh"


def _encode(username: str, token_type: str, lifetime: timedelta) -> str:
    payload: dict[str, Any] = {
        "sub": username,
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": token_type,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(username: str) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a short-lived access token for ``username``.
    Expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES (default: 30 min).
    """
    return _encode(
        username, ACCESS_TOKEN_TYPE, timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def create_refresh_token(username: str) -> str:
    """JWT 리프레시 토큰을 생성합니다.

    Generate a longer-lived refresh token for ``username``.
    Expires after JWT_REFRESH_TOKEN_EXPIRE_DAYS (default: 7 days).
    """
    return _encode(
        username, REFRESH_TOKEN_TYPE, timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    )


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify signature and expiry of a token.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (Any other validation failure)
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


def get_username_from_token(token: str, expected_type: str | None = None) -> str:
    """토큰에서 사용자명(sub)을 추출합니다.

    Verify ``token`` and return its subject. When ``expected_type`` is given,
    tokens carrying a different ``type`` claim are rejected.

    Raises:
        jwt.InvalidTokenError: 검증 실패, 잘못된 타입, 빈 subject
            (Verification failure, wrong type or empty subject)
    """
    payload: dict[str, Any] = decode_token(token)
    if expected_type is not None and payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise jwt.InvalidTokenError("Token has no subject")
    return username
