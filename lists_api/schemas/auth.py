"""인증 관련 Pydantic 요청/응답 스키마.

Authentication request/response schemas.
"""

from lists_api.schemas.common import ApiModel


class JwtAuthenticationRequest(ApiModel):
    """로그인 요청 (Credentials to authenticate)."""

    username: str
    password: str


class JwtRefreshRequest(ApiModel):
    """토큰 갱신 요청 (Refresh token to exchange for a new pair)."""

    refresh_token: str


class JwtResponse(ApiModel):
    """JWT 토큰 쌍 응답.

    Token pair returned by authenticate and refresh.

    Attributes:
        access_token: 단기 액세스 토큰 (Short-lived access token)
        refresh_token: 장기 리프레시 토큰 (Longer-lived refresh token)
    """

    access_token: str
    refresh_token: str
