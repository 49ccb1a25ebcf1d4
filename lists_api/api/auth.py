"""인증 라우터: 로그인 및 토큰 갱신.

Authentication Router: issue and refresh JWT pairs.
"""

from fastapi import APIRouter

from lists_api.api.deps import Db
from lists_api.schemas.auth import JwtAuthenticationRequest, JwtRefreshRequest, JwtResponse
from lists_api.schemas.common import ApiResponse
from lists_api.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("", response_model=ApiResponse[JwtResponse])
async def authenticate(data: JwtAuthenticationRequest, db: Db) -> ApiResponse[JwtResponse]:
    """자격 증명을 인증하고 JWT 쌍을 발급합니다.

    Authenticate a set of credentials and produce access and refresh tokens.
    """
    tokens = await auth_service.authenticate(db, data.username, data.password)
    return ApiResponse(body=tokens)


@router.post("/refresh", response_model=ApiResponse[JwtResponse])
async def refresh(data: JwtRefreshRequest, db: Db) -> ApiResponse[JwtResponse]:
    """리프레시 토큰으로 새 JWT 쌍을 발급합니다.

    Exchange a refresh token for a new token pair.
    """
    tokens = await auth_service.refresh(db, data.refresh_token)
    return ApiResponse(body=tokens)
