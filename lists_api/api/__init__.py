"""API 라우터 패키지: 모든 엔드포인트 통합.

API Router package aggregating every endpoint under ``/api``.

Included routers:
    - auth: 인증 (/api/authenticate)
    - roles: 역할 관리 (/api/roles)
    - permissions: 권한 관리 (/api/permissions)
    - users: 사용자 관리 (/api/users)
    - teams: 팀 관리 (/api/teams)
"""

from fastapi import APIRouter

from lists_api.api.auth import router as auth_router
from lists_api.api.permissions import router as permissions_router
from lists_api.api.roles import router as roles_router
from lists_api.api.teams import router as teams_router
from lists_api.api.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/authenticate", tags=["Authentication"])
api_router.include_router(roles_router, prefix="/roles", tags=["Roles"])
api_router.include_router(permissions_router, prefix="/permissions", tags=["Permissions"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
