"""사용자 라우터: 사용자 CRUD, 역할 할당, 소속 팀 조회.

User Router. Listing, creation and role assignment are admin-only; the
remaining endpoints are admin-or-same-user, checked inside the services.
"""

from fastapi import APIRouter

from lists_api.api.deps import CurrentUser, Db, Paging
from lists_api.schemas.common import ApiResponse, PageResponse
from lists_api.schemas.team import TeamResponse
from lists_api.schemas.user import UserCreate, UserResponse, UserRolesUpdate, UserUpdate
from lists_api.services.team_service import team_service
from lists_api.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[PageResponse[UserResponse]])
async def list_users(db: Db, current_user: CurrentUser, paging: Paging) -> ApiResponse[PageResponse[UserResponse]]:
    """활성 사용자 목록 (관리자 전용) (Page of active users, admin only)."""
    users, total = await user_service.find_all(db, current_user, paging.page, paging.per_page)
    items = [UserResponse.from_model(u) for u in users]
    return ApiResponse(body=PageResponse.of(items, total, paging.page, paging.per_page))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: CurrentUser) -> ApiResponse[UserResponse]:
    """현재 사용자 (The authenticated caller)."""
    return ApiResponse(body=UserResponse.from_model(current_user))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: int, db: Db, current_user: CurrentUser) -> ApiResponse[UserResponse]:
    user = await user_service.find_by_id(db, current_user, user_id)
    return ApiResponse(body=UserResponse.from_model(user))


@router.post("", response_model=ApiResponse[UserResponse], status_code=201)
async def create_user(data: UserCreate, db: Db, current_user: CurrentUser) -> ApiResponse[UserResponse]:
    """새 사용자를 생성합니다 (관리자 전용) (Create a user, admin only)."""
    user = await user_service.create(db, current_user, data)
    await db.commit()
    return ApiResponse(body=UserResponse.from_model(user))


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: int, data: UserUpdate, db: Db, current_user: CurrentUser
) -> ApiResponse[UserResponse]:
    """사용자명/비밀번호 변경 (Change username and/or password)."""
    user = await user_service.update(db, current_user, user_id, data)
    await db.commit()
    return ApiResponse(body=UserResponse.from_model(user))


@router.put("/{user_id}/roles", response_model=ApiResponse[UserResponse])
async def assign_roles(
    user_id: int, data: UserRolesUpdate, db: Db, current_user: CurrentUser
) -> ApiResponse[UserResponse]:
    """사용자 역할 교체 (관리자 전용) (Replace the user's roles, admin only)."""
    user = await user_service.assign_roles(db, current_user, user_id, data.roles)
    await db.commit()
    return ApiResponse(body=UserResponse.from_model(user))


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def retire_user(user_id: int, db: Db, current_user: CurrentUser) -> ApiResponse[None]:
    await user_service.retire(db, current_user, user_id)
    await db.commit()
    return ApiResponse()


@router.get("/{user_id}/teams", response_model=ApiResponse[PageResponse[TeamResponse]])
async def list_user_teams(
    user_id: int, db: Db, current_user: CurrentUser, paging: Paging
) -> ApiResponse[PageResponse[TeamResponse]]:
    """사용자가 속한 활성 팀 목록 (Page of active teams the user belongs to)."""
    teams, total = await team_service.find_teams_for_user(
        db, current_user, user_id, paging.page, paging.per_page
    )
    items = [TeamResponse.from_model(t) for t in teams]
    return ApiResponse(body=PageResponse.of(items, total, paging.page, paging.per_page))
