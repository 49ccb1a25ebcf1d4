"""역할 라우터: 역할 CRUD 엔드포인트.

Role Router. Reads need any authenticated user; mutations need an admin.
"""

from fastapi import APIRouter

from lists_api.api.deps import AdminUser, CurrentUser, Db, Paging
from lists_api.schemas.common import ApiResponse, PageResponse
from lists_api.schemas.user import RoleCreate, RoleResponse, RoleUpdate
from lists_api.services.role_service import role_service

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[PageResponse[RoleResponse]])
async def list_roles(db: Db, current_user: CurrentUser, paging: Paging) -> ApiResponse[PageResponse[RoleResponse]]:
    """활성 역할 목록 (Page of active roles)."""
    roles, total = await role_service.find_all(db, paging.page, paging.per_page)
    items = [RoleResponse.from_model(r) for r in roles]
    return ApiResponse(body=PageResponse.of(items, total, paging.page, paging.per_page))


@router.get("/{code}", response_model=ApiResponse[RoleResponse])
async def get_role(code: str, db: Db, current_user: CurrentUser) -> ApiResponse[RoleResponse]:
    role = await role_service.find_by_code(db, code)
    return ApiResponse(body=RoleResponse.from_model(role))


@router.post("", response_model=ApiResponse[RoleResponse], status_code=201)
async def create_role(data: RoleCreate, db: Db, current_user: AdminUser) -> ApiResponse[RoleResponse]:
    """새 역할을 생성합니다 (Create a role)."""
    role = await role_service.create(db, data)
    await db.commit()
    return ApiResponse(body=RoleResponse.from_model(role))


@router.put("/{code}", response_model=ApiResponse[RoleResponse])
async def update_role(code: str, data: RoleUpdate, db: Db, current_user: AdminUser) -> ApiResponse[RoleResponse]:
    """역할을 수정합니다 (Update a role identified by code)."""
    role = await role_service.update(db, code, data)
    await db.commit()
    return ApiResponse(body=RoleResponse.from_model(role))


@router.delete("/{code}", response_model=ApiResponse[None])
async def retire_role(code: str, db: Db, current_user: AdminUser) -> ApiResponse[None]:
    """역할을 은퇴 처리합니다 (Retire a role)."""
    await role_service.retire(db, code)
    await db.commit()
    return ApiResponse()
