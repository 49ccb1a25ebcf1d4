"""권한 라우터: 권한 CRUD 엔드포인트.

Permission Router. Reads need any authenticated user; mutations need an admin.
"""

from fastapi import APIRouter

from lists_api.api.deps import AdminUser, CurrentUser, Db, Paging
from lists_api.schemas.common import ApiResponse, PageResponse
from lists_api.schemas.user import PermissionCreate, PermissionResponse, PermissionUpdate
from lists_api.services.permission_service import permission_service

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[PageResponse[PermissionResponse]])
async def list_permissions(
    db: Db, current_user: CurrentUser, paging: Paging
) -> ApiResponse[PageResponse[PermissionResponse]]:
    permissions, total = await permission_service.find_all(db, paging.page, paging.per_page)
    items = [PermissionResponse.from_model(p) for p in permissions]
    return ApiResponse(body=PageResponse.of(items, total, paging.page, paging.per_page))


@router.get("/{code}", response_model=ApiResponse[PermissionResponse])
async def get_permission(code: str, db: Db, current_user: CurrentUser) -> ApiResponse[PermissionResponse]:
    permission = await permission_service.find_by_code(db, code)
    return ApiResponse(body=PermissionResponse.from_model(permission))


@router.post("", response_model=ApiResponse[PermissionResponse], status_code=201)
async def create_permission(
    data: PermissionCreate, db: Db, current_user: AdminUser
) -> ApiResponse[PermissionResponse]:
    permission = await permission_service.create(db, data)
    await db.commit()
    return ApiResponse(body=PermissionResponse.from_model(permission))


@router.put("/{code}", response_model=ApiResponse[PermissionResponse])
async def update_permission(
    code: str, data: PermissionUpdate, db: Db, current_user: AdminUser
) -> ApiResponse[PermissionResponse]:
    permission = await permission_service.update(db, code, data)
    await db.commit()
    return ApiResponse(body=PermissionResponse.from_model(permission))


@router.delete("/{code}", response_model=ApiResponse[None])
async def retire_permission(code: str, db: Db, current_user: AdminUser) -> ApiResponse[None]:
    await permission_service.retire(db, code)
    await db.commit()
    return ApiResponse()
