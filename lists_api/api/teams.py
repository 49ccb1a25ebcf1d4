"""팀 라우터: 팀 생성, 조회, 수정, 멤버 관리, 은퇴.

Team Router. Any authenticated user may create a team; everything else
requires admin or team membership, checked inside the service.
"""

from fastapi import APIRouter

from lists_api.api.deps import CurrentUser, Db
from lists_api.schemas.common import ApiResponse
from lists_api.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from lists_api.services.team_service import team_service

router: APIRouter = APIRouter()


@router.post("", response_model=ApiResponse[TeamResponse], status_code=201)
async def create_team(data: TeamCreate, db: Db, current_user: CurrentUser) -> ApiResponse[TeamResponse]:
    """새 팀을 생성합니다. 요청자가 첫 멤버가 됩니다.

    Create a team with the caller as its only member.
    """
    team = await team_service.create(db, current_user, data)
    await db.commit()
    return ApiResponse(body=TeamResponse.from_model(team))


@router.get("/{team_id}", response_model=ApiResponse[TeamResponse])
async def get_team(team_id: int, db: Db, current_user: CurrentUser) -> ApiResponse[TeamResponse]:
    team = await team_service.find_by_id(db, current_user, team_id)
    return ApiResponse(body=TeamResponse.from_model(team))


@router.put("/{team_id}", response_model=ApiResponse[TeamResponse])
async def update_team(
    team_id: int, data: TeamUpdate, db: Db, current_user: CurrentUser
) -> ApiResponse[TeamResponse]:
    team = await team_service.update(db, current_user, team_id, data)
    await db.commit()
    return ApiResponse(body=TeamResponse.from_model(team))


@router.put("/{team_id}/members/{user_id}", response_model=ApiResponse[TeamResponse])
async def add_member(
    team_id: int, user_id: int, db: Db, current_user: CurrentUser
) -> ApiResponse[TeamResponse]:
    team = await team_service.add_member(db, current_user, team_id, user_id)
    await db.commit()
    return ApiResponse(body=TeamResponse.from_model(team))


@router.delete("/{team_id}/members/{user_id}", response_model=ApiResponse[TeamResponse])
async def remove_member(
    team_id: int, user_id: int, db: Db, current_user: CurrentUser
) -> ApiResponse[TeamResponse]:
    team = await team_service.remove_member(db, current_user, team_id, user_id)
    await db.commit()
    return ApiResponse(body=TeamResponse.from_model(team))


@router.delete("/{team_id}", response_model=ApiResponse[None])
async def retire_team(team_id: int, db: Db, current_user: CurrentUser) -> ApiResponse[None]:
    await team_service.retire(db, current_user, team_id)
    await db.commit()
    return ApiResponse()
