"""팀 레포지토리: 멤버 기준 팀 조회.

Team Repository: membership-based team queries.
"""

from typing import Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.team import Team, team_members
from lists_api.repositories.base import BaseRepository
from lists_api.utils.pagination import paginate


class TeamRepository(BaseRepository[Team]):
    """teams 테이블 쿼리 (Queries over the teams table)."""

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_teams_for_member(
        self,
        db: AsyncSession,
        user_id: int,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Team], int]:
        """사용자가 속한 활성 팀을 페이지 단위로 조회합니다.

        Page of active teams that ``user_id`` is a member of.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 멤버 사용자 ID (Member user id)
            page: 페이지 번호, 1부터 시작 (Page number, 1-indexed)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Team], int]: (팀 목록, 전체 개수) (Teams, total count)
        """
        query: Select = self.active_query().join(
            team_members, team_members.c.team_id == Team.id
        ).where(team_members.c.app_user_id == user_id)
        return await paginate(db, query, page, per_page)


# 싱글턴 인스턴스 (Singleton instance)
team_repository: TeamRepository = TeamRepository()
