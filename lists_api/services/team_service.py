"""팀 서비스: 팀 생성, 조회, 멤버 관리, 은퇴.

Team Service. A new team starts with its creator as the only member;
membership-scoped operations are guarded by admin-or-member and
``find_teams_for_user`` by admin-or-same-user.
"""

import logging
from typing import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.models.team import Team
from lists_api.models.user import AppUser
from lists_api.repositories.team_repository import team_repository
from lists_api.schemas.team import TeamCreate, TeamUpdate
from lists_api.security.user_security import user_security
from lists_api.services.user_service import user_service
from lists_api.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    async def create(self, db: AsyncSession, caller: AppUser, data: TeamCreate) -> Team:
        """새 팀을 만들고 요청자를 유일한 초기 멤버로 추가합니다.

        Create a new team with the caller as its only initial member.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 인증된 요청자 (Authenticated caller)
            data: 팀 생성 데이터 (Team details)

        Returns:
            Team: 저장된 팀 (The persisted team)
        """
        return await self._create(db, Team(name=data.name), [caller])

    async def _create(self, db: AsyncSession, team: Team, users: Iterable[AppUser]) -> Team:
        team.members.extend(users)
        team = await team_repository.add(db, team)
        logger.info("Created team %s with members %s", team.id, [u.id for u in team.members])
        return team

    async def get_by_id(self, db: AsyncSession, team_id: int) -> Team:
        """권한 검사 없이 활성 팀을 조회합니다 (내부용).

        Raises:
            NotFoundError: 활성 팀이 없을 때 (No active team with that id)
        """
        team: Team | None = await team_repository.get_active_by_id(db, team_id)
        if team is None:
            logger.warning("No team was found with ID '%s'", team_id)
            raise NotFoundError(f"No team was found with ID '{team_id}'")
        return team

    async def find_by_id(self, db: AsyncSession, caller: AppUser, team_id: int) -> Team:
        """팀을 조회합니다 (관리자 또는 멤버).

        Find an active team the caller may see.

        Raises:
            NotFoundError: 활성 팀이 없을 때 (No active team with that id)
            ForbiddenError: 관리자도 멤버도 아닐 때 (Caller is neither admin nor member)
        """
        team = await self.get_by_id(db, team_id)
        user_security.require_admin_or_member(caller, team)
        return team

    async def find_teams_for_user(
        self,
        db: AsyncSession,
        caller: AppUser,
        user_id: int,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Team], int]:
        """사용자가 속한 팀 목록을 조회합니다 (관리자 또는 본인).

        Find the active teams a user is a member of.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 인증된 요청자 (Authenticated caller)
            user_id: 대상 사용자 ID (User whose teams are listed)
            page: 페이지 번호, 1부터 시작 (Page number, 1-indexed)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Team], int]: (팀 목록, 전체 개수) (Teams, total count)

        Raises:
            ForbiddenError: 관리자도 본인도 아닐 때 (Caller is neither admin nor the user)
            NotFoundError: 활성 사용자가 없을 때 (No active user with that id)
        """
        user_security.require_admin_or_same_user(caller, user_id)
        try:
            user = await user_service.get_by_id(db, user_id)
        except NotFoundError:
            logger.warning("Cannot find teams as no user exists with the ID '%s'", user_id)
            raise
        return await team_repository.get_teams_for_member(db, user.id, page, per_page)

    async def update(self, db: AsyncSession, caller: AppUser, team_id: int, data: TeamUpdate) -> Team:
        """팀 이름을 수정합니다 (Rename a team)."""
        try:
            team = await self.get_by_id(db, team_id)
        except NotFoundError:
            logger.warning("Cannot update a team as none exists with the ID '%s'", team_id)
            raise
        user_security.require_admin_or_member(caller, team)
        team.name = data.name
        logger.info("Updating team %s", team.id)
        return await team_repository.save(db, team)

    async def add_member(self, db: AsyncSession, caller: AppUser, team_id: int, user_id: int) -> Team:
        """팀에 멤버를 추가합니다. 이미 멤버이면 변경 없음.

        Add an active user to the team; a no-op when already a member.
        """
        team = await self.get_by_id(db, team_id)
        user_security.require_admin_or_member(caller, team)
        user = await user_service.get_by_id(db, user_id)
        if not team.has_member(user.id):
            team.members.append(user)
            logger.info("Adding user %s to team %s", user.id, team.id)
            await team_repository.save(db, team)
        return team

    async def remove_member(self, db: AsyncSession, caller: AppUser, team_id: int, user_id: int) -> Team:
        """팀에서 멤버를 제거합니다. 마지막 활성 멤버는 제거 불가.

        Remove a member from the team.

        Raises:
            NotFoundError: 해당 사용자가 멤버가 아닐 때 (User is not a member)
            BadRequestError: 마지막 활성 멤버일 때 (User is the last active member)
        """
        team = await self.get_by_id(db, team_id)
        user_security.require_admin_or_member(caller, team)
        member = next((m for m in team.members if m.id == user_id), None)
        if member is None:
            logger.warning("User %s is not a member of team %s", user_id, team.id)
            raise NotFoundError(f"User '{user_id}' is not a member of team '{team.id}'")

        remaining = [m for m in team.members if m.id != user_id and not m.retired]
        if not remaining:
            logger.warning("Refusing to remove the last member of team %s", team.id)
            raise BadRequestError("A team must keep at least one member")

        team.members.remove(member)
        logger.info("Removing user %s from team %s", user_id, team.id)
        return await team_repository.save(db, team)

    async def retire(self, db: AsyncSession, caller: AppUser, team_id: int) -> None:
        """팀을 은퇴 처리합니다 (Retire a team)."""
        try:
            team = await self.get_by_id(db, team_id)
        except NotFoundError:
            logger.warning("Cannot retire a team as none exists with the ID '%s'", team_id)
            raise
        user_security.require_admin_or_member(caller, team)
        team.retire()
        logger.info("Retiring team %s", team.id)
        await team_repository.save(db, team)


# 싱글턴 인스턴스 (Singleton instance)
team_service: TeamService = TeamService()
