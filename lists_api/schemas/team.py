"""팀 Pydantic 스키마 (Team request/response schemas)."""

from pydantic import Field

from lists_api.models.team import Team
from lists_api.schemas.common import ApiModel


class TeamCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)


class TeamUpdate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)


class TeamMemberResponse(ApiModel):
    id: int
    username: str


class TeamResponse(ApiModel):
    """팀 응답: 활성 멤버만 포함 (Team with its active members)."""

    id: int
    name: str
    members: list[TeamMemberResponse]

    @classmethod
    def from_model(cls, team: Team) -> "TeamResponse":
        return cls(
            id=team.id,
            name=team.name,
            members=[
                TeamMemberResponse(id=m.id, username=m.username)
                for m in sorted(team.members, key=lambda m: m.id)
                if not m.retired
            ],
        )
