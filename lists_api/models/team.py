"""팀 SQLAlchemy ORM 모델 정의.

Team model and its membership join table.

Tables:
    - teams: 팀 (Teams)
    - team_members: 팀-사용자 매핑 (Team ↔ user membership)
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lists_api.database import Base
from lists_api.models.base import RetirableMixin
from lists_api.models.user import AppUser

team_members = Table(
    "team_members",
    Base.metadata,
    Column("team_id", Integer, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True),
    Column("app_user_id", Integer, ForeignKey("app_users.id", ondelete="CASCADE"), primary_key=True),
)


class Team(RetirableMixin, Base):
    """팀 모델: 생성 시 최소 1명의 멤버(생성자)를 가짐.

    Team model. A team always starts with its creator as the only member.

    Attributes:
        id: 고유 식별자 (Surrogate integer key)
        name: 팀 이름 (Display name, not unique)
        retired: 소프트 삭제 플래그 (Soft-delete flag)

    Relationships:
        members: 팀 멤버 (Member users)
    """

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members: Mapped[list[AppUser]] = relationship(secondary=team_members, lazy="selectin")

    def has_member(self, user_id: int) -> bool:
        return any(member.id == user_id for member in self.members)
