"""공통 모델 믹스인: 소프트 삭제(retire) 플래그.

Shared model mixin for the soft-delete ("retire") lifecycle.
Retired rows stay in the table but are excluded from every active query.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, false
from sqlalchemy.orm import Mapped, mapped_column


class RetirableMixin:
    """retired 플래그와 타임스탬프를 제공하는 믹스인.

    Mixin adding a ``retired`` flag plus creation/update timestamps.
    """

    # 소프트 삭제 플래그 (Soft-delete flag, never reset once set)
    retired: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def retire(self) -> None:
        """엔티티를 은퇴 처리합니다 (Mark the entity as retired)."""
        self.retired = True
