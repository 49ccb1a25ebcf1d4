"""기본 레포지토리: 소프트 삭제를 인식하는 CRUD.

Base repository for retirable models. Every read goes through the
``retired = false`` filter; writes flush immediately so storage-level
unique violations surface as DuplicateError inside the request.

Usage:
    class RoleRepository(CodeRepository[Role]):
        def __init__(self) -> None:
            super().__init__(Role)
"""

from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lists_api.database import Base
from lists_api.utils.exceptions import DuplicateError
from lists_api.utils.pagination import paginate

ModelType = TypeVar("ModelType", bound=Base)

# PostgreSQL unique_violation SQLSTATE
_UNIQUE_VIOLATION: str = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """유니크 제약 위반 여부 (asyncpg SQLSTATE, or the SQLite message)."""
    orig = exc.orig
    for err in (orig, getattr(orig, "__cause__", None)):
        if getattr(err, "sqlstate", None) == _UNIQUE_VIOLATION:
            return True
    return "unique constraint" in str(orig).lower()


class BaseRepository(Generic[ModelType]):
    """활성 행만 다루는 제네릭 레포지토리.

    Generic repository over a model using RetirableMixin.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def active_query(self) -> Select:
        """retired가 아닌 행에 대한 기본 쿼리 (Base query over non-retired rows)."""
        return select(self.model).where(self.model.retired.is_(False)).order_by(self.model.id)

    async def get_active_by_id(self, db: AsyncSession, record_id: int) -> ModelType | None:
        """ID로 활성 레코드를 조회합니다.

        Retrieve a non-retired record by id, or None.
        """
        query: Select = select(self.model).where(
            self.model.id == record_id,
            self.model.retired.is_(False),
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_page(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """활성 레코드 페이지 조회 (Page of non-retired records, id order)."""
        return await paginate(db, self.active_query(), page, per_page)

    async def add(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """새 레코드를 추가하고 flush 합니다.

        Add a new record and flush it so the id is assigned.

        Raises:
            DuplicateError: 부분 유니크 인덱스 위반 시 (Partial unique index violated)
        """
        db.add(db_obj)
        await self._flush(db)
        return db_obj

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """변경된 레코드를 flush 합니다 (Flush pending changes to a loaded record)."""
        await self._flush(db)
        return db_obj

    async def _flush(self, db: AsyncSession) -> None:
        """flush 후 유니크 위반만 DuplicateError로 변환.

        Flush pending changes. Unique violations (the partial indexes on the
        natural keys) become DuplicateError; any other IntegrityError, such as
        a foreign key or NOT NULL failure, propagates unchanged.
        """
        try:
            await db.flush()
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            # 동시 생성 경쟁은 저장소 제약으로만 막을 수 있음
            # Check-then-insert races are caught by the storage constraint
            raise DuplicateError(
                f"{self.model.__name__} conflicts with an existing active record"
            ) from exc


class CodeRepository(BaseRepository[ModelType]):
    """code 자연 키를 가진 모델용 레포지토리 (Repository for models keyed by ``code``)."""

    async def get_active_by_code(self, db: AsyncSession, code: str) -> ModelType | None:
        query: Select = select(self.model).where(
            self.model.code == code,
            self.model.retired.is_(False),
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_codes(self, db: AsyncSession, codes: set[str]) -> list[ModelType]:
        """코드 집합에 해당하는 활성 레코드 목록 (Active records whose code is in ``codes``)."""
        if not codes:
            return []
        query: Select = self.active_query().where(self.model.code.in_(codes))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def code_in_use(self, db: AsyncSession, code: str) -> bool:
        return await self.get_active_by_code(db, code) is not None

