"""공통 Pydantic 스키마: 응답 봉투, 페이지네이션.

Common Pydantic schemas: the ApiResponse envelope and paginated bodies.
All JSON field names are camelCase; snake_case input is also accepted.
"""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel

from lists_api.utils.exceptions import ErrorCode
from lists_api.utils.pagination import page_count

T = TypeVar("T")


class ApiModel(BaseModel):
    """camelCase 별칭을 사용하는 베이스 모델 (Base model with camelCase aliases)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(ApiModel, Generic[T]):
    """API 응답 봉투.

    Envelope around every API response. ``body`` carries the payload on
    success; ``errorCode`` and ``errorDescription`` are set on failure.
    Null keys are omitted from the serialized form.

    Attributes:
        body: 응답 페이로드 (Payload, omitted if null)
        error_code: 오류 코드 (One of ErrorCode, omitted on success)
        error_description: 오류 설명 (Human-readable description)
        timestamp: 응답 시각 UTC (Response timestamp)
    """

    body: T | None = None
    error_code: ErrorCode | None = None
    error_description: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_serializer(mode="wrap")
    def _omit_nulls(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def error(cls, error_code: ErrorCode, description: str) -> "ApiResponse[Any]":
        """오류 응답 생성 (Build an error envelope)."""
        return cls(error_code=error_code, error_description=description)


class PageResponse(ApiModel, Generic[T]):
    """페이지네이션 응답 스키마.

    Paginated body.

    Attributes:
        items: 현재 페이지 항목 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호, 1부터 시작 (Current page, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total pages)
    """

    items: list[T]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def of(cls, items: list[Any], total: int, page: int, per_page: int) -> "PageResponse[Any]":
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            pages=page_count(total, per_page),
        )
