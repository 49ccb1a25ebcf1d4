"""예외 처리기: 모든 오류를 ApiResponse 봉투로 변환.

Exception handlers rendering every error inside the ApiResponse envelope.

    HTTPException (서비스/의존성 오류)   -> 상태 코드 유지, error_code 매핑
    RequestValidationError (입력 검증)   -> 400 BAD_OPERATION
    Exception (처리되지 않은 오류)      -> 500 BAD_OPERATION
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lists_api.schemas.common import ApiResponse
from lists_api.utils.exceptions import ErrorCode, error_code_for

logger = logging.getLogger(__name__)


def envelope(status_code: int, error_code: ErrorCode, description: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """오류 봉투 JSON 응답 생성 (Build a JSON error envelope)."""
    body = ApiResponse.error(error_code, description).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException을 봉투로 변환합니다 (Render an HTTPException as an envelope)."""
    error_code = error_code_for(exc)
    description = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    logger.warning(
        "%s %s failed with %s (%s): %s",
        request.method, request.url.path, exc.status_code, error_code.name, description,
    )
    return envelope(exc.status_code, error_code, description, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 오류를 400 BAD_OPERATION으로 변환합니다.

    Render request validation errors as 400 BAD_OPERATION.
    """
    errors = jsonable_encoder(exc.errors())
    description = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}" for err in errors
    )
    logger.warning("%s %s rejected: %s", request.method, request.url.path, description)
    return envelope(status.HTTP_400_BAD_REQUEST, ErrorCode.BAD_OPERATION, description)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외를 500 봉투로 변환합니다.

    Render any unhandled exception as a 500 BAD_OPERATION envelope.
    The traceback is logged; the response carries a generic description.
    """
    logger.exception(
        "%s %s raised an unhandled exception", request.method, request.url.path, exc_info=exc
    )
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.BAD_OPERATION, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 예외 처리기를 등록합니다 (Register the handlers on ``app``)."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
