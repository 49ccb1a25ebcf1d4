"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Services raise these; the application-level handler renders them inside the
ApiResponse envelope using ``error_code`` and ``detail``.

Usage:
    from lists_api.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Could not find role with code 'ADMIN'")
"""

from enum import Enum

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    """응답 봉투의 오류 코드 (Error codes carried by the response envelope)."""

    NOT_FOUND = "L1000"
    CONFLICT = "L1001"
    UNAUTHORIZED = "L1002"
    BAD_OPERATION = "L1003"


# 상태 코드 기반 기본 매핑: 프레임워크가 직접 던진 HTTPException용
# Fallback for HTTPExceptions raised by the framework itself
_STATUS_TO_CODE: dict[int, ErrorCode] = {
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.UNAUTHORIZED,
}


def error_code_for(exc: HTTPException) -> ErrorCode:
    """예외에 해당하는 오류 코드를 반환합니다.

    Return the envelope error code for any HTTPException.
    """
    code: ErrorCode | None = getattr(exc, "error_code", None)
    if code is not None:
        return code
    return _STATUS_TO_CODE.get(exc.status_code, ErrorCode.BAD_OPERATION)


class NotFoundError(HTTPException):
    """404 Not Found: 활성 상태의 리소스를 찾을 수 없을 때.

    Raised when no active (non-retired) row matches the key or id.
    """

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict: 활성 행 사이에서 자연 키가 충돌할 때.

    Raised when a natural key (code, username) collides with another active row.
    """

    error_code = ErrorCode.CONFLICT

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden: 권한 검사(guard) 실패.

    Raised when an authorization guard rejects the caller.
    """

    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized: 인증 실패 또는 토큰 검증 실패.

    Raised for bad credentials and invalid, expired or missing tokens.
    """

    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class BadRequestError(HTTPException):
    """400 Bad Request: 허용되지 않는 작업.

    Raised for operations that are well-formed but not allowed in the
    current state (e.g. removing a team's last member).
    """

    error_code = ErrorCode.BAD_OPERATION

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
