"""API 요청 로깅 미들웨어.

Request logging middleware. Builds one structured event per request
(method, path, status, duration, masked body, error detail) and ships it
to Axiom when configured; otherwise writes it to the module logger.
Sensitive fields (password, token, secret, credential) are masked.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lists_api.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴: camelCase 키(accessToken 등)도 포함
# Keys to mask; matches camelCase keys such as accessToken too
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_?key|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 (Paths excluded from logging)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_ERROR_LEN = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 (Recursively mask sensitive fields in dicts/lists)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def error_detail_from_body(body: bytes) -> str:
    """오류 응답 본문에서 사유 추출.

    Pull the error description out of an ApiResponse error body.
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]
    if isinstance(payload, dict):
        detail = payload.get("errorDescription") or payload.get("detail") or payload
        code = payload.get("errorCode")
        text = f"{code}: {detail}" if code else str(detail)
    else:
        text = str(payload)
    return text[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware logging every API request/response, to Axiom when both
    AXIOM_API_TOKEN and AXIOM_DATASET are set, else to ``logger``.
    """

    def __init__(self, app: Any, client: AxiomClient | None = None) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = client
        self._dataset: str = settings.AXIOM_DATASET

        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = mask_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 오류 응답이면 본문을 읽어 사유를 기록하고 다시 감싸서 반환
            # Error bodies are consumed for the log, then re-wrapped
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = error_detail_from_body(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            if query_params:
                event["query_params"] = mask_sensitive(query_params)
            if request_body is not None:
                event["request_body"] = request_body
            if error_detail:
                event["error"] = error_detail
            self._emit(event)

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            logger.debug("request %s", event)
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리를 깨뜨리지 않도록 기록만 함
            logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)
