"""Web相关的工具函数"""

from fastapi import Request
from fastapi.responses import JSONResponse

from satprism.core.models import FailureKind, ValuationFailure
from satprism.web.models import ErrorResponse

_STATUS_BY_KIND = {
    FailureKind.MISSING_INPUT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.INTERNAL_FAILURE: 500,
}


def get_request_id(request: Request) -> str | None:
    """从请求头中获取 X-Request-ID"""
    return request.headers.get("X-Request-ID")


def status_for_failure(failure: ValuationFailure) -> int:
    """Remote fetch failures mirror the upstream status; the rest map to fixed codes."""
    if failure.kind is FailureKind.REMOTE_FETCH_FAILURE:
        status = failure.status_code
        return status if status is not None and status >= 400 else 502
    return _STATUS_BY_KIND[failure.kind]


def failure_response(failure: ValuationFailure, request: Request) -> JSONResponse:
    """Render a classified failure as a JSON error response."""
    body = ErrorResponse(
        error=failure.kind.value,
        code=failure.code,
        message=failure.detail,
        details=failure.details or None,
        request_id=get_request_id(request),
    )
    return JSONResponse(status_code=status_for_failure(failure), content=body.model_dump(mode="json"))
