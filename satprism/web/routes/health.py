"""
健康检查路由
"""

import time

from fastapi import APIRouter, Request

from satprism.version import __version__
from satprism.web.models import APIResponse
from satprism.web.utils import get_request_id

router = APIRouter()


@router.get("/health", response_model=APIResponse)
async def health_check(request: Request) -> APIResponse:
    """
    基础健康检查

    检查应用是否正常运行
    """
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else 0.0
    ready = getattr(request.app.state, "valuation_service", None) is not None

    return APIResponse(
        success=ready,
        data={
            "status": "healthy" if ready else "starting",
            "version": __version__,
            "uptime_seconds": round(uptime, 3),
        },
        message="系统健康检查完成",
        request_id=get_request_id(request),
    )
