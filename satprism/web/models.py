"""
Web API 数据模型
定义 FastAPI 的请求/响应模型
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class APIResponse(BaseModel):
    """标准 API 响应格式"""

    success: bool = Field(..., description="请求是否成功")
    data: Any | None = Field(None, description="响应数据")
    message: str | None = Field(None, description="响应消息")
    timestamp: datetime = Field(default_factory=_utcnow, description="响应时间戳")
    request_id: str | None = Field(None, description="请求ID，用于追踪")


class ErrorResponse(BaseModel):
    """错误响应格式"""

    success: bool = Field(False, description="请求失败")
    error: str = Field(..., description="错误类型 (MissingInput, RemoteFetchFailure, NotFound, InternalFailure)")
    code: str = Field(..., description="错误代码")
    message: str = Field(..., description="错误消息")
    details: dict[str, Any] | None = Field(None, description="详细错误信息")
    timestamp: datetime = Field(default_factory=_utcnow, description="错误时间戳")
    request_id: str | None = Field(None, description="请求ID，用于追踪")


class TransactionValuation(BaseModel):
    """单笔交易估值 (与前端约定的字段名)"""

    txid: str
    time: str
    amount: float
    usdAmount: float
    currentUsd: float
    diffUsd: float
    type: str


class TransactionsResponse(BaseModel):
    """交易估值列表"""

    transactions: list[TransactionValuation]
