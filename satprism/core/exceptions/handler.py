"""错误日志与分类."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger as _default_logger

from .base import InternalFailureError, ProviderError, SatPrismError
from .codes import ErrorCode


class ErrorHandler:
    """把异常连同上下文写入日志, 并把外部异常归入 SatPrismError 体系.

    The handler never configures sinks; it logs through whichever logger it
    is given. Context fields become structured fields of the log record.
    """

    def __init__(self, logger: Any = None) -> None:
        self.logger = logger or _default_logger

    def log_error(self, error: Exception, context: dict[str, Any] | None = None, level: str = "ERROR") -> None:
        """记录错误日志.

        Args:
            error: 异常对象
            context: 上下文信息 (operation, provider, key ...)
            level: 日志级别
        """
        fields: dict[str, Any] = {"error_type": type(error).__name__, **(context or {})}
        if isinstance(error, SatPrismError):
            fields["error_code"] = error.error_code
            fields["details"] = error.details
        self.logger.opt(depth=1).log(level, "{error_type}: {reason}", reason=str(error), **fields)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        provider: str | None = None,
        **context: Any,
    ) -> SatPrismError:
        """记录异常并返回对应的 SatPrismError; 已分类的异常原样返回."""
        fields = {"operation": operation, "provider": provider, **context}
        self.log_error(error, fields)
        if isinstance(error, SatPrismError):
            return error
        return classify_exception(error, fields)


def classify_exception(error: Exception, context: dict[str, Any]) -> SatPrismError:
    """Timeouts and transport failures become provider errors; anything else is internal."""
    provider = context.get("provider") or "unknown"

    if isinstance(error, httpx.TimeoutException):
        return ProviderError(
            f"Provider {provider} timed out",
            provider_name=provider,
            error_code=ErrorCode.PROVIDER_TIMEOUT.value,
            details=dict(context),
        )
    if isinstance(error, httpx.TransportError):
        return ProviderError(
            f"Unable to reach provider {provider}: {error}",
            provider_name=provider,
            error_code=ErrorCode.NETWORK_ERROR.value,
            details=dict(context),
        )
    return InternalFailureError(details={**context, "error_type": type(error).__name__})
