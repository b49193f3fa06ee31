"""satprism核心异常类."""

from typing import Any

from satprism.core.exceptions.codes import ErrorCode


class SatPrismError(Exception):
    """satprism基础异常类."""

    kind = "InternalFailure"

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class MissingInputError(SatPrismError):
    """请求缺少扩展公钥."""

    kind = "MissingInput"

    def __init__(self, message: str = "Missing pubkey parameter", details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.MISSING_INPUT.value, details)


class ProviderError(SatPrismError):
    """外部数据提供商相关异常."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = ErrorCode.PROVIDER_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.setdefault("provider", provider_name)
        super().__init__(message, error_code, super_details)
        self.provider_name = provider_name


class RemoteFetchError(ProviderError):
    """提供商返回了非成功响应."""

    kind = "RemoteFetchFailure"

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        body: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        if body is not None:
            super_details["body"] = body
        super().__init__(message, provider_name, ErrorCode.REMOTE_FETCH_FAILURE.value, super_details)
        self.status_code = status_code
        self.body = body


class NotFoundError(SatPrismError):
    """索引服务没有该公钥的数据."""

    kind = "NotFound"

    def __init__(
        self,
        message: str = "No data for this pubkey",
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if key is not None:
            super_details["key"] = key
        super().__init__(message, ErrorCode.NOT_FOUND.value, super_details)
        self.key = key


class InternalFailureError(SatPrismError):
    """处理过程中的其他意外错误."""

    kind = "InternalFailure"

    def __init__(self, message: str = "Internal Server Error", details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.INTERNAL_FAILURE.value, details)


class ConfigurationError(SatPrismError):
    """配置错误."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, details)
