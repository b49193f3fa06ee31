"""
FastAPI 应用工厂和配置
"""

import time
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from satprism.core.config import ConfigManager, SatPrismConfig
from satprism.core.exceptions import ErrorHandler, SatPrismError
from satprism.core.logging import LogConfig, configure_logging, get_logger
from satprism.core.models import ValuationFailure
from satprism.core.services import ValuationService
from satprism.version import __version__
from satprism.web.routes import health_router, transactions_router
from satprism.web.utils import failure_response

ServiceFactory = Callable[[SatPrismConfig], ValuationService]


def _default_service_factory(config: SatPrismConfig) -> ValuationService:
    return ValuationService.from_config(config)


def create_app(
    config: SatPrismConfig | None = None,
    service_factory: ServiceFactory | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """创建 FastAPI 应用实例

    Args:
        config: 服务配置, 默认由 ConfigManager 加载
        service_factory: 构造 ValuationService 的工厂 (测试时注入桩实现)
        configure_logs: 是否在启动时配置结构化日志
    """
    factory = service_factory or _default_service_factory

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """应用生命周期管理"""
        resolved = config or ConfigManager().get_config()
        if configure_logs:
            configure_logging(LogConfig.from_settings(resolved.logging))

        service = factory(resolved)
        app.state.config = resolved
        app.state.valuation_service = service
        app.state.started_at = time.monotonic()

        async with service:
            yield

        app.state.valuation_service = None

    app = FastAPI(
        title="satprism",
        description="Historical versus current USD valuation of the transactions behind an xpub/zpub",
        version=__version__,
        lifespan=lifespan,
    )

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    """配置中间件"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


def _setup_routes(app: FastAPI) -> None:
    """注册路由"""
    app.include_router(transactions_router, prefix="/api", tags=["transactions"])
    app.include_router(health_router, prefix="/api", tags=["health"])


def _setup_exception_handlers(app: FastAPI) -> None:
    """配置异常处理器"""
    error_handler = ErrorHandler(get_logger("satprism.web"))

    @app.exception_handler(SatPrismError)
    async def satprism_exception_handler(request: Request, exc: SatPrismError) -> JSONResponse:
        """处理 satprism 自定义异常"""
        error_handler.log_error(exc, {"path": request.url.path})
        return failure_response(ValuationFailure.from_error(exc), request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """处理未捕获的异常"""
        error = error_handler.handle_exception(exc, "http_request", path=request.url.path)
        return failure_response(ValuationFailure.from_error(error), request)
