"""
Web 服务启动脚本
"""

import uvicorn

from satprism.core.config import ConfigManager


def satprism_main() -> None:
    """启动 FastAPI Web 服务"""
    config = ConfigManager().get_config()
    uvicorn.run(
        "satprism.web.app:create_app",
        factory=True,
        host=config.web.host,
        port=config.web.port,
        reload=config.web.reload,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    satprism_main()
