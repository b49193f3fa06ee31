"""配置管理模块 - 处理satprism服务的配置"""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable

from loguru import logger


@dataclass
class IndexConfig:
    """交易索引服务(Blockchair)配置"""

    base_url: str = "https://api.blockchair.com"
    transaction_limit: int = 20
    api_key: str | None = None


@dataclass
class PriceHistoryConfig:
    """历史价格服务(CoinGecko)配置"""

    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: str | None = None


@dataclass
class HttpSettings:
    """HTTP客户端配置"""

    timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 1.0
    concurrent_requests: int = 5


@dataclass
class DisplayConfig:
    """展示配置"""

    timezone: str = "UTC"
    placeholder: str = "N/A"


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class WebConfig:
    """Web服务配置"""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@dataclass
class SatPrismConfig:
    """satprism主配置"""

    index: IndexConfig = field(default_factory=IndexConfig)
    prices: PriceHistoryConfig = field(default_factory=PriceHistoryConfig)
    http: HttpSettings = field(default_factory=HttpSettings)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "SatPrismConfig":
        """从字典创建配置"""
        return cls(
            index=IndexConfig(**config_dict.get("index", {})),
            prices=PriceHistoryConfig(**config_dict.get("prices", {})),
            http=HttpSettings(**config_dict.get("http", {})),
            display=DisplayConfig(**config_dict.get("display", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
            web=WebConfig(**config_dict.get("web", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return asdict(self)


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    """深度更新字典"""
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Path | None = None, use_env: bool = True):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用默认路径
            use_env: 是否用 SATPRISM_* 环境变量覆盖文件配置
        """
        env_path = os.getenv("SATPRISM_CONFIG")
        self.config_path = config_path or (Path(env_path) if env_path else Path.home() / ".satprism" / "config.toml")
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> SatPrismConfig:
        """加载配置"""
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                # 配置文件有问题时使用默认配置
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        if self.use_env:
            _deep_update(config_dict, load_config_from_env())

        try:
            return SatPrismConfig.from_dict(config_dict)
        except TypeError as e:
            logger.warning(f"Ignoring invalid config from {self.config_path}: {e}")
            return SatPrismConfig()

    def get_config(self) -> SatPrismConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = SatPrismConfig.from_dict(config_dict)


def get_default_config() -> SatPrismConfig:
    """获取默认配置"""
    return SatPrismConfig()


def _set_number(section: dict[str, Any], key: str, name: str, raw: str, convert: Callable[[str], Any]) -> None:
    """Store a numeric environment value; malformed values are skipped with a warning."""
    try:
        section[key] = convert(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, keeping the configured value")


def load_config_from_env() -> dict[str, Any]:
    """从环境变量加载配置"""
    config: dict[str, Any] = {}

    # 索引服务配置
    index_config: dict[str, Any] = {}
    if os.getenv("SATPRISM_INDEX_BASE_URL"):
        index_config["base_url"] = os.getenv("SATPRISM_INDEX_BASE_URL")
    satprism_index_limit = os.getenv("SATPRISM_INDEX_TRANSACTION_LIMIT")
    if satprism_index_limit is not None:
        _set_number(index_config, "transaction_limit", "SATPRISM_INDEX_TRANSACTION_LIMIT", satprism_index_limit, int)
    if os.getenv("SATPRISM_INDEX_API_KEY"):
        index_config["api_key"] = os.getenv("SATPRISM_INDEX_API_KEY")
    if index_config:
        config["index"] = index_config

    # 价格服务配置
    prices_config: dict[str, Any] = {}
    if os.getenv("SATPRISM_PRICES_BASE_URL"):
        prices_config["base_url"] = os.getenv("SATPRISM_PRICES_BASE_URL")
    if os.getenv("SATPRISM_PRICES_API_KEY"):
        prices_config["api_key"] = os.getenv("SATPRISM_PRICES_API_KEY")
    if prices_config:
        config["prices"] = prices_config

    # HTTP配置
    http_config: dict[str, Any] = {}
    satprism_http_timeout = os.getenv("SATPRISM_HTTP_TIMEOUT")
    if satprism_http_timeout is not None:
        _set_number(http_config, "timeout", "SATPRISM_HTTP_TIMEOUT", satprism_http_timeout, float)
    satprism_http_max_retries = os.getenv("SATPRISM_HTTP_MAX_RETRIES")
    if satprism_http_max_retries is not None:
        _set_number(http_config, "max_retries", "SATPRISM_HTTP_MAX_RETRIES", satprism_http_max_retries, int)
    if http_config:
        config["http"] = http_config

    # 展示配置
    if os.getenv("SATPRISM_DISPLAY_TIMEZONE"):
        config["display"] = {"timezone": os.getenv("SATPRISM_DISPLAY_TIMEZONE")}

    # 日志配置
    logging_config: dict[str, Any] = {}
    satprism_logging_level = os.getenv("SATPRISM_LOGGING_LEVEL")
    if satprism_logging_level is not None:
        logging_config["level"] = satprism_logging_level
    satprism_logging_file = os.getenv("SATPRISM_LOGGING_FILE")
    if satprism_logging_file is not None:
        logging_config["file"] = satprism_logging_file
    if logging_config:
        config["logging"] = logging_config

    # Web配置
    web_config: dict[str, Any] = {}
    if os.getenv("SATPRISM_HOST"):
        web_config["host"] = os.getenv("SATPRISM_HOST")
    satprism_port = os.getenv("SATPRISM_PORT")
    if satprism_port is not None:
        _set_number(web_config, "port", "SATPRISM_PORT", satprism_port, int)
    satprism_reload = os.getenv("SATPRISM_RELOAD")
    if satprism_reload is not None:
        web_config["reload"] = satprism_reload.lower() == "true"
    if web_config:
        config["web"] = web_config

    return config
