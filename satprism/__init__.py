"""satprism - 比特币扩展公钥交易估值

Normalises zpub/xpub extended public keys, fetches their transaction history
and reports, per transaction, the USD value on the day it happened against
its value at today's price.
"""

import asyncio

from satprism.core.codec import KeyCodec, normalize_extended_key
from satprism.core.config import ConfigManager, SatPrismConfig
from satprism.core.models import ValuationOutcome, ValuationRecord
from satprism.core.services import ValuationPipeline, ValuationService
from satprism.version import __version__


async def value_key_async(key: str, config: SatPrismConfig | None = None) -> ValuationOutcome:
    """异步估值一个扩展公钥的交易

    Args:
        key: xpub 或 zpub
        config: 配置 (默认读取 ~/.satprism/config.toml 和环境变量)

    Returns:
        ValuationOutcome: 估值记录或分类错误

    Examples:
        >>> import satprism
        >>> outcome = await satprism.value_key_async("zpub6r...")
        >>> if outcome.ok:
        ...     for record in outcome.records:
        ...         print(record.txid, record.diff)
    """
    config = config or ConfigManager().get_config()
    async with ValuationService.from_config(config) as service:
        return await service.value(key)


def value_key(key: str, config: SatPrismConfig | None = None) -> ValuationOutcome:
    """同步估值一个扩展公钥的交易"""
    return asyncio.run(value_key_async(key, config))


__all__ = [
    "__version__",
    "KeyCodec",
    "normalize_extended_key",
    "ConfigManager",
    "SatPrismConfig",
    "ValuationOutcome",
    "ValuationRecord",
    "ValuationPipeline",
    "ValuationService",
    "value_key",
    "value_key_async",
]
