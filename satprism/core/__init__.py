"""satprism 核心模块"""

from satprism.core.codec import ExtendedKey, KeyCodec, normalize_extended_key
from satprism.core.config import ConfigManager, SatPrismConfig
from satprism.core.models import ValuationOutcome, ValuationRecord
from satprism.core.services import ValuationPipeline, ValuationService

__all__ = [
    "ExtendedKey",
    "KeyCodec",
    "normalize_extended_key",
    "ConfigManager",
    "SatPrismConfig",
    "ValuationOutcome",
    "ValuationRecord",
    "ValuationPipeline",
    "ValuationService",
]
