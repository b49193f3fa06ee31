"""Extended public key codec."""

from satprism.core.codec.extended_key import (
    XPUB_VERSION,
    ZPUB_VERSION,
    ExtendedKey,
    KeyCodec,
    normalize_extended_key,
)

__all__ = [
    "ExtendedKey",
    "KeyCodec",
    "XPUB_VERSION",
    "ZPUB_VERSION",
    "normalize_extended_key",
]
