"""Extended public key decoding and version-prefix normalisation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import base58

from satprism.core.logging import get_logger

VERSION_LENGTH = 4

XPUB_VERSION = bytes.fromhex("0488b21e")
ZPUB_VERSION = bytes.fromhex("04b24746")


@dataclass(frozen=True)
class ExtendedKey:
    """Decoded extended key split into its version prefix and body."""

    version: bytes
    body: bytes

    @classmethod
    def decode(cls, encoded: str) -> ExtendedKey:
        """Decode a base58check string.

        Raises:
            ValueError: invalid characters, bad checksum or a payload too
                short to carry a version prefix.
        """
        payload = base58.b58decode_check(encoded)
        if len(payload) <= VERSION_LENGTH:
            raise ValueError(f"decoded payload is {len(payload)} bytes, too short for an extended key")
        return cls(version=payload[:VERSION_LENGTH], body=payload[VERSION_LENGTH:])

    def encode(self) -> str:
        return base58.b58encode_check(self.version + self.body).decode("ascii")

    def with_version(self, version: bytes) -> ExtendedKey:
        if len(version) != VERSION_LENGTH:
            raise ValueError(f"version prefix must be {VERSION_LENGTH} bytes")
        return ExtendedKey(version=version, body=self.body)

    @property
    def is_witness(self) -> bool:
        return self.version == ZPUB_VERSION


class KeyCodec:
    """Rewrites native segwit (zpub) keys to the legacy (xpub) form.

    ``normalize`` never raises: anything it cannot decode is handed back
    untouched, and callers rely on always receiving a string.
    """

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger or get_logger(__name__)

    def normalize(self, encoded: str) -> str:
        try:
            key = ExtendedKey.decode(encoded)
        except (ValueError, TypeError) as exc:
            self._logger.warning("Error converting pubkey: {error}", error=str(exc))
            return encoded

        if not key.is_witness:
            return encoded

        return key.with_version(XPUB_VERSION).encode()


_default_codec = KeyCodec()


def normalize_extended_key(encoded: str) -> str:
    """Normalise ``encoded`` with a default :class:`KeyCodec`."""

    return _default_codec.normalize(encoded)
