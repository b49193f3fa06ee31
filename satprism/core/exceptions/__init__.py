"""Exception handling module."""

from satprism.core.exceptions.base import (
    ConfigurationError,
    InternalFailureError,
    MissingInputError,
    NotFoundError,
    ProviderError,
    RemoteFetchError,
    SatPrismError,
)
from satprism.core.exceptions.codes import ErrorCode
from satprism.core.exceptions.handler import ErrorHandler, classify_exception

__all__ = [
    "SatPrismError",
    "MissingInputError",
    "ProviderError",
    "RemoteFetchError",
    "NotFoundError",
    "InternalFailureError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorHandler",
    "classify_exception",
]
