"""Standardised error codes shared across the service, CLI and web layers."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Machine readable error codes."""

    GENERAL_ERROR = "GENERAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    MISSING_INPUT = "MISSING_INPUT"
    REMOTE_FETCH_FAILURE = "REMOTE_FETCH_FAILURE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_FAILURE = "INTERNAL_FAILURE"

    PROVIDER_ERROR = "PROVIDER_ERROR"
    PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
