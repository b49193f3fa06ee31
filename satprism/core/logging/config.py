"""Logging configuration model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from satprism.core.config import LoggingConfig

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LogConfig(BaseModel):
    """Where JSON log lines go and from which level on.

    ``stream`` defaults to stderr when ``console`` is enabled; ``file_path``
    adds a second, append-only sink.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console: bool = True
    stream: Any = None
    file_path: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LEVELS:
            raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(LEVELS)}")
        return level

    @classmethod
    def from_settings(cls, settings: LoggingConfig) -> LogConfig:
        """Build from the ``[logging]`` section of the service config."""
        return cls(level=settings.level, file_path=settings.file)


__all__ = ["LEVELS", "LogConfig"]
