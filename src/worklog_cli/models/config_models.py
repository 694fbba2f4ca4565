"""Application configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

OutputFormat = Literal["pretty", "table", "json", "yaml"]


class StorageConfig(BaseModel):
    """Where the local SQLite database lives."""

    db_path: str | None = Field(
        default=None, description="Database file; None uses the user data dir"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: OutputFormat = Field(default="pretty")
    color: bool = Field(default=True)


class MoneyConfig(BaseModel):
    """How costs are displayed."""

    currency_symbol: str = Field(default="₽")
    thousands_separator: str = Field(default=" ")


class NotificationConfig(BaseModel):
    """Focus-cycle completion notifications."""

    bell: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    """Main configuration stored in ``config.json``."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    money: MoneyConfig = Field(default_factory=MoneyConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
