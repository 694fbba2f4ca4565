"""Configuration service for worklog.

``ConfigService`` is the single source of truth for ``config.json``. It loads
the file into an ``AppConfig``, writes it back, and exposes dotted keys such as
``money.currency_symbol`` for the ``config`` command group.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from worklog_cli.models.config_models import AppConfig
from worklog_cli.utils.logger import get_component_logger

logger = get_component_logger("config")


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or Path(user_config_dir("worklog_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("worklog_cli"))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def db_path(self) -> Path:
        """Database file from ``storage.db_path`` or the user data dir."""
        if self.config.storage.db_path:
            return Path(self.config.storage.db_path).expanduser()
        return self.data_dir / "worklog.db"

    def load_config(self) -> AppConfig:
        """Load configuration, falling back to defaults for a corrupt file."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
        except (OSError, ValidationError) as e:
            logger.error("Invalid config file %s, using defaults: %s", self.config_path, e)
            self._config = AppConfig()

        return self._config

    def save_config(self) -> None:
        """Save the current configuration."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Value at a dotted key, e.g. ``output.format``.

        Raises:
            KeyError: If the key does not exist
        """
        node: Any = self.config
        for part in key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                raise KeyError(key)
            node = getattr(node, part)
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a dotted key, validating the result, and save.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value is not valid for the key
        """
        self.get(key)
        data = self.config.model_dump()
        section = data
        *parents, leaf = key.split(".")
        for part in parents:
            section = section[part]
        section[leaf] = value

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value!r}") from e
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset one dotted key, or everything when *key* is None."""
        if key is None:
            self._config = AppConfig()
            if self.config_path.exists():
                self.config_path.unlink()
            return

        self.get(key)
        default: Any = AppConfig()
        for part in key.split("."):
            default = getattr(default, part)
        if isinstance(default, BaseModel):
            default = default.model_dump()
        self.set(key, default)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
