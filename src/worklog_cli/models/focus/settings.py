"""Focus settings persistence in a JSON file."""

import json
from pathlib import Path

from pydantic import ValidationError

from worklog_cli.utils.logger import get_component_logger

from .cycling import FocusSettings

logger = get_component_logger("focus.settings")


class FocusSettingsStore:
    """Loads and saves ``FocusSettings`` independently of the main config.

    Neither operation raises: a missing, unreadable or invalid file loads as
    the defaults, and a failed save is logged and dropped.
    """

    def __init__(self, settings_dir: Path | None = None):
        if settings_dir is None:
            from platformdirs import user_config_dir

            settings_dir = Path(user_config_dir("worklog_cli"))

        self.settings_dir = settings_dir
        self.settings_file = self.settings_dir / "focus_settings.json"

    def load(self) -> FocusSettings:
        """Load saved settings merged over the defaults."""
        if not self.settings_file.exists():
            return FocusSettings()

        try:
            with open(self.settings_file, encoding="utf-8") as f:
                data = json.load(f)
            return FocusSettings.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to load focus settings, using defaults: %s", e)
            return FocusSettings()

    def save(self, settings: FocusSettings) -> None:
        """Write settings to disk."""
        try:
            self.settings_dir.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(settings.model_dump(), f, indent=2)
        except OSError as e:
            logger.error("Failed to save focus settings: %s", e)
