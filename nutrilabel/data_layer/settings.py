"""Application settings loader for nutrilabel YAML configuration."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config/nutrilabel.yaml"
CONFIG_ENV_VAR = "NUTRILABEL_CONFIG"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_logger = logging.getLogger(__name__)


@dataclass
class AppSettings:
    """Resolved application settings."""

    ingredients_path: str = "data/ingredients/catalog.json"
    recipes_path: str = "data/recipes/recipes.json"
    log_level: str = "INFO"


class SettingsLoader:
    """Loader for application settings from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize settings loader from YAML file.

        Args:
            yaml_path: Path to YAML configuration file
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> AppSettings:
        """Load settings from YAML file.

        Missing sections or keys keep their defaults. An unknown logging
        level falls back to INFO.

        Returns:
            AppSettings object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        defaults = AppSettings()
        data_section = data.get("data") or {}
        logging_section = data.get("logging") or {}

        log_level = str(logging_section.get("level", defaults.log_level)).upper()
        if log_level not in LOG_LEVELS:
            _logger.warning("Unknown logging level %r in %s, using INFO", log_level, self.yaml_path)
            log_level = defaults.log_level

        return AppSettings(
            ingredients_path=str(data_section.get("ingredients_path", defaults.ingredients_path)),
            recipes_path=str(data_section.get("recipes_path", defaults.recipes_path)),
            log_level=log_level,
        )


def resolve_config_path() -> str:
    """Return the config path from NUTRILABEL_CONFIG, or the default."""
    return os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
