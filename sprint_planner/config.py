"""
Service Configuration for Sprint Planner

Loads config/config.yaml and lets environment variables override it.
"""

import os
from typing import Optional

import yaml


class Config:
    """Load configuration from config.yaml and environment."""

    def __init__(self, config_path: str = "config/config.yaml", overrides: Optional[dict] = None):
        self.config = {}

        if os.path.exists(config_path):
            with open(config_path, encoding="utf-8") as f:
                self.config = yaml.safe_load(f) or {}

        # Sections with every key commented out load as None
        for section, values in list(self.config.items()):
            if values is None:
                self.config[section] = {}

        # Override with environment variables
        self._load_env()

        for section, values in (overrides or {}).items():
            self.config.setdefault(section, {}).update(values)

    def _load_env(self):
        """Load configuration from environment variables."""
        env_mapping = {
            "SPRINT_PLANNER_DATA_DIR": ("data", "dir"),
            "DEFAULT_DAILY_HOUR": ("planning", "default_daily_hour"),
            "INCLUDE_HOLIDAYS": ("planning", "include_holidays"),
            "DEFAULT_LOCALE": ("reports", "locale"),
            "LOG_LEVEL": ("logging", "level"),
            "CORS_ORIGINS": ("server", "cors_origins"),
        }

        for env_var, (section, key) in env_mapping.items():
            value = os.getenv(env_var)
            if value:
                if section not in self.config:
                    self.config[section] = {}
                self.config[section][key] = value

    def get(self, section: str, key: str, default=None):
        """Get configuration value."""
        return (self.config.get(section) or {}).get(key, default)

    @property
    def data_dir(self) -> str:
        return self.get("data", "dir", "data")

    @property
    def default_daily_hour(self) -> str:
        return self.get("planning", "default_daily_hour", "08:00")

    @property
    def include_holidays(self) -> bool:
        value = self.get("planning", "include_holidays", True)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    @property
    def locale(self) -> str:
        return self.get("reports", "locale", "tr")

    @property
    def log_level(self) -> str:
        return str(self.get("logging", "level", "INFO")).upper()

    @property
    def cors_origins(self) -> list[str]:
        origins = self.get("server", "cors_origins", ["*"])
        if isinstance(origins, str):
            return [o.strip() for o in origins.split(",") if o.strip()]
        return list(origins)
