"""
Configuration management for the Personalization API.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool
    admin_user_ids: list[str]
    reader_user_ids: list[str]


@dataclass
class ApiConfig:
    """Recommendations API settings."""
    url_prefix: str
    default_per_page: int
    max_per_page: int


@dataclass
class CacheConfig:
    """Recommendation cache settings."""
    ttl_seconds: int


@dataclass
class PathsConfig:
    """Path configuration settings."""
    content_dir: str
    data_dir: str


@dataclass
class LoggingConfig:
    """Logging settings."""
    recent_log_limit: int
    recent_log_level: str


def _split_ids(value: str) -> list[str]:
    return [uid.strip() for uid in value.split(",") if uid.strip()]


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "web_app_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    # Merge file config with defaults
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False,
                "admin_user_ids": [],
                "reader_user_ids": []
            },
            "api": {
                "url_prefix": "",
                "default_per_page": 10,
                "max_per_page": 50
            },
            "cache": {
                "ttl_seconds": 300
            },
            "paths": {
                "content_dir": "content",
                "data_dir": "data"
            },
            "logging": {
                "recent_log_limit": 200,
                "recent_log_level": "WARNING"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config:
                if isinstance(values, dict):
                    self._config[section].update(values)
                else:
                    self._config[section] = values
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("ADMIN_USER_IDS"):
            self._config["app"]["admin_user_ids"] = _split_ids(os.getenv("ADMIN_USER_IDS"))

        if os.getenv("READER_USER_IDS"):
            self._config["app"]["reader_user_ids"] = _split_ids(os.getenv("READER_USER_IDS"))

        # API settings
        if os.getenv("API_URL_PREFIX") is not None:
            self._config["api"]["url_prefix"] = os.getenv("API_URL_PREFIX").rstrip("/")

        # Cache settings
        if os.getenv("CACHE_TTL_SECONDS"):
            self._config["cache"]["ttl_seconds"] = int(os.getenv("CACHE_TTL_SECONDS"))

        # Paths
        if os.getenv("CONTENT_DIR"):
            self._config["paths"]["content_dir"] = os.getenv("CONTENT_DIR")

        if os.getenv("DATA_DIR"):
            self._config["paths"]["data_dir"] = os.getenv("DATA_DIR")

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            admin_user_ids=app_config["admin_user_ids"],
            reader_user_ids=app_config.get("reader_user_ids", [])
        )

    def get_api_config(self) -> ApiConfig:
        """Get recommendations API configuration."""
        api_config = self._config["api"]
        return ApiConfig(
            url_prefix=api_config["url_prefix"],
            default_per_page=api_config["default_per_page"],
            max_per_page=api_config["max_per_page"]
        )

    def get_cache_config(self) -> CacheConfig:
        """Get cache configuration."""
        return CacheConfig(ttl_seconds=int(self._config["cache"]["ttl_seconds"]))

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(
            content_dir=paths_config["content_dir"],
            data_dir=paths_config["data_dir"]
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        logging_config = self._config["logging"]
        return LoggingConfig(
            recent_log_limit=logging_config["recent_log_limit"],
            recent_log_level=logging_config["recent_log_level"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_api_config() -> ApiConfig:
    """Get recommendations API configuration."""
    return config_manager.get_api_config()


def get_cache_config() -> CacheConfig:
    """Get cache configuration."""
    return config_manager.get_cache_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def get_logging_config() -> LoggingConfig:
    """Get logging configuration."""
    return config_manager.get_logging_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save current configuration."""
    config_manager.save_config()
