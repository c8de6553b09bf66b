"""
Configuration management for the Art Recommender.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class ApiConfig:
    """Art Institute of Chicago API settings."""
    base_url: str
    timeout: float
    user_agent: str


@dataclass
class RecommendationConfig:
    """Recommendation engine limits."""
    target_count: int
    page_size: int
    max_pages_per_strategy: int


@dataclass
class PathsConfig:
    """Path configuration settings."""
    data_dir: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "art_recommender_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "api": {
                "base_url": "https://api.artic.edu/api/v1",
                "timeout": 10.0,
                "user_agent": "art-recommender (https://github.com/art-recommender/art-recommender)"
            },
            "recommendations": {
                "target_count": 20,
                "page_size": 12,
                "max_pages_per_strategy": 3
            },
            "paths": {
                "data_dir": "user_data"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # API settings
        if os.getenv("ARTIC_API_BASE"):
            self._config["api"]["base_url"] = os.getenv("ARTIC_API_BASE")

        if os.getenv("ARTIC_API_TIMEOUT"):
            self._config["api"]["timeout"] = float(os.getenv("ARTIC_API_TIMEOUT"))

        if os.getenv("ARTIC_USER_AGENT"):
            self._config["api"]["user_agent"] = os.getenv("ARTIC_USER_AGENT")

        # Recommendation settings
        if os.getenv("RECOMMENDATION_TARGET"):
            self._config["recommendations"]["target_count"] = int(os.getenv("RECOMMENDATION_TARGET"))

        if os.getenv("RECOMMENDATION_PAGE_SIZE"):
            self._config["recommendations"]["page_size"] = int(os.getenv("RECOMMENDATION_PAGE_SIZE"))

        if os.getenv("RECOMMENDATION_MAX_PAGES"):
            self._config["recommendations"]["max_pages_per_strategy"] = int(os.getenv("RECOMMENDATION_MAX_PAGES"))

        # Paths
        if os.getenv("ART_DATA_DIR"):
            self._config["paths"]["data_dir"] = os.getenv("ART_DATA_DIR")

    def get_api_config(self) -> ApiConfig:
        """Get API configuration."""
        api_config = self._config["api"]
        return ApiConfig(
            base_url=api_config["base_url"],
            timeout=float(api_config["timeout"]),
            user_agent=api_config["user_agent"]
        )

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation engine configuration."""
        rec_config = self._config["recommendations"]
        return RecommendationConfig(
            target_count=int(rec_config["target_count"]),
            page_size=int(rec_config["page_size"]),
            max_pages_per_strategy=int(rec_config["max_pages_per_strategy"])
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(data_dir=paths_config["data_dir"])

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


def get_api_config() -> ApiConfig:
    """Get API configuration."""
    return config_manager.get_api_config()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation engine configuration."""
    return config_manager.get_recommendation_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
