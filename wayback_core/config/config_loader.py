"""
Configuration loader for the World Imagery Wayback client.

This module provides the ConfigLoader class that loads and validates the
JSON settings file for multi-environment deployments (production and
development wayback services) and turns it into ``WaybackSettings``.
"""

import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache

from pydantic import ValidationError

from .service_settings import (
    WaybackSettings,
    WAYBACK_SERVICE_URL_TEMPLATE,
    WAYBACK_SERVICE_SUB_DOMAINS_PROD,
    WAYBACK_SERVICE_SUB_DOMAINS_DEV,
    WAYBACK_CONFIG_FILE_PROD,
    WAYBACK_CONFIG_FILE_DEV,
)
from ..exceptions import WaybackConfigurationError
from ..utils import get_logger


ENVIRONMENT_VARIABLE = "WAYBACK_ENVIRONMENT"
DEFAULT_ENVIRONMENT = "production"
SETTINGS_FILE_NAME = "environment_config.json"

REQUIRED_ENVIRONMENT_KEYS = ["service_url_template", "config_file_url", "sub_domains"]

DEFAULT_ENVIRONMENT_CONFIG: Dict[str, Any] = {
    "shared": {
        "service_url_template": WAYBACK_SERVICE_URL_TEMPLATE,
        "request_timeout_seconds": 30.0,
        "max_image_fetch_workers": 8,
        "strict_image_fetch": True,
    },
    "environments": {
        "production": {
            "sub_domains": WAYBACK_SERVICE_SUB_DOMAINS_PROD,
            "config_file_url": WAYBACK_CONFIG_FILE_PROD,
        },
        "development": {
            "sub_domains": WAYBACK_SERVICE_SUB_DOMAINS_DEV,
            "config_file_url": WAYBACK_CONFIG_FILE_DEV,
        },
    },
}


class ConfigLoader:
    """
    Settings loader and validator for the wayback client.

    Reads ``environment_config.json`` from the configuration directory when it
    exists and falls back to the built-in production/development defaults
    otherwise. Shared keys are merged under the environment-specific ones.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_dir: Directory containing configuration files (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")

    @lru_cache(maxsize=2)
    def load_environment_config(self, environment: str) -> Dict[str, Any]:
        """
        Load configuration for a specific environment.

        Args:
            environment: Environment name (production/development)

        Returns:
            Dictionary containing environment-specific configuration merged with shared config

        Raises:
            WaybackConfigurationError: If configuration cannot be loaded or validated
        """
        try:
            config_data = self._read_settings_file()

            self._validate_environment_config(config_data, environment)

            env_config = dict(config_data["shared"]) if "shared" in config_data else {}
            env_config.update(config_data["environments"][environment])
            env_config["environment"] = environment

            missing = [key for key in REQUIRED_ENVIRONMENT_KEYS if key not in env_config]
            if missing:
                raise WaybackConfigurationError(
                    f"Missing required keys in {environment} configuration (including shared): {missing}"
                )

            self.logger.info(f"Loaded configuration for environment: {environment}")
            return env_config

        except WaybackConfigurationError:
            raise
        except json.JSONDecodeError as e:
            raise WaybackConfigurationError(
                f"Invalid JSON in environment configuration: {str(e)}"
            )
        except Exception as e:
            raise WaybackConfigurationError(
                f"Failed to load environment configuration: {str(e)}"
            )

    def get_settings(self, environment: Optional[str] = None, **overrides: Any) -> WaybackSettings:
        """
        Build validated service settings for an environment.

        Args:
            environment: Environment name; defaults to $WAYBACK_ENVIRONMENT or production
            **overrides: WaybackSettings fields taking precedence over the file values

        Returns:
            WaybackSettings instance

        Raises:
            WaybackConfigurationError: If the merged values do not validate
        """
        environment = environment or os.getenv(ENVIRONMENT_VARIABLE) or DEFAULT_ENVIRONMENT
        values = dict(self.load_environment_config(environment))
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return WaybackSettings(**values)
        except ValidationError as e:
            raise WaybackConfigurationError(
                f"Invalid settings for environment '{environment}'",
                {"errors": e.error_count()}
            ) from e

    def _read_settings_file(self) -> Dict[str, Any]:
        settings_path = self.config_dir / SETTINGS_FILE_NAME

        if not settings_path.exists():
            self.logger.debug(f"Settings file not found at {settings_path}, using built-in defaults")
            return copy.deepcopy(DEFAULT_ENVIRONMENT_CONFIG)

        with open(settings_path, 'r') as f:
            return json.load(f)

    def _validate_environment_config(self, config_data: Dict[str, Any], environment: str) -> None:
        """
        Validate environment configuration structure.

        Args:
            config_data: Configuration data to validate
            environment: Environment name to validate

        Raises:
            WaybackConfigurationError: If configuration is invalid
        """
        if not isinstance(config_data, dict) or "environments" not in config_data:
            raise WaybackConfigurationError("Missing 'environments' key in configuration")

        if environment not in config_data["environments"]:
            available_envs = list(config_data["environments"].keys())
            raise WaybackConfigurationError(
                f"Environment '{environment}' not found. Available: {available_envs}"
            )

        sub_domains = config_data["environments"][environment].get(
            "sub_domains", config_data.get("shared", {}).get("sub_domains")
        )
        if sub_domains is not None and (not isinstance(sub_domains, list) or not sub_domains):
            raise WaybackConfigurationError(
                f"'sub_domains' of {environment} configuration must be a non-empty list"
            )

    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_environment_config.cache_clear()
        self.logger.info("Configuration cache cleared")
