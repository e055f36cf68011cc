"""
Configuration management for the World Imagery Wayback client.

This module provides settings loading and validation for the production and
development wayback services, and the URL helpers built on those settings.
"""

from .config_loader import ConfigLoader
from .service_settings import (
    WaybackSettings,
    WAYBACK_SERVICE_URL_TEMPLATE,
    WAYBACK_SERVICE_SUB_DOMAINS_PROD,
    WAYBACK_SERVICE_SUB_DOMAINS_DEV,
    WAYBACK_CONFIG_FILE_PROD,
    WAYBACK_CONFIG_FILE_DEV,
)

__all__ = [
    "ConfigLoader",
    "WaybackSettings",
    "WAYBACK_SERVICE_URL_TEMPLATE",
    "WAYBACK_SERVICE_SUB_DOMAINS_PROD",
    "WAYBACK_SERVICE_SUB_DOMAINS_DEV",
    "WAYBACK_CONFIG_FILE_PROD",
    "WAYBACK_CONFIG_FILE_DEV",
]
