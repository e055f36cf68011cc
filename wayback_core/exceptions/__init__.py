"""
Custom exceptions for the World Imagery Wayback client.

This module provides domain-specific exception classes for error handling
and debugging throughout the package.
"""

from .custom_exceptions import (
    WaybackBaseException,
    WaybackConfigurationError,
    WaybackConnectionError,
    ConfigFetchError,
    ChangeProbeError,
    ImageFetchError,
    MetadataQueryError,
    QueryCancelledError,
)

__all__ = [
    "WaybackBaseException",
    "WaybackConfigurationError",
    "WaybackConnectionError",
    "ConfigFetchError",
    "ChangeProbeError",
    "ImageFetchError",
    "MetadataQueryError",
    "QueryCancelledError",
]
