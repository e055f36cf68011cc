"""
Custom exception classes for the World Imagery Wayback client.

This module defines domain-specific exceptions so that callers can tell apart
a broken configuration, an unreachable service, a failed change probe and a
cancelled query.
"""

from typing import Optional, Dict, Any


class WaybackBaseException(Exception):
    """Base exception class for all wayback client exceptions."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class WaybackConfigurationError(WaybackBaseException):
    """
    Exception raised when local settings loading or validation fails.

    This exception is raised when:
    - The environment settings file is malformed
    - A requested environment does not exist
    - Required settings keys are missing
    """
    pass


class WaybackConnectionError(WaybackBaseException):
    """
    Exception raised when an HTTP request to a wayback service fails.

    This exception is raised when:
    - Network connection issues or timeouts occur
    - The service answers with a non-2xx status
    - The response body cannot be decoded
    """

    @property
    def status_code(self) -> Optional[int]:
        return self.context.get("status_code")


class ConfigFetchError(WaybackBaseException):
    """
    Exception raised when the wayback configuration document cannot be obtained.

    Fatal for every query: without the configuration there is no timeline.
    """
    pass


class ChangeProbeError(WaybackBaseException):
    """
    Exception raised when a tilemap request of the backward walk fails.

    The whole walk is aborted and partial results are discarded.
    """
    pass


class ImageFetchError(WaybackBaseException):
    """
    Exception raised when one or more tile images could not be fetched.

    The ``context`` carries ``release_numbers`` with every failed release.
    """

    @property
    def release_numbers(self):
        return self.context.get("release_numbers", [])


class MetadataQueryError(WaybackBaseException):
    """Exception raised when the imagery metadata service query fails."""
    pass


class QueryCancelledError(WaybackBaseException):
    """Exception raised when the caller cancelled a pending query."""
    pass
