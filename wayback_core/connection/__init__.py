"""
Connection module for the World Imagery Wayback client.

This module provides the HTTP client used for the configuration file, tilemap
and tile image requests.
"""

from .http_client import WaybackHttpClient

__all__ = [
    'WaybackHttpClient',
]
