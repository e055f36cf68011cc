"""
Utility modules for the World Imagery Wayback client.

This module provides logging setup, tile math, payload comparison and
cancellation helpers used throughout the package.
"""

from .logging_setup import setup_logging, get_logger, log_performance
from .geometry import long2tile, lat2tile, tile2long, tile2lat, zoom_to_level
from .byte_compare import are_bytes_equal
from .cancellation import CancellationToken, check_cancelled

__all__ = [
    "setup_logging",
    "get_logger",
    "log_performance",
    "long2tile",
    "lat2tile",
    "tile2long",
    "tile2lat",
    "zoom_to_level",
    "are_bytes_equal",
    "CancellationToken",
    "check_cancelled",
]
