"""
Unit tests for custom exceptions module.

This module contains tests for the custom exception classes
and their context handling.
"""

import pytest
from wayback_core.exceptions import (
    WaybackBaseException,
    WaybackConfigurationError,
    WaybackConnectionError,
    ConfigFetchError,
    ChangeProbeError,
    ImageFetchError,
    MetadataQueryError,
    QueryCancelledError,
)


class TestWaybackBaseException:
    """Test suite for WaybackBaseException class."""

    def test_base_exception_without_context(self):
        """Test WaybackBaseException without context."""
        exception = WaybackBaseException("Test error message")

        assert str(exception) == "Test error message"
        assert exception.message == "Test error message"
        assert exception.context == {}

    def test_base_exception_with_context(self):
        """Test WaybackBaseException with context."""
        context = {"release_number": 44988, "tile": "14/6463/3664"}
        exception = WaybackBaseException("Test error message", context)

        assert exception.message == "Test error message"
        assert exception.context == context
        assert "release_number=44988" in str(exception)
        assert "tile=14/6463/3664" in str(exception)
        assert str(exception).startswith("Test error message (Context: ")

    def test_base_exception_with_none_context(self):
        """Test WaybackBaseException with None context."""
        exception = WaybackBaseException("Test error message", None)

        assert str(exception) == "Test error message"
        assert exception.context == {}

    def test_base_exception_is_exception(self):
        """Test that WaybackBaseException can be caught as Exception."""
        with pytest.raises(Exception):
            raise WaybackBaseException("Test error")


class TestStageExceptions:
    """Test suite for the stage specific exception classes."""

    @pytest.mark.parametrize("exception_class", [
        WaybackConfigurationError,
        WaybackConnectionError,
        ConfigFetchError,
        ChangeProbeError,
        ImageFetchError,
        MetadataQueryError,
        QueryCancelledError,
    ])
    def test_inherits_from_base(self, exception_class):
        """Test that every exception can be caught as WaybackBaseException."""
        with pytest.raises(WaybackBaseException) as exc_info:
            raise exception_class("Failure", {"stage": "test"})

        assert exc_info.value.context == {"stage": "test"}

    def test_connection_error_status_code(self):
        """Test that WaybackConnectionError exposes the HTTP status code."""
        exception = WaybackConnectionError("Not found", {"url": "https://x", "status_code": 404})

        assert exception.status_code == 404

    def test_connection_error_without_status_code(self):
        """Test status_code is None for transport failures."""
        exception = WaybackConnectionError("Timed out", {"url": "https://x"})

        assert exception.status_code is None

    def test_image_fetch_error_release_numbers(self):
        """Test that ImageFetchError exposes the failed release numbers."""
        exception = ImageFetchError("Fetch failed", {"release_numbers": [3201, 44988]})

        assert exception.release_numbers == [3201, 44988]
        assert ImageFetchError("Fetch failed").release_numbers == []
