"""
Unit tests for query cancellation.
"""

import threading
import pytest

from wayback_core.exceptions import QueryCancelledError
from wayback_core.utils import CancellationToken, check_cancelled


class TestCancellationToken:
    """Test suite for CancellationToken."""

    def test_new_token_not_cancelled(self):
        """Test a fresh token lets queries run."""
        token = CancellationToken()

        assert token.is_cancelled is False
        token.raise_if_cancelled("tilemap")

    def test_cancel_raises_with_stage_and_reason(self):
        """Test a cancelled token raises QueryCancelledError with context."""
        token = CancellationToken()
        token.cancel("user navigated away")

        with pytest.raises(QueryCancelledError) as exc_info:
            token.raise_if_cancelled("images")

        assert exc_info.value.context == {"stage": "images", "reason": "user navigated away"}

    def test_cancel_twice_keeps_first_reason(self):
        """Test repeated cancellation keeps the original reason."""
        token = CancellationToken()
        token.cancel("first")
        token.cancel("second")

        assert token.reason == "first"

    def test_cancel_from_other_thread(self):
        """Test cancellation is visible across threads."""
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()

        assert token.is_cancelled is True

    def test_check_cancelled_without_token(self):
        """Test check_cancelled is a no-op for missing tokens."""
        check_cancelled(None, "hydrate")

    def test_check_cancelled_with_cancelled_token(self):
        """Test check_cancelled raises for cancelled tokens."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(QueryCancelledError) as exc_info:
            check_cancelled(token, "hydrate")

        assert exc_info.value.context == {"stage": "hydrate"}
