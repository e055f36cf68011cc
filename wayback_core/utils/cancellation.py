"""
Cooperative cancellation for long running wayback queries.

A ``CancellationToken`` is handed to a query by the caller; the query checks it
before every network round trip and stops with ``QueryCancelledError`` once it
has been cancelled. Cancelling never interrupts a request already in flight.
"""

import threading
from typing import Optional

from ..exceptions import QueryCancelledError


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self):
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Calling it more than once is harmless."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, stage: str) -> None:
        """
        Raise ``QueryCancelledError`` if cancellation has been requested.

        Args:
            stage: Name of the step about to run, reported in the error context
        """
        if self._event.is_set():
            context = {"stage": stage}
            if self.reason:
                context["reason"] = self.reason
            raise QueryCancelledError("Query cancelled by caller", context)


def check_cancelled(token: Optional[CancellationToken], stage: str) -> None:
    """Shortcut for optional tokens."""
    if token is not None:
        token.raise_if_cancelled(stage)
