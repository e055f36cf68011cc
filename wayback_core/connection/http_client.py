"""
HTTP client for the World Imagery Wayback services.

This module wraps a ``requests.Session`` with the timeout policy from the
settings and turns every transport problem into ``WaybackConnectionError`` so
the stages above can translate it into their own error types.
"""

from typing import Any, Dict, Optional

import requests

from ..exceptions import WaybackConnectionError
from ..utils import get_logger

logger = get_logger(__name__)


class WaybackHttpClient:
    """
    Thin JSON/binary GET client with connection reuse.

    The session is shared by every request of the process; ``requests.Session``
    is safe to use from the image download worker threads for plain GETs.
    """

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None):
        """
        Initialize the HTTP client.

        Args:
            timeout: Per-request timeout in seconds
            session: Optional requests.Session for connection reuse
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.debug("WaybackHttpClient initialized")

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a URL and decode its JSON body.

        Args:
            url: Request URL
            params: Optional query string parameters

        Returns:
            Decoded JSON value

        Raises:
            WaybackConnectionError: On transport errors, non-2xx status or invalid JSON
        """
        response = self._get(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise WaybackConnectionError(
                "Response is not valid JSON",
                {"url": url, "status_code": response.status_code}
            ) from e

    def get_bytes(self, url: str) -> bytes:
        """
        GET a URL and return the raw body.

        Raises:
            WaybackConnectionError: On transport errors or non-2xx status
        """
        return self._get(url).content

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise WaybackConnectionError(
                f"Request timed out after {self.timeout}s", {"url": url}
            ) from e
        except requests.RequestException as e:
            raise WaybackConnectionError(
                f"Request failed: {str(e)}", {"url": url}
            ) from e

        if not response.ok:
            raise WaybackConnectionError(
                f"Unexpected HTTP status {response.status_code}",
                {"url": url, "status_code": response.status_code}
            )

        logger.debug(f"GET {url} -> {response.status_code}")
        return response

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
        logger.debug("Closed HTTP session")

    def __enter__(self) -> "WaybackHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
