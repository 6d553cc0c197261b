"""Shared HTTP transport for the users REST adapter.

This module provides a thin wrapper around ``requests.Session`` so the
adapter can share timeout policy, retry behavior, and API-key header
construction.

Dependencies:
    - ``requests`` for network I/O.

Call context:
    - Constructed by ``roster.adapters.user_rest.UserRestSource``.
    - Used only inside adapter methods; use cases interact through ports.
    - Unlike a typed-error wrapper, the last transport exception is re-raised
      untouched so ``failure_classifier`` can tell timeouts, DNS failures and
      refused connections apart.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from .failure_classifier import is_transport_error


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: float = 30
    retries: int = 0


class RetryingSession:
    """Shared requests wrapper with API-key headers and retry loops.

    This class is intentionally transport-only. Callers provide endpoint URLs
    and decide how to classify non-2xx responses.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            api_key: API key value to place in ``X-API-Key`` headers, or ``None``.
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg
        self._log = logging.getLogger(__name__)

    def _headers(
        self, accept: str = "application/json", json_body: bool = False
    ) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _with_retries(self, context: str, send: Callable[[], requests.Response]) -> requests.Response:
        attempts = self.cfg.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return send()
            except Exception as exc:
                if not is_transport_error(exc) or attempt == attempts:
                    raise
                self._log.debug("%s failed (attempt %d/%d): %s", context, attempt, attempts, exc)
        raise RuntimeError(f"{context}: no attempt made")

    def get(self, url: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Raises:
            requests.exceptions.RequestException: The last transport failure
                once all attempts are used up.
        """
        return self._with_retries(
            f"GET {url}",
            lambda: self.session.get(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a JSON POST request with retries on transport failures."""
        data = None if json_body is None else json.dumps(json_body)
        return self._with_retries(
            f"POST {url}",
            lambda: self.session.post(
                url,
                data=data,
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def delete(self, url: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Send a DELETE request with retries on transport failures."""
        return self._with_retries(
            f"DELETE {url}",
            lambda: self.session.delete(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )


__all__ = ["HttpConfig", "RetryingSession"]
