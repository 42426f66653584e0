"""
Upstream adapter interface and the shared HTTP helper.
"""
import logging
import time
from typing import Any, Dict, Optional, Protocol

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from devfeed.errors import TransportError

logger = logging.getLogger("upstreams")

DEFAULT_TIMEOUT_SECONDS = 30.0


class UpstreamAdapter(Protocol):
    """
    One upstream source.

    Implementations:
    - HackathonAdapter: JSON API with a fixed field projection
    - NewsAdapter: HTML page scraped into article records
    - ContestAdapter: JSON API passed through verbatim
    """

    name: str

    def fetch(self) -> Any:
        """
        Fetch and normalize the upstream data.

        Raises:
            FetchError: The call failed or the payload is unusable
        """
        ...


class HttpFetcher:
    """
    Issues GET requests for an adapter.

    Connection errors and timeouts are retried with exponential backoff up
    to `attempts` tries in total; any other failure surfaces immediately.
    Every requests failure is raised as TransportError.
    """

    def __init__(
        self,
        name: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        attempts: int = 1,
    ):
        self.name = name
        self.session = session or requests.Session()
        self.timeout = timeout
        self.attempts = max(1, attempts)

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """GET `url` and return the response, raising TransportError on failure."""
        retrying = Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(
                (requests.ConnectionError, requests.Timeout)
            ),
            reraise=True,
        )
        try:
            return retrying(self._get_once, url, headers)
        except requests.RequestException as e:
            raise TransportError(self.name, f"GET {url} failed: {e}") from e

    def _get_once(self, url: str, headers: Optional[Dict[str, str]]) -> requests.Response:
        logger.info(f"[{self.name}] Fetching {url}")
        start_time = time.time()

        response = self.session.get(url, headers=headers, timeout=self.timeout)
        response.raise_for_status()

        elapsed = time.time() - start_time
        logger.info(
            f"[{self.name}] Response: {response.status_code} in {elapsed:.2f}s "
            f"({len(response.content)} bytes)"
        )
        return response
