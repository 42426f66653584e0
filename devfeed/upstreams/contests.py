"""
Upcoming programming contests, passed through from the contests API.
"""
import logging
from typing import Any, Optional

from devfeed.errors import PayloadError

from .base import HttpFetcher

logger = logging.getLogger("upstreams.contests")

DEFAULT_CONTESTS_URL = "https://competeapi.vercel.app/contests/upcoming"


class ContestAdapter:
    """Returns the upstream JSON body unchanged."""

    name = "contests"

    def __init__(self, http: Optional[HttpFetcher] = None, url: str = DEFAULT_CONTESTS_URL):
        self.http = http or HttpFetcher(self.name)
        self.url = url

    def fetch(self) -> Any:
        response = self.http.get(self.url)
        try:
            return response.json()
        except ValueError as e:
            raise PayloadError(self.name, f"response is not JSON: {e}") from e
