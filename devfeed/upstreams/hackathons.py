"""
Hackathon listings from the Devpost JSON API.
"""
import logging
from typing import Any, Dict, List, Optional

from config.settings import HACKATHONS_REFERER, HACKATHONS_URL
from devfeed.errors import PayloadError

from .base import HttpFetcher

logger = logging.getLogger("upstreams.hackathons")


# Devpost serves the listing API only to requests that look like its own UI
BROWSER_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-GB,en-US;q=0.9,en;q=0.8",
    "priority": "u=1, i",
    "sec-ch-ua": '"Chromium";v="130", "Google Chrome";v="130", "Not?A_Brand";v="99"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Linux"',
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-origin",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# Fields copied as-is from each upstream hackathon
PASSTHROUGH_FIELDS = (
    "id",
    "title",
    "open_state",
    "thumbnail_url",
    "url",
    "time_left_to_submission",
    "submission_period_dates",
    "prize_amount",
    "registrations_count",
    "featured",
    "organization_name",
    "winners_announced",
    "submission_gallery_url",
    "start_a_submission_url",
    "invite_only",
    "eligibility_requirement_invite_only_description",
    "managed_by_devpost_badge",
)


def project_hackathon(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten one upstream hackathon into the served record.

    `location` comes from the nested displayed_location object and `themes`
    is reduced to the theme names. Missing flat fields become None.

    Raises:
        KeyError, TypeError: The nested fields are missing or malformed
    """
    record = {field: raw.get(field) for field in PASSTHROUGH_FIELDS}
    record["location"] = raw["displayed_location"]["location"]
    record["themes"] = [theme["name"] for theme in raw["themes"]]
    return record


class HackathonAdapter:
    """Fetches open and upcoming online hackathons."""

    name = "hackathons"

    def __init__(
        self,
        http: Optional[HttpFetcher] = None,
        url: str = HACKATHONS_URL,
        referer: str = HACKATHONS_REFERER,
    ):
        self.http = http or HttpFetcher(self.name)
        self.url = url
        self.headers = {**BROWSER_HEADERS, "Referer": referer}

    def fetch(self) -> List[Dict[str, Any]]:
        response = self.http.get(self.url, headers=self.headers)

        try:
            payload = response.json()
        except ValueError as e:
            raise PayloadError(self.name, f"response is not JSON: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("hackathons"), list):
            raise PayloadError(self.name, "response has no 'hackathons' array")

        try:
            hackathons = [project_hackathon(item) for item in payload["hackathons"]]
        except (KeyError, TypeError, AttributeError) as e:
            raise PayloadError(self.name, f"unexpected hackathon shape: {e!r}") from e

        logger.info(f"Parsed {len(hackathons)} hackathons")
        return hackathons
