import re
from datetime import date
from typing import Any, Dict, Optional

import requests

from errors import ConfigurationError, UpstreamError
from logging_config import get_logger

logger = get_logger(__name__)

FEED_PATH = "/neo/rest/v1/feed"
ERROR_BODY_SNIPPET_MAX_LENGTH = 300

_WHITESPACE = re.compile(r"\s+")


def summarize_body(body: Optional[str]) -> str:
    """Collapse whitespace and cut the body to a short diagnostic snippet."""
    normalized = _WHITESPACE.sub(" ", body or "").strip()
    if len(normalized) <= ERROR_BODY_SNIPPET_MAX_LENGTH:
        return normalized
    return normalized[:ERROR_BODY_SNIPPET_MAX_LENGTH] + "..."


class NeoWsClient:
    """
    Thin client for the NASA NeoWs /feed endpoint.

    fetch() returns the decoded JSON payload untouched; shaping it is the
    normalizer's job. The API key is never logged.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = (api_key or "").strip()
        self.timeout_seconds = timeout_seconds
        self.session = session

    def fetch(self, start_date: date, end_date: date) -> Dict[str, Any]:
        """
        GET the feed for [start_date, end_date].

        Raises ConfigurationError if no API key is set (before any network
        call) and UpstreamError on a non-2xx response or network failure.
        """
        if not self.api_key:
            raise ConfigurationError(
                "NASA_API_KEY is not configured. Set env var NASA_API_KEY (or API_KEY)."
            )

        params = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "api_key": self.api_key,
        }
        http = self.session if self.session is not None else requests

        logger.info("Requesting NeoWs feed %s..%s", params["start_date"], params["end_date"])
        try:
            response = http.get(
                f"{self.base_url}{FEED_PATH}",
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            # The exception text can contain the request URL, api_key included
            logger.warning("NeoWs request failed: %s", type(exc).__name__)
            raise UpstreamError(None, summarize_body(type(exc).__name__)) from exc

        if not 200 <= response.status_code < 300:
            snippet = summarize_body(response.text)
            logger.warning("NeoWs responded with status %s", response.status_code)
            raise UpstreamError(response.status_code, snippet)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(response.status_code, summarize_body(response.text)) from exc
