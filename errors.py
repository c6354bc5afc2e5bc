"""
Error types raised while fetching the NASA NeoWs feed.

Callers classify failures by exception class:
    ConfigurationError -> the service is missing setup (e.g. no API key)
    UpstreamError      -> NASA responded with a non-2xx status or was unreachable
"""

from typing import Optional


class NeoServiceError(Exception):
    """Base class for errors the NEO service reports to its callers."""


class ConfigurationError(NeoServiceError):
    """Raised when required configuration is missing or invalid."""


class UpstreamError(NeoServiceError):
    """
    Raised when the NeoWs request fails.

    status_code is None when NASA could not be reached at all.
    body_snippet is a whitespace-collapsed, truncated copy of the response
    body, kept for diagnostics only.
    """

    def __init__(self, status_code: Optional[int], body_snippet: str = ""):
        self.status_code = status_code
        self.body_snippet = body_snippet or ""

        if status_code is None:
            message = "NeoWs request failed before a response was received"
        else:
            message = f"NeoWs request failed with status {status_code}"
        if self.body_snippet.strip():
            message += f": {self.body_snippet}"
        super().__init__(message)
