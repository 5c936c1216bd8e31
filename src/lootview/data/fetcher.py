"""HTTP access to the remote asset repository."""
from __future__ import annotations

import json
import logging

import requests

from lootview import __version__

from .errors import NetworkError, ProtocolError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"lootview/{__version__}"


class RemoteFetcher:
    """Issues one GET per call and hands back the raw response body."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/vnd.github+json",
        }

    def fetch(self, locator: str) -> bytes:
        """Return the body at ``locator`` and raise NetworkError on failure."""
        logger.debug("GET %s", locator)
        try:
            response = self._session.get(locator, headers=self._headers, timeout=self._timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {locator} failed: {exc}", locator=locator) from exc

        logger.debug("GET %s -> %s", locator, response.status_code)
        if not response.ok:
            raise NetworkError(
                f"Request to {locator} returned HTTP {response.status_code} {response.reason}",
                locator=locator,
                status_code=response.status_code,
            )
        return response.content

    def fetch_json(self, locator: str) -> object:
        """Fetch ``locator`` and parse the body as JSON."""
        body = self.fetch(locator)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ProtocolError(f"Invalid JSON from {locator}: {exc}") from exc

    def close(self) -> None:
        self._session.close()
