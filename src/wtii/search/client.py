"""HTTP client for the Open5e monster database.

Searches are plain blocking calls; the dispatcher runs them off the UI
thread. Transport failures are retried with exponential backoff, every
other failure is mapped onto the SearchError hierarchy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from wtii.core.constants import MONSTER_SEARCH_PATH
from wtii.core.exceptions import SearchRequestError, SearchResponseError
from wtii.core.logging import get_logger
from wtii.models.search import CreatureSearchResult, parse_search_response


if TYPE_CHECKING:
    from wtii.core.config import Settings

logger = get_logger(__name__)


class MonsterSearchClient:
    """Search the monster database by name.

    Example:
        >>> client = MonsterSearchClient()
        >>> [c.name for c in client.search("goblin")][:1]
        ['Goblin']
    """

    def __init__(
        self,
        base_url: str = "https://api.open5e.com",
        *,
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        backoff_seconds: float = 0.5,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the API.
            timeout_seconds: Per-request timeout.
            max_retries: Extra attempts after a connection error or timeout.
            backoff_seconds: Multiplier for the exponential backoff.
            session: Optional requests session (shared connection pool).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._max_retries = max_retries
        self._backoff = backoff_seconds
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> MonsterSearchClient:
        """Build a client from application settings."""
        return cls(
            settings.api.base_url,
            timeout_seconds=settings.api.timeout_seconds,
            max_retries=settings.api.max_retries,
        )

    @property
    def search_url(self) -> str:
        return f"{self._base_url}{MONSTER_SEARCH_PATH}"

    def search(self, name: str) -> list[CreatureSearchResult]:
        """Search creatures by free-text name.

        Args:
            name: Query text.

        Returns:
            Matching creature records, possibly empty.

        Raises:
            SearchRequestError: Transport failure or non-success status.
            SearchResponseError: Body is not the expected JSON envelope.
            SearchParseError: Records fail validation.
        """
        logger.info("Searching monster database", query=name)

        @retry(
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._backoff, max=8),
            reraise=True,
        )
        def _get() -> requests.Response:
            return self._session.get(
                self.search_url,
                params={"search": name},
                timeout=self._timeout,
            )

        try:
            response = _get()
        except requests.RequestException as exc:
            raise SearchRequestError(
                f"Unable to make API request: {exc}",
                query=name,
            ) from exc

        if not response.ok:
            raise SearchRequestError(
                f"Monster search failed with HTTP {response.status_code}",
                query=name,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchResponseError(
                "Unable to decode search response",
                query=name,
            ) from exc

        results = parse_search_response(payload, query=name)
        logger.info("Monster search finished", query=name, results=len(results))
        return results


__all__ = ["MonsterSearchClient"]
