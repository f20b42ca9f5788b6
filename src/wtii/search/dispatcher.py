"""Background execution of creature searches.

The UI thread submits a query and keeps rendering; a daemon worker
thread runs the search and drops the outcome into a queue the UI polls. Each request
is tagged with a monotonically increasing sequence number and only the
latest one is ever delivered. Older outcomes are discarded when they
arrive, whatever their content.

Workers are daemon threads so a request stuck on the network never keeps
the process alive after the UI exits; its outcome is simply abandoned.
"""

from __future__ import annotations

import itertools
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass, field

from wtii.core.exceptions import SearchError
from wtii.core.logging import get_logger
from wtii.models.search import CreatureSearchResult


logger = get_logger(__name__)

SearchFunction = Callable[[str], list[CreatureSearchResult]]


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search request.

    Attributes:
        sequence: Sequence number the request was issued with.
        query: The query text.
        results: Matching records (empty on failure).
        error: The failure, if the search did not succeed.
    """

    sequence: int
    query: str
    results: list[CreatureSearchResult] = field(default_factory=list)
    error: SearchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchDispatcher:
    """Run searches off the UI thread and hand back the latest outcome."""

    def __init__(
        self,
        search_fn: SearchFunction,
        *,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            search_fn: Blocking search call, e.g. MonsterSearchClient.search.
            executor: Executor to run searches on. By default each search
                gets its own daemon thread.
        """
        self._search_fn = search_fn
        self._executor = executor
        self._closed = False
        self._outcomes: queue.Queue[SearchOutcome] = queue.Queue()
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()
        self._latest = 0
        self._delivered = 0

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the most recently issued request (0 if none)."""
        return self._latest

    @property
    def pending(self) -> bool:
        """Whether the latest request has not been delivered yet."""
        return self._latest > self._delivered

    def submit(self, query: str) -> int:
        """Start a search, superseding any request still in flight.

        Returns:
            The request's sequence number.

        Raises:
            RuntimeError: If the dispatcher has been shut down.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Search dispatcher is shut down")
            sequence = next(self._sequence)
            self._latest = sequence
        logger.info("Search submitted", query=query, sequence=sequence)
        if self._executor is None:
            threading.Thread(
                target=self._run,
                args=(sequence, query),
                name=f"wtii-search-{sequence}",
                daemon=True,
            ).start()
        else:
            self._executor.submit(self._run, sequence, query)
        return sequence

    def _run(self, sequence: int, query: str) -> None:
        try:
            outcome = SearchOutcome(sequence, query, results=self._search_fn(query))
        except SearchError as exc:
            logger.warning("Search failed", query=query, sequence=sequence, error=str(exc))
            outcome = SearchOutcome(sequence, query, error=exc)
        except Exception as exc:
            logger.exception("Unexpected search failure", query=query, sequence=sequence)
            outcome = SearchOutcome(
                sequence,
                query,
                error=SearchError(f"Unexpected error: {exc}", query=query),
            )
        self._outcomes.put(outcome)

    def poll(self, *, block: bool = False, timeout: float | None = None) -> SearchOutcome | None:
        """Collect the outcome of the latest request, if it has arrived.

        Stale outcomes found along the way are discarded.

        Args:
            block: Wait for the first queued outcome instead of returning
                immediately. Only meant for tests and scripts.
            timeout: Maximum wait when blocking.

        Returns:
            The latest outcome, or None if it has not arrived.
        """
        latest: SearchOutcome | None = None
        wait = block
        while True:
            try:
                outcome = self._outcomes.get(block=wait, timeout=timeout if wait else None)
            except queue.Empty:
                break
            wait = False
            if outcome.sequence != self._latest:
                logger.debug(
                    "Discarding stale search result",
                    query=outcome.query,
                    sequence=outcome.sequence,
                    latest=self._latest,
                )
                continue
            latest = outcome

        if latest is not None:
            self._delivered = latest.sequence
        return latest

    def shutdown(self) -> None:
        """Stop accepting searches without waiting for in-flight ones.

        Requests still running on daemon threads are abandoned and do not
        delay interpreter exit. A borrowed executor is left to its owner.
        """
        with self._lock:
            self._closed = True
        logger.debug("Search dispatcher shut down")


__all__ = [
    "SearchFunction",
    "SearchOutcome",
    "SearchDispatcher",
]
