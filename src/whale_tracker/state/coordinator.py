"""
Search coordinator: criteria in, result state out.

A small asyncio state machine::

    Idle --criteria change--> Loading --ok--> Loaded
                                  \\--error--> Failed
    Loaded | Failed --criteria change--> Loading

Every criteria change (new search or new page) replaces the criteria, clears
the selection and the error message, and starts exactly one fetch. Fetches
are tagged with an increasing request number; when one completes, it is
applied only if no newer request has been issued since, so a slow earlier
response never overwrites a faster later one.

The adapter call is blocking (``requests``) and runs in a worker thread via
``asyncio.to_thread``. All state is read and written on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date

import requests

from whale_tracker.datasources.inaturalist.sightings import fetch_sightings
from whale_tracker.schemas import (
    SearchCriteria,
    SearchResult,
    SearchSnapshot,
    SearchStatus,
    Sighting,
)
from whale_tracker.state.selection import SelectionState

logger = logging.getLogger(__name__)

SightingFetcher = Callable[[SearchCriteria], SearchResult]

FAILED_MESSAGE = "Failed to fetch observations. Please try again."


def describe_error(exc: BaseException) -> str:
    """User-facing message for a failed search."""
    if isinstance(exc, requests.Timeout):
        return "iNaturalist took too long to respond. Please try again."
    if isinstance(exc, requests.ConnectionError):
        return "Could not connect to iNaturalist. Check your internet connection and try again."
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code if exc.response is not None else "unknown"
        return f"iNaturalist returned an error (status {status}). Please try again."
    return FAILED_MESSAGE


class SearchCoordinator:
    """Owns the search criteria, the current result and the selection."""

    def __init__(
        self,
        fetch: SightingFetcher = fetch_sightings,
        *,
        criteria: SearchCriteria | None = None,
    ) -> None:
        self._fetch = fetch
        self._criteria = criteria or SearchCriteria.default()
        self._result = SearchResult.empty(self._criteria)
        self._status = SearchStatus.IDLE
        self._error: str | None = None
        self._selection = SelectionState()

        self._request_seq = 0
        self._latest: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # -------------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------------

    @property
    def criteria(self) -> SearchCriteria:
        return self._criteria

    @property
    def result(self) -> SearchResult:
        return self._result

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def selected(self) -> Sighting | None:
        return self._selection.selected

    def snapshot(self) -> SearchSnapshot:
        """Freeze the current state for rendering."""
        return SearchSnapshot(
            criteria=self._criteria,
            result=self._result,
            status=self._status,
            error=self._error,
            selected=self._selection.selected,
        )

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task[None]:
        """Fetch the initial criteria."""
        return self._load(self._criteria)

    def submit_search(
        self,
        taxon_name: str,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> asyncio.Task[None]:
        """Search from page 1 with new criteria."""
        criteria = SearchCriteria(taxon_name=taxon_name, date_from=date_from, date_to=date_to)
        return self._load(criteria)

    def change_page(self, page_number: int) -> asyncio.Task[None]:
        """
        Fetch another page of the current search.

        Raises:
            ValueError: ``page_number`` is less than 1.
        """
        return self._load(self._criteria.with_page(page_number))

    def select(self, sighting: Sighting | None) -> None:
        self._selection.select(sighting)

    def select_by_id(self, sighting_id: int) -> Sighting:
        """
        Select a sighting of the current result by its id.

        Raises:
            KeyError: No sighting with that id in the current result.
        """
        for sighting in self._result.sightings:
            if sighting.id == sighting_id:
                self._selection.select(sighting, among=self._result.sightings)
                return sighting
        raise KeyError(sighting_id)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def wait(self) -> None:
        """Wait until the most recently issued fetch has settled."""
        while self._latest is not None and not self._latest.done():
            await asyncio.wait({self._latest})

    async def aclose(self) -> None:
        """Cancel fetches still in flight."""
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)

    def _load(self, criteria: SearchCriteria) -> asyncio.Task[None]:
        self._request_seq += 1
        seq = self._request_seq

        self._criteria = criteria
        self._selection.clear()
        self._error = None
        self._status = SearchStatus.LOADING
        logger.info(
            "Searching %r page %d (request #%d)", criteria.taxon_name, criteria.page_number, seq
        )

        task = asyncio.get_running_loop().create_task(self._run(seq, criteria))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._latest = task
        return task

    async def _run(self, seq: int, criteria: SearchCriteria) -> None:
        try:
            result = await asyncio.to_thread(self._fetch, criteria)
        except Exception as e:
            if seq != self._request_seq:
                logger.debug("Discarding failure of stale request #%d: %s", seq, e)
                return
            logger.warning("Search for %r failed: %s", criteria.taxon_name, e, exc_info=True)
            self._result = SearchResult.empty(criteria)
            self._selection.clear()
            self._error = describe_error(e)
            self._status = SearchStatus.FAILED
            return

        if seq != self._request_seq:
            logger.debug("Discarding stale response for request #%d", seq)
            return

        self._result = result
        self._status = SearchStatus.LOADED
        if self._selection.selected is None and result.sightings:
            self._selection.select(result.sightings[0])
        logger.info(
            "Loaded %d of %d sightings for %r (request #%d)",
            len(result.sightings),
            result.total_count,
            criteria.taxon_name,
            seq,
        )
