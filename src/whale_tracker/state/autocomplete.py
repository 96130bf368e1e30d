"""
Species-name autocomplete for the search form.

``SuggestionBox`` is the input session behind the species field: every
keystroke goes through ``on_input``, and a lookup is issued only after 300ms
without further input. Results for text that has since changed are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from whale_tracker.datasources.inaturalist.taxa import MIN_QUERY_LENGTH, fetch_suggestions
from whale_tracker.schemas import TaxonSuggestion
from whale_tracker.state.debounce import Debouncer

logger = logging.getLogger(__name__)

SuggestionFetcher = Callable[[str], list[TaxonSuggestion]]

DEBOUNCE_SECONDS = 0.3


class SuggestionBox:
    """Debounced suggestion lookups for one text input."""

    def __init__(
        self,
        fetch: SuggestionFetcher = fetch_suggestions,
        *,
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._fetch = fetch
        self._debouncer = Debouncer(delay)
        self._generation = 0

        self.text = ""
        self.suggestions: list[TaxonSuggestion] = []
        self.is_open = False
        self.is_loading = False

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, text: str) -> None:
        """Record new input and (re)arm the lookup timer."""
        self._generation += 1
        self.text = text

        if len(text.strip()) < MIN_QUERY_LENGTH:
            self._debouncer.cancel()
            self.suggestions = []
            self.is_open = False
            self.is_loading = False
            return

        generation = self._generation
        self._debouncer.schedule(lambda: self._refresh(generation, text))

    def choose(self, suggestion: TaxonSuggestion) -> str:
        """Fill the input from a suggestion and close the list. Returns the new text."""
        self._generation += 1
        self._debouncer.cancel()
        self.text = suggestion.display_name
        self.is_open = False
        self.is_loading = False
        return self.text

    def close(self) -> None:
        """Tear down: cancel the pending lookup and ignore any in flight."""
        self._generation += 1
        self._debouncer.cancel()
        self.is_open = False
        self.is_loading = False

    async def aclose(self) -> None:
        """Like ``close``, and also cancel a lookup that is already running."""
        self.close()
        await self._debouncer.aclose()

    async def settled(self) -> None:
        """Wait until no lookup is pending or running."""
        await self._debouncer.wait()

    async def _refresh(self, generation: int, text: str) -> None:
        self.is_loading = True
        try:
            results = await asyncio.to_thread(self._fetch, text)
        except Exception as e:
            logger.warning("Suggestion lookup for %r raised: %s", text, e)
            results = []

        if generation != self._generation:
            logger.debug("Discarding suggestions for stale input %r", text)
            return

        self.is_loading = False
        self.suggestions = results
        self.is_open = bool(results)
