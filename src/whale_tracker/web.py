"""
FastAPI app serving the single-page sighting browser.

One coordinator and one suggestion box live on ``app.state`` for the local
single-user session. Actions are plain GET links and forms that mutate that
state and redirect back to ``/``, which waits for the current fetch and
renders the whole page from one snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from whale_tracker import __version__
from whale_tracker.config import Settings, get_settings
from whale_tracker.datasources import inaturalist
from whale_tracker.renderers.page import build_page_html
from whale_tracker.state.autocomplete import SuggestionBox, SuggestionFetcher
from whale_tracker.state.coordinator import SearchCoordinator, SightingFetcher

logger = logging.getLogger(__name__)


def _parse_date(value: str, field: str) -> date | None:
    """Form date field to a date. Empty means unset."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {value!r}") from None


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def get_coordinator(request: Request) -> SearchCoordinator:
    """Return the session's search coordinator."""
    return request.app.state.coordinator


def get_suggestion_box(request: Request) -> SuggestionBox:
    """Return the session's species autocomplete box."""
    return request.app.state.suggestion_box


def create_app(
    *,
    fetch_sightings: SightingFetcher | None = None,
    fetch_suggestions: SuggestionFetcher | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the web app.

    Args:
        fetch_sightings: Search adapter, defaults to the iNaturalist one.
        fetch_suggestions: Autocomplete adapter, defaults to the iNaturalist one.
        settings: Defaults to ``get_settings()``.
    """
    settings = settings or get_settings()
    sightings_fetcher = fetch_sightings or inaturalist.fetch_sightings
    suggestions_fetcher = fetch_suggestions or inaturalist.fetch_suggestions

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        coordinator = SearchCoordinator(sightings_fetcher)
        box = SuggestionBox(suggestions_fetcher)
        app.state.coordinator = coordinator
        app.state.suggestion_box = box
        coordinator.start()
        logger.info("%s started", settings.app_name)
        try:
            yield
        finally:
            await box.aclose()
            await coordinator.aclose()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
    )
    app.state.settings = settings

    @app.get("/", response_class=HTMLResponse)
    async def index(
        coordinator: SearchCoordinator = Depends(get_coordinator),  # noqa: B008
    ) -> HTMLResponse:
        """Render the page once the current fetch has settled."""
        await coordinator.wait()
        return HTMLResponse(build_page_html(coordinator.snapshot(), app_name=settings.app_name))

    @app.get("/search")
    async def search(
        taxon_name: str = "",
        date_from: str = "",
        date_to: str = "",
        coordinator: SearchCoordinator = Depends(get_coordinator),  # noqa: B008
    ) -> RedirectResponse:
        """Start a new search from page 1."""
        taxon_name = taxon_name.strip()
        if not taxon_name:
            raise HTTPException(status_code=400, detail="Species name is required")
        start = _parse_date(date_from, "date_from")
        end = _parse_date(date_to, "date_to")
        try:
            coordinator.submit_search(taxon_name, start, end)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None
        return _back_home()

    @app.get("/page/{page_number}")
    async def change_page(
        page_number: int,
        coordinator: SearchCoordinator = Depends(get_coordinator),  # noqa: B008
    ) -> RedirectResponse:
        """Fetch another page of the current search."""
        try:
            coordinator.change_page(page_number)
        except ValidationError:
            raise HTTPException(
                status_code=400, detail=f"Invalid page number: {page_number}"
            ) from None
        return _back_home()

    @app.get("/select/{sighting_id}")
    async def select(
        sighting_id: int,
        coordinator: SearchCoordinator = Depends(get_coordinator),  # noqa: B008
    ) -> RedirectResponse:
        """Select a sighting from the current page."""
        await coordinator.wait()
        try:
            coordinator.select_by_id(sighting_id)
        except KeyError:
            raise HTTPException(
                status_code=404, detail=f"No sighting {sighting_id} on this page"
            ) from None
        return _back_home()

    @app.get("/api/state")
    async def state(
        coordinator: SearchCoordinator = Depends(get_coordinator),  # noqa: B008
    ) -> dict[str, Any]:
        """Current search state as JSON."""
        snapshot = coordinator.snapshot()
        data = snapshot.model_dump(mode="json")
        data["page_count"] = snapshot.result.page_count
        return data

    @app.get("/api/suggestions")
    async def suggestions(
        q: str = "",
        box: SuggestionBox = Depends(get_suggestion_box),  # noqa: B008
    ) -> dict[str, Any]:
        """Debounced species suggestions for the text typed so far.

        ``query`` echoes the text the results belong to, so the page can
        ignore answers to input it has since replaced.
        """
        box.on_input(q)
        await box.settled()
        return {
            "query": box.text,
            "results": [s.model_dump() for s in box.suggestions],
        }

    return app
