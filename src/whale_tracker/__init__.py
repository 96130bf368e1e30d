"""Whale Tracker - browse iNaturalist wildlife sightings on a map and a list.

Architecture::

    datasources/   iNaturalist API client, record normalizer, fetch functions
    state/         Search coordinator, selection, debounced autocomplete (asyncio)
    renderers/     Pure data -> HTML (map, list, detail panel, search form, page)
    services/      Shared utilities (HTTP session)
    web.py         FastAPI app serving the single page
    cli.py         Command-line entry point (search, suggest, serve)

Data flow: search form -> state.coordinator -> datasources (fetch + normalize)
-> SearchSnapshot -> renderers -> page. Clicking a list row or map marker
updates the one shared selection and the page re-renders from the snapshot.
"""

__version__ = "0.1.0"

from whale_tracker.config import Settings
from whale_tracker.schemas import SearchCriteria, SearchResult, Sighting

__all__ = ["SearchCriteria", "SearchResult", "Settings", "Sighting", "__version__"]
