"""
iNaturalist API client.

Low-level HTTP access to the iNaturalist API v1. This module owns the base
URL, the endpoint names and the JSON decoding; ``sightings`` and ``taxa``
build the query parameters and hand the payloads to ``normalize``.

API docs: https://api.inaturalist.org/v1/docs/
"""

from __future__ import annotations

import logging
from typing import Any

from whale_tracker.services.http import session

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# API configuration
# ---------------------------------------------------------------------------
API_BASE = "https://api.inaturalist.org/v1"
OBSERVATIONS_ENDPOINT = "observations"
AUTOCOMPLETE_ENDPOINT = "taxa/autocomplete"
AUTOCOMPLETE_LIMIT = 10  # suggestions per lookup


class UnexpectedPayloadError(ValueError):
    """The API answered with JSON that does not have the expected shape."""


def _get(endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Make a GET request to the iNaturalist API v1 and decode the JSON object."""
    url = f"{API_BASE}/{endpoint}"
    logger.debug("GET %s params=%s", url, params)
    resp = session.get(url, params=params or {})
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        msg = f"Expected a JSON object from /{endpoint}, got {type(data).__name__}"
        raise UnexpectedPayloadError(msg)
    return data


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def get_observations(params: dict[str, Any]) -> dict[str, Any]:
    """GET /observations - search observations."""
    return _get(OBSERVATIONS_ENDPOINT, params)


def get_taxa_autocomplete(params: dict[str, Any]) -> dict[str, Any]:
    """GET /taxa/autocomplete - taxa whose names match a partial query."""
    return _get(AUTOCOMPLETE_ENDPOINT, params)
