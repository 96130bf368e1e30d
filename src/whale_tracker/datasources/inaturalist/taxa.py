"""Species-name autocomplete via ``/taxa/autocomplete``.

Autocomplete is a convenience, so failures never reach the search form as
errors: they are logged, handed to the optional ``on_error`` callback, and
the lookup yields no suggestions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import requests

from whale_tracker.datasources.inaturalist import client
from whale_tracker.datasources.inaturalist.normalize import normalize_taxon_suggestions
from whale_tracker.schemas import TaxonSuggestion

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2  # shorter input doesn't hit the network


def fetch_suggestions(
    query: str,
    *,
    on_error: Callable[[Exception], None] | None = None,
) -> list[TaxonSuggestion]:
    """
    Look up taxa matching a partial species name.

    Args:
        query: Text typed so far. Fewer than 2 non-blank characters returns
            ``[]`` without a request.
        on_error: Called with the exception when the lookup fails.

    Returns:
        Up to 10 suggestions in the API's relevance order.
    """
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    params = {
        "q": query,
        "per_page": client.AUTOCOMPLETE_LIMIT,
        "order_by": "default",
    }
    try:
        data = client.get_taxa_autocomplete(params)
        results = data.get("results")
        if not isinstance(results, list):
            msg = "autocomplete response has no 'results' list"
            raise client.UnexpectedPayloadError(msg)
    except (requests.RequestException, ValueError) as e:
        logger.warning("Suggestion lookup failed for %r: %s", query, e)
        if on_error is not None:
            on_error(e)
        return []

    return normalize_taxon_suggestions(results)
