"""Sighting search: ``SearchCriteria`` -> ``/observations`` query -> ``SearchResult``."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from whale_tracker.datasources.inaturalist import client
from whale_tracker.datasources.inaturalist.normalize import normalize_sightings
from whale_tracker.schemas import DEFAULT_WINDOW_DAYS, SearchCriteria, SearchResult

DATE_FORMAT = "%Y-%m-%d"

# Newest observations first, plain JSON.
FIXED_PARAMS: dict[str, str] = {
    "order_by": "observed_on",
    "order": "desc",
    "return_format": "json",
}


def build_search_params(criteria: SearchCriteria, today: date | None = None) -> dict[str, Any]:
    """
    Translate criteria into ``/observations`` query parameters.

    An unset ``date_from`` means 30 days before today and an unset ``date_to``
    means today.
    """
    today = today or date.today()
    date_from = criteria.date_from or today - timedelta(days=DEFAULT_WINDOW_DAYS)
    date_to = criteria.date_to or today

    return {
        "taxon_name": criteria.taxon_name,
        "d1": date_from.strftime(DATE_FORMAT),
        "d2": date_to.strftime(DATE_FORMAT),
        "per_page": criteria.page_size,
        "page": criteria.page_number,
        **FIXED_PARAMS,
    }


def _int_or(value: Any, fallback: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return fallback


def fetch_sightings(criteria: SearchCriteria, *, today: date | None = None) -> SearchResult:
    """
    Fetch one page of sightings matching the criteria.

    Args:
        criteria: Taxon name, date range and page to fetch.
        today: Reference date for the default date range (defaults to today).

    Returns:
        SearchResult with the sightings in source order (newest first).

    Raises:
        requests.RequestException: Transport or HTTP status failure.
        ValueError: Undecodable JSON or an unexpected payload shape.
    """
    data = client.get_observations(build_search_params(criteria, today))

    results = data.get("results")
    total = data.get("total_results")
    if not isinstance(results, list):
        msg = "observations response has no 'results' list"
        raise client.UnexpectedPayloadError(msg)
    if isinstance(total, bool) or not isinstance(total, int):
        msg = f"observations response has no integer 'total_results': {total!r}"
        raise client.UnexpectedPayloadError(msg)

    return SearchResult(
        total_count=total,
        page_number=_int_or(data.get("page"), criteria.page_number),
        page_size=_int_or(data.get("per_page"), criteria.page_size),
        sightings=tuple(normalize_sightings(results)),
    )
