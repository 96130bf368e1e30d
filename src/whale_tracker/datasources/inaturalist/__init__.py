"""iNaturalist sighting data source.

Public API:
  - client: Low-level HTTP (base URL, endpoints, JSON decoding)
  - normalize: raw JSON -> Sighting / TaxonSuggestion
  - sightings: build_search_params, fetch_sightings
  - taxa: fetch_suggestions (autocomplete, never raises on network errors)
"""

from whale_tracker.datasources.inaturalist.client import UnexpectedPayloadError
from whale_tracker.datasources.inaturalist.normalize import (
    MalformedRecordError,
    normalize_sighting,
    normalize_sightings,
    normalize_taxon_suggestion,
)
from whale_tracker.datasources.inaturalist.sightings import build_search_params, fetch_sightings
from whale_tracker.datasources.inaturalist.taxa import fetch_suggestions

__all__ = [
    "MalformedRecordError",
    "UnexpectedPayloadError",
    "build_search_params",
    "fetch_sightings",
    "fetch_suggestions",
    "normalize_sighting",
    "normalize_sightings",
    "normalize_taxon_suggestion",
]
