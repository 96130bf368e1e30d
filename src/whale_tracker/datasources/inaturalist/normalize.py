"""
Record normalizer: raw iNaturalist JSON -> ``Sighting`` / ``TaxonSuggestion``.

Pure transformation, no I/O. The API is loosely typed, so missing optional
fields get fixed defaults here instead of errors:

  - no ``geojson.coordinates``  -> location ``(0, 0)``
  - no ``place_guess``          -> ``"Unknown location"``
  - no ``user.name``            -> the user's login
  - no ``photos``               -> empty tuple

Coordinates arrive as GeoJSON ``[longitude, latitude]`` and are stored as
``(latitude, longitude)``. Only a record that is not an object, or that has no
integer ``id``, is malformed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from whale_tracker.schemas import (
    UNKNOWN_LOCATION,
    Observer,
    Photo,
    Sighting,
    TaxonSuggestion,
)

logger = logging.getLogger(__name__)


class MalformedRecordError(ValueError):
    """A raw record cannot become a model: not an object, or no usable ``id``."""


# =============================================================================
# Field helpers
# =============================================================================


def _require_id(raw: Any, kind: str) -> int:
    if not isinstance(raw, Mapping):
        msg = f"{kind} record is not an object: {type(raw).__name__}"
        raise MalformedRecordError(msg)
    record_id = raw.get("id")
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        msg = f"{kind} record has no integer id: {record_id!r}"
        raise MalformedRecordError(msg)
    return record_id


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return _text(value)


def _location(geojson: Any) -> tuple[float, float]:
    """GeoJSON point ``[lon, lat]`` -> ``(lat, lon)``; ``(0, 0)`` when absent."""
    coordinates = geojson.get("coordinates") if isinstance(geojson, Mapping) else None
    if (
        not isinstance(coordinates, Sequence)
        or isinstance(coordinates, str)
        or len(coordinates) < 2
    ):
        return (0.0, 0.0)
    try:
        return (float(coordinates[1] or 0), float(coordinates[0] or 0))
    except (TypeError, ValueError):
        return (0.0, 0.0)


def _observer(user: Any) -> Observer:
    if not isinstance(user, Mapping):
        user = {}
    login = _text(user.get("login"))
    return Observer(login=login, name=_text(user.get("name")) or login)


def medium_photo_url(url: str) -> str:
    """Swap the first ``square`` thumbnail marker in a photo URL for ``medium``."""
    return url.replace("square", "medium", 1)


def _photos(photos: Any) -> tuple[Photo, ...]:
    if not isinstance(photos, Sequence) or isinstance(photos, str):
        return ()
    return tuple(
        Photo(url=medium_photo_url(p["url"]))
        for p in photos
        if isinstance(p, Mapping) and isinstance(p.get("url"), str)
    )


# =============================================================================
# Records
# =============================================================================


def normalize_sighting(raw: Any) -> Sighting:
    """Turn one ``/observations`` result into a ``Sighting``."""
    sighting_id = _require_id(raw, "sighting")
    return Sighting(
        id=sighting_id,
        species_guess=_text(raw.get("species_guess")),
        observed_on=_text(raw.get("observed_on_string")),
        location=_location(raw.get("geojson")),
        place_guess=_text(raw.get("place_guess")) or UNKNOWN_LOCATION,
        observer=_observer(raw.get("user")),
        photos=_photos(raw.get("photos")),
        uri=_text(raw.get("uri")),
        quality_grade=_text(raw.get("quality_grade")),
    )


def normalize_taxon_suggestion(raw: Any) -> TaxonSuggestion:
    """Project one ``/taxa/autocomplete`` result onto ``TaxonSuggestion``."""
    taxon_id = _require_id(raw, "taxon")
    return TaxonSuggestion(
        id=taxon_id,
        name=_text(raw.get("name")),
        matched_term=_optional_text(raw.get("matched_term")),
        preferred_common_name=_optional_text(raw.get("preferred_common_name")),
        rank=_optional_text(raw.get("rank")),
        iconic_taxon_name=_optional_text(raw.get("iconic_taxon_name")),
    )


def normalize_sightings(raws: Iterable[Any]) -> list[Sighting]:
    """Normalize a batch in source order, dropping malformed records."""
    sightings: list[Sighting] = []
    for raw in raws:
        try:
            sightings.append(normalize_sighting(raw))
        except MalformedRecordError as e:
            logger.warning("Skipping malformed sighting: %s", e)
    return sightings


def normalize_taxon_suggestions(raws: Iterable[Any]) -> list[TaxonSuggestion]:
    """Normalize autocomplete results in source order, dropping malformed ones."""
    suggestions: list[TaxonSuggestion] = []
    for raw in raws:
        try:
            suggestions.append(normalize_taxon_suggestion(raw))
        except MalformedRecordError as e:
            logger.warning("Skipping malformed taxon suggestion: %s", e)
    return suggestions
