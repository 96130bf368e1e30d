"""
Domain models for the whale tracker.

Pydantic models for sighting data from iNaturalist and for the search state
shared by the coordinator and the renderers. The datasource normalizes API
responses to these; every model is frozen, so state changes replace whole
objects instead of mutating fields.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

PAGE_SIZE = 200  # fixed for the whole session, not user-configurable
DEFAULT_TAXON_NAME = "Humpback Whale"
DEFAULT_WINDOW_DAYS = 30
UNKNOWN_LOCATION = "Unknown location"


# =============================================================================
# Sightings
# =============================================================================


class QualityGrade(StrEnum):
    """Observation verification level."""

    RESEARCH = "research"
    NEEDS_ID = "needs_id"
    CASUAL = "casual"


class Observer(BaseModel):
    """The iNaturalist user who recorded a sighting."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str


class Photo(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class Sighting(BaseModel):
    """A single wildlife observation record, normalized from iNaturalist."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="iNaturalist observation ID")
    species_guess: str = ""
    observed_on: str = Field(default="", description="Display string, as formatted by the source")
    location: tuple[float, float] = Field(
        default=(0.0, 0.0), description="(latitude, longitude)"
    )
    place_guess: str = UNKNOWN_LOCATION
    observer: Observer
    photos: tuple[Photo, ...] = ()
    uri: str = ""
    quality_grade: str = ""

    @property
    def latitude(self) -> float:
        return self.location[0]

    @property
    def longitude(self) -> float:
        return self.location[1]

    @property
    def photo_url(self) -> str | None:
        """URL of the first photo, if any."""
        return self.photos[0].url if self.photos else None


# =============================================================================
# Taxonomy
# =============================================================================


class TaxonSuggestion(BaseModel):
    """An autocomplete match for a species name. Never persisted."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""
    matched_term: str | None = None
    preferred_common_name: str | None = None
    rank: str | None = None
    iconic_taxon_name: str | None = None

    @property
    def display_name(self) -> str:
        """Common name if the source has one, else the scientific name."""
        return self.preferred_common_name or self.name


# =============================================================================
# Search state
# =============================================================================


class SearchStatus(StrEnum):
    """Lifecycle of the current search."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class SearchCriteria(BaseModel):
    """User-controlled search parameters. Replaced wholesale on every action."""

    model_config = ConfigDict(frozen=True)

    taxon_name: str
    date_from: date | None = None
    date_to: date | None = None
    page_size: int = PAGE_SIZE
    page_number: int = Field(default=1, ge=1)

    @field_validator("page_size")
    @classmethod
    def _fixed_page_size(cls, value: int) -> int:
        if value != PAGE_SIZE:
            msg = f"page_size is fixed at {PAGE_SIZE}, got {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def default(cls, today: date | None = None) -> SearchCriteria:
        """Session defaults: Humpback Whale over the trailing 30 days, page 1."""
        today = today or date.today()
        return cls(
            taxon_name=DEFAULT_TAXON_NAME,
            date_from=today - timedelta(days=DEFAULT_WINDOW_DAYS),
            date_to=today,
        )

    def with_page(self, page_number: int) -> SearchCriteria:
        """Same taxon and dates on another page. Validates ``page_number``."""
        return SearchCriteria(
            taxon_name=self.taxon_name,
            date_from=self.date_from,
            date_to=self.date_to,
            page_number=page_number,
        )


class SearchResult(BaseModel):
    """One page of sightings plus the source's total count."""

    model_config = ConfigDict(frozen=True)

    total_count: int = 0
    page_number: int = 1
    page_size: int = PAGE_SIZE
    sightings: tuple[Sighting, ...] = ()

    @classmethod
    def empty(cls, criteria: SearchCriteria | None = None) -> SearchResult:
        """Empty result, optionally positioned on the criteria's page."""
        if criteria is None:
            return cls()
        return cls(page_number=criteria.page_number, page_size=criteria.page_size)

    @property
    def page_count(self) -> int:
        """Number of pages the total count spans."""
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.page_count


class SearchSnapshot(BaseModel):
    """Everything the presentation components read, captured at one instant."""

    model_config = ConfigDict(frozen=True)

    criteria: SearchCriteria
    result: SearchResult
    status: SearchStatus = SearchStatus.IDLE
    error: str | None = None
    selected: Sighting | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == SearchStatus.LOADING
