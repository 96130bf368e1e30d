"""
Tests for the sighting search adapter.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from whale_tracker.datasources.inaturalist import client
from whale_tracker.datasources.inaturalist.sightings import build_search_params, fetch_sightings
from whale_tracker.schemas import SearchCriteria

SESSION_GET = "whale_tracker.datasources.inaturalist.client.session.get"

TODAY = date(2024, 3, 31)

SAMPLE_OBSERVATIONS_RESPONSE: dict = {
    "total_results": 450,
    "page": 1,
    "per_page": 200,
    "results": [
        {
            "id": 301,
            "species_guess": "Blue Whale",
            "observed_on_string": "2024-03-20",
            "geojson": {"coordinates": [-119.7, 34.1]},
            "place_guess": "Santa Barbara Channel",
            "user": {"login": "seafarer", "name": "Sam"},
            "photos": [{"url": "https://static.inaturalist.org/photos/3/square.jpeg"}],
            "uri": "https://www.inaturalist.org/observations/301",
            "quality_grade": "research",
        },
        {
            "id": 302,
            "species_guess": "Blue Whale",
            "observed_on_string": "2024-03-18",
            "user": {"login": "deckhand"},
            "uri": "https://www.inaturalist.org/observations/302",
            "quality_grade": "casual",
        },
    ],
}


def _response(payload: object, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=resp)
    return resp


class TestBuildSearchParams:
    """Tests for the criteria -> query translation."""

    def test_explicit_dates(self) -> None:
        criteria = SearchCriteria(
            taxon_name="Blue Whale",
            date_from=date(2024, 1, 1),
            date_to=date(2024, 1, 31),
            page_number=2,
        )
        params = build_search_params(criteria, TODAY)
        assert params == {
            "taxon_name": "Blue Whale",
            "d1": "2024-01-01",
            "d2": "2024-01-31",
            "per_page": 200,
            "page": 2,
            "order_by": "observed_on",
            "order": "desc",
            "return_format": "json",
        }

    def test_unset_dates_default_to_last_30_days(self) -> None:
        params = build_search_params(SearchCriteria(taxon_name="Orca"), TODAY)
        assert params["d1"] == "2024-03-01"
        assert params["d2"] == "2024-03-31"


class TestFetchSightings:
    """Tests for fetch_sightings."""

    @patch(SESSION_GET)
    def test_calls_observations_endpoint(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(SAMPLE_OBSERVATIONS_RESPONSE)

        fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

        mock_get.assert_called_once()
        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url == "https://api.inaturalist.org/v1/observations"
        assert params["taxon_name"] == "Blue Whale"
        assert params["per_page"] == 200
        assert params["page"] == 1

    @patch(SESSION_GET)
    def test_result_paging(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(SAMPLE_OBSERVATIONS_RESPONSE)

        result = fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

        assert result.total_count == 450
        assert result.page_number == 1
        assert result.page_size == 200
        assert result.page_count == 3

    @patch(SESSION_GET)
    def test_full_page_of_results(self, mock_get: MagicMock) -> None:
        """200 records on page 1 of 450 gives all 200 sightings and 3 pages."""
        record = SAMPLE_OBSERVATIONS_RESPONSE["results"][0]
        payload = {
            **SAMPLE_OBSERVATIONS_RESPONSE,
            "results": [{**record, "id": 1000 + i} for i in range(200)],
        }
        mock_get.return_value = _response(payload)

        result = fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

        assert len(result.sightings) == 200
        assert result.sightings[0].id == 1000
        assert result.sightings[-1].id == 1199
        assert result.total_count == 450
        assert result.page_count == 3
        assert result.has_next_page

    @patch(SESSION_GET)
    def test_sightings_normalized_in_order(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(SAMPLE_OBSERVATIONS_RESPONSE)

        result = fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

        assert [s.id for s in result.sightings] == [301, 302]
        first = result.sightings[0]
        assert first.location == (34.1, -119.7)
        assert first.photo_url == "https://static.inaturalist.org/photos/3/medium.jpeg"
        assert result.sightings[1].place_guess == "Unknown location"

    @patch(SESSION_GET)
    def test_missing_paging_falls_back_to_criteria(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({"total_results": 0, "results": []})

        result = fetch_sightings(SearchCriteria(taxon_name="Orca", page_number=4), today=TODAY)

        assert result.page_number == 4
        assert result.page_size == 200
        assert result.sightings == ()
        assert result.page_count == 0

    @patch(SESSION_GET)
    def test_malformed_record_dropped(self, mock_get: MagicMock) -> None:
        payload = {**SAMPLE_OBSERVATIONS_RESPONSE}
        payload["results"] = [*SAMPLE_OBSERVATIONS_RESPONSE["results"], {"species_guess": "?"}]
        mock_get.return_value = _response(payload)

        result = fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)
        assert len(result.sightings) == 2

    @patch(SESSION_GET)
    def test_http_error_propagates(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({}, status=500)

        with pytest.raises(requests.HTTPError):
            fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

    @patch(SESSION_GET)
    def test_connection_error_propagates(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("offline")

        with pytest.raises(requests.ConnectionError):
            fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

    @patch(SESSION_GET)
    def test_non_object_payload(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response([1, 2, 3])

        with pytest.raises(client.UnexpectedPayloadError):
            fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

    @patch(SESSION_GET)
    def test_missing_results_list(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({"total_results": 5})

        with pytest.raises(client.UnexpectedPayloadError):
            fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)

    @patch(SESSION_GET)
    def test_missing_total(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({"results": []})

        with pytest.raises(ValueError, match="total_results"):
            fetch_sightings(SearchCriteria(taxon_name="Blue Whale"), today=TODAY)
