"""Leaflet map renderer for sightings.

Generates an interactive world map with one marker per sighting. Each marker
carries structured data so the JS template can build its popup, and clicking
a marker selects that sighting.
"""

from __future__ import annotations

from typing import Any

from whale_tracker.renderers import SELECT_PATH, render_template
from whale_tracker.renderers.markers import icon_for, map_center
from whale_tracker.schemas import SearchSnapshot, Sighting

DEFAULT_ZOOM = 3
TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


def _marker(sighting: Sighting, is_selected: bool) -> dict[str, Any]:
    return {
        "id": sighting.id,
        "lat": sighting.latitude,
        "lon": sighting.longitude,
        "name": sighting.species_guess,
        "date": sighting.observed_on,
        "place": sighting.place_guess,
        "observer": sighting.observer.name,
        "photo": sighting.photo_url or "",
        "url": sighting.uri,
        "selected": is_selected,
        "icon": icon_for(sighting, is_selected).to_leaflet(),
    }


def build_sightings_map_html(snapshot: SearchSnapshot) -> tuple[str, str]:
    """Build an interactive Leaflet map of the current page of sightings.

    Returns a (map_div_html, map_script_js) tuple. The script is empty when
    there is nothing to plot.
    """
    sightings = snapshot.result.sightings
    if not sightings:
        return (
            '<div class="map-empty"><p>No observations to display on the map</p></div>',
            "",
        )

    selected_id = snapshot.selected.id if snapshot.selected else None
    markers = [_marker(s, s.id == selected_id) for s in sightings]
    lat, lon = map_center(sightings)

    map_div = render_template("sightings_map.html.j2", obs_count=len(sightings))
    map_script = render_template(
        "sightings_map_script.html.j2",
        markers=markers,
        center=[lat, lon],
        zoom=DEFAULT_ZOOM,
        tile_url=TILE_URL,
        tile_attribution=TILE_ATTRIBUTION,
        select_path=SELECT_PATH,
    )
    return (map_div, map_script)
