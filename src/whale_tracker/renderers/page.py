"""Full single-page renderer: composes form, list, map and detail panel."""

from __future__ import annotations

from datetime import date

from whale_tracker.renderers import render_template
from whale_tracker.renderers.search_form import build_search_form_html
from whale_tracker.renderers.sighting_detail import build_sighting_detail_html
from whale_tracker.renderers.sightings_list import build_sightings_list_html
from whale_tracker.renderers.sightings_map import build_sightings_map_html
from whale_tracker.schemas import SearchSnapshot


def build_page_html(
    snapshot: SearchSnapshot,
    *,
    app_name: str = "iNaturalist Whale Tracker",
    today: date | None = None,
) -> str:
    """Render the whole page from one snapshot so every panel agrees."""
    map_div, map_script = build_sightings_map_html(snapshot)

    return render_template(
        "base.html.j2",
        app_name=app_name,
        is_loading=snapshot.is_loading,
        error=snapshot.error,
        search_form_html=build_search_form_html(
            snapshot.criteria, is_loading=snapshot.is_loading, today=today
        ),
        sightings_list_html=build_sightings_list_html(snapshot),
        map_html=map_div,
        map_script=map_script,
        detail_html=build_sighting_detail_html(snapshot.selected),
    )
