"""Paginated sightings list renderer."""

from __future__ import annotations

from whale_tracker.renderers import PAGE_PATH, SELECT_PATH, render_template
from whale_tracker.schemas import SearchSnapshot


def build_sightings_list_html(snapshot: SearchSnapshot) -> str:
    """Build the list of sightings on the current page, with prev/next links."""
    result = snapshot.result
    if not result.sightings:
        return render_template("sightings_list_empty.html.j2")

    selected_id = snapshot.selected.id if snapshot.selected else None
    rows = [
        {
            "id": s.id,
            "species": s.species_guess,
            "date": s.observed_on,
            "place": s.place_guess,
            "photo": s.photo_url,
            "selected": s.id == selected_id,
        }
        for s in result.sightings
    ]

    return render_template(
        "sightings_list.html.j2",
        total=result.total_count,
        rows=rows,
        page=result.page_number,
        page_count=result.page_count,
        has_previous=result.has_previous_page,
        has_next=result.has_next_page,
        page_path=PAGE_PATH,
        select_path=SELECT_PATH,
    )
