"""Detail panel for the selected sighting."""

from __future__ import annotations

from whale_tracker.renderers import render_template
from whale_tracker.schemas import QualityGrade, Sighting

_BADGE_CLASSES = {
    QualityGrade.RESEARCH: "badge-research",
    QualityGrade.NEEDS_ID: "badge-needs-id",
}


def quality_badge_class(quality_grade: str) -> str:
    """CSS class for a quality grade: green research, yellow needs-ID, grey otherwise."""
    return _BADGE_CLASSES.get(quality_grade, "badge-other")


def quality_label(quality_grade: str) -> str:
    """Display text for a quality grade, e.g. ``needs_id`` -> ``needs id``."""
    return quality_grade.replace("_", " ", 1)


def build_sighting_detail_html(sighting: Sighting | None) -> str:
    """Build the detail panel, or a prompt when nothing is selected."""
    if sighting is None:
        return render_template("sighting_detail_empty.html.j2")

    return render_template(
        "sighting_detail.html.j2",
        title=sighting.species_guess,
        photo=sighting.photo_url,
        observed_on=sighting.observed_on,
        place=sighting.place_guess,
        coordinates=f"{sighting.latitude:.5f}, {sighting.longitude:.5f}",
        observer=sighting.observer.name,
        quality=quality_label(sighting.quality_grade),
        badge_class=quality_badge_class(sighting.quality_grade),
        url=sighting.uri,
    )
