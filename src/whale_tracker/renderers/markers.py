"""Map marker icons and centering.

Icons are chosen per marker at render time from immutable ``IconRef``
values; nothing is registered as a global Leaflet default.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from whale_tracker.schemas import Sighting

LEAFLET_IMAGES = "https://unpkg.com/leaflet@1.9.4/dist/images"


@dataclass(frozen=True)
class IconRef:
    """Leaflet icon options for one marker."""

    icon_url: str
    shadow_url: str
    icon_size: tuple[int, int]
    icon_anchor: tuple[int, int]
    popup_anchor: tuple[int, int]
    shadow_size: tuple[int, int]
    class_name: str = ""

    def to_leaflet(self) -> dict[str, Any]:
        """Options object for ``L.icon(...)``."""
        return {
            "iconUrl": self.icon_url,
            "shadowUrl": self.shadow_url,
            "iconSize": list(self.icon_size),
            "iconAnchor": list(self.icon_anchor),
            "popupAnchor": list(self.popup_anchor),
            "shadowSize": list(self.shadow_size),
            "className": self.class_name,
        }


DEFAULT_ICON = IconRef(
    icon_url=f"{LEAFLET_IMAGES}/marker-icon.png",
    shadow_url=f"{LEAFLET_IMAGES}/marker-shadow.png",
    icon_size=(25, 41),
    icon_anchor=(12, 41),
    popup_anchor=(1, -34),
    shadow_size=(41, 41),
)

# Larger, so the selected sighting stands out
SELECTED_ICON = IconRef(
    icon_url=f"{LEAFLET_IMAGES}/marker-icon.png",
    shadow_url=f"{LEAFLET_IMAGES}/marker-shadow.png",
    icon_size=(35, 51),
    icon_anchor=(17, 51),
    popup_anchor=(1, -34),
    shadow_size=(41, 41),
)


def icon_for(sighting: Sighting, is_selected: bool) -> IconRef:
    """Icon for one sighting's marker, tagged with its quality grade for CSS."""
    base = SELECTED_ICON if is_selected else DEFAULT_ICON
    css = ["marker", f"marker-{sighting.quality_grade or 'unknown'}"]
    if is_selected:
        css.append("marker-selected")
    return replace(base, class_name=" ".join(css))


def map_center(sightings: Sequence[Sighting]) -> tuple[float, float]:
    """Mean latitude and longitude of the sightings; ``(0, 0)`` when there are none."""
    if not sightings:
        return (0.0, 0.0)
    lat = sum(s.latitude for s in sightings) / len(sightings)
    lon = sum(s.longitude for s in sightings) / len(sightings)
    return (lat, lon)
