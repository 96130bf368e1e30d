"""The one highlighted sighting, shared by the list, the map and the detail panel."""

from __future__ import annotations

from collections.abc import Iterable

from whale_tracker.schemas import Sighting


class SelectionState:
    """Holds the selected sighting, or nothing."""

    def __init__(self) -> None:
        self._selected: Sighting | None = None

    @property
    def selected(self) -> Sighting | None:
        return self._selected

    def select(self, sighting: Sighting | None, *, among: Iterable[Sighting] | None = None) -> None:
        """
        Make ``sighting`` the active one. ``None`` clears the selection.

        Args:
            sighting: The sighting to highlight.
            among: When given, the sighting must be one of these (matched by id).

        Raises:
            ValueError: ``sighting`` is not in ``among``.
        """
        if sighting is None:
            self.clear()
            return
        if among is not None and all(s.id != sighting.id for s in among):
            msg = f"Sighting {sighting.id} is not in the current results"
            raise ValueError(msg)
        self._selected = sighting

    def clear(self) -> None:
        self._selected = None

    def is_selected(self, sighting: Sighting) -> bool:
        return self._selected is not None and self._selected.id == sighting.id
