"""Session state, driven by one asyncio event loop.

  - coordinator: SearchCoordinator (criteria -> fetch -> result, stale-response guard)
  - selection: SelectionState (the one highlighted sighting)
  - debounce: Debouncer (cancellable delayed call)
  - autocomplete: SuggestionBox (debounced species-name lookups)
"""

from whale_tracker.state.autocomplete import SuggestionBox
from whale_tracker.state.coordinator import SearchCoordinator, describe_error
from whale_tracker.state.debounce import Debouncer
from whale_tracker.state.selection import SelectionState

__all__ = ["Debouncer", "SearchCoordinator", "SelectionState", "SuggestionBox", "describe_error"]
