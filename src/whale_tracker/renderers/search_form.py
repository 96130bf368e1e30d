"""Search form renderer: species field with autocomplete, date range, submit."""

from __future__ import annotations

from datetime import date, timedelta

from whale_tracker.renderers import SEARCH_PATH, SUGGESTIONS_PATH, render_template
from whale_tracker.schemas import DEFAULT_WINDOW_DAYS, SearchCriteria


def build_search_form_html(
    criteria: SearchCriteria,
    *,
    is_loading: bool = False,
    today: date | None = None,
) -> str:
    """Build the search form pre-filled from the current criteria.

    Unset dates show the range the search actually uses: the last 30 days.
    """
    today = today or date.today()
    date_from = criteria.date_from or today - timedelta(days=DEFAULT_WINDOW_DAYS)
    date_to = criteria.date_to or today

    return render_template(
        "search_form.html.j2",
        taxon_name=criteria.taxon_name,
        date_from=date_from.isoformat(),
        date_to=date_to.isoformat(),
        max_date=today.isoformat(),
        is_loading=is_loading,
        search_path=SEARCH_PATH,
        suggestions_path=SUGGESTIONS_PATH,
    )
