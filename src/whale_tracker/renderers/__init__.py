"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: a ``SearchSnapshot`` or schema model (from state/)
  - Output: str (HTML fragment, not a full page, except ``page``)
  - No side effects, no I/O

Public API:
  - markers: IconRef, icon_for, map_center
  - sightings_map: build_sightings_map_html
  - sightings_list: build_sightings_list_html
  - sighting_detail: build_sighting_detail_html
  - search_form: build_search_form_html
  - page: build_page_html (composes the single page)

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function that prepares plain
   values and calls ``render_template("{name}.html.j2", ...)``.
2. Create the Jinja2 template in ``templates/{name}.html.j2``. Fragments have
   no <html>/<body> tags; CSS lives in ``templates/base.html.j2``.
3. Wire it into ``page.build_page_html`` and add a placeholder in
   ``base.html.j2``.
4. Add tests: call the build function with sample data and assert the HTML
   contains the expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# URL paths the rendered page links to; web.py serves them.
SEARCH_PATH = "/search"
PAGE_PATH = "/page/"
SELECT_PATH = "/select/"
SUGGESTIONS_PATH = "/api/suggestions"

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
