"""Pure rendering functions: UI surface state -> HTML strings.

All fragment renderers follow the same pattern:
  - Input: dataclasses from ``models.py`` / ``renderers/page.py``
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O

``HtmlDashboardPage`` (``renderers/page.py``) implements every surface in
``ui.py`` in memory and assembles the fragments into one page with
``base.html.j2``.

Public API:
  - page: HtmlDashboardPage, build_forecast_html, build_city_card_html, build_suggestions_html
  - date_utils: short_day_label, temperature_range, round_half_up

Adding a fragment
-----------------
1. Create a Jinja2 template in ``templates/{name}.html.j2`` (no <html>/<body>).
2. Add a ``build_{name}_html()`` function that calls ``render_template``.
3. Pass its output to ``base.html.j2`` from ``HtmlDashboardPage.render()``.
4. Add tests asserting the returned HTML contains the expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
