from __future__ import annotations

from collections.abc import Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined
from markupsafe import Markup

from ..models.catalog_item import CatalogItem
from ..models.config_models import DEFAULT_CURRENCY, SiteConfig
from ..models.gallery_state import GalleryState

"""Catalog rendering: CatalogItem -> HTML fragments.

All output goes through a Jinja2 environment with autoescape enabled, so
every text field (name, notes, prices, availability) is HTML-escaped and the
image list is embedded with ``tojson``. Rendering is pure: identical input
yields identical markup.
"""

__all__ = [
    "LOAD_ERROR_HEADLINE",
    "LOAD_ERROR_HINT",
    "render_card",
    "render_all",
    "render_error",
    "render_page",
]

LOAD_ERROR_HEADLINE = "Unable to load products."
LOAD_ERROR_HINT = "Please refresh the page or contact us via WhatsApp."

_env = Environment(
    loader=PackageLoader("moving_sale", "templates"),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


def render_card(item: CatalogItem, currency: str = DEFAULT_CURRENCY, card_id: int = 0) -> str:
    """Render one item card.

    Cards with zero or one image get the ``single-image`` marker and no
    navigation buttons; zero images omit the image region entirely.
    """
    gallery = GalleryState.from_images(item.images)
    return _env.get_template("card.html.j2").render(
        item=item, gallery=gallery, currency=currency, card_id=card_id
    )


def render_all(items: Iterable[CatalogItem], currency: str = DEFAULT_CURRENCY) -> str:
    """Concatenate the cards of all items; ``data-card`` follows input order."""
    return "".join(render_card(item, currency, card_id=i) for i, item in enumerate(items))


def render_error() -> str:
    """Fixed user-facing message shown in place of the grid when loading fails."""
    return _env.get_template("error.html.j2").render(
        headline=LOAD_ERROR_HEADLINE, hint=LOAD_ERROR_HINT
    )


def render_page(grid_html: str, site: SiteConfig) -> str:
    """Wrap an already rendered grid (cards or error message) into the page."""
    return _env.get_template("page.html.j2").render(grid=Markup(grid_html), site=site)
