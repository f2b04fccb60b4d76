from __future__ import annotations

import logging
import time
from pathlib import Path

from ..csvsource.reader import SourceUnavailableError, parse_csv, read_source
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.catalog_item import CatalogItem
from ..models.config_models import DEFAULT_IMAGE_PREFIX, SiteConfig
from ..models.processing_result import BuildResult
from .gallery import GalleryController
from .normalize import normalize_item
from .render import render_all, render_error, render_page

"""Build service: CSV source -> rendered catalog page.

Flow: read source -> parse_csv -> normalize_item -> render_all -> render_page.
A source that cannot be loaded is the only user-visible failure: the items
grid is replaced with the fixed error message and the run continues.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "BuildError",
    "build_catalog",
    "build_controller",
    "render_catalog",
    "build_site",
]


class BuildError(Exception):
    """Raised when the page cannot be written."""


def build_catalog(text: str, image_prefix: str = DEFAULT_IMAGE_PREFIX) -> list[CatalogItem]:
    """Parse CSV text and normalize every row (pure, no I/O)."""
    return [normalize_item(row, image_prefix) for row in parse_csv(text)]


def build_controller(items: list[CatalogItem], swipe_threshold: int) -> GalleryController:
    """Controller for a rendered grid; card indices match ``data-card``."""
    return GalleryController([item.images for item in items], swipe_threshold=swipe_threshold)


def render_catalog(config: SiteConfig, errors: ErrorLogBuffer | None = None) -> tuple[str, list[CatalogItem] | None]:
    """Render the page HTML.

    Returns:
        (page html, items) where items is None when the error message was rendered
    """
    source = Path(config.source_csv)
    try:
        text = read_source(source)
    except SourceUnavailableError as e:
        logger.error(f"load: {e}")
        if errors is not None:
            errors.append(ErrorRecord.create(str(source), "load", "SOURCE_UNAVAILABLE", str(e)))
        return render_page(render_error(), config), None

    items = build_catalog(text, config.image_prefix)
    logger.debug(f"parsed {len(items)} items from {source}")
    return render_page(render_all(items, config.currency), config), items


def build_site(config: SiteConfig, errors: ErrorLogBuffer | None = None) -> BuildResult:
    """Render the catalog and write it to ``config.output_path``.

    Raises:
        BuildError: output could not be written
    """
    start = time.perf_counter()
    html, items = render_catalog(config, errors)

    out = Path(config.output_path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
    except OSError as e:
        raise BuildError(f"failed to write {out}: {e}") from e

    elapsed = time.perf_counter() - start
    if items is None:
        return BuildResult(
            output_path=str(out),
            total_items=0,
            sold_items=0,
            total_images=0,
            error_page=True,
            navigable_cards=0,
            elapsed_seconds=elapsed,
        )

    controller = build_controller(items, config.swipe_threshold)
    return BuildResult(
        output_path=str(out),
        total_items=len(items),
        sold_items=sum(1 for i in items if i.sold),
        total_images=sum(len(i.images) for i in items),
        error_page=False,
        navigable_cards=sum(1 for c in controller.cards if c.has_navigation),
        elapsed_seconds=elapsed,
    )
