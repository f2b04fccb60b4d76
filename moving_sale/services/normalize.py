from __future__ import annotations

from collections.abc import Mapping

from ..models.catalog_item import UNNAMED_ITEM, CatalogItem
from ..models.config_models import DEFAULT_IMAGE_PREFIX

"""Row normalization: RawRow (column -> text) to CatalogItem.

Column names are matched exactly (case-sensitive). A missing column behaves
like an empty cell.
"""

__all__ = [
    "COL_ITEM",
    "COL_NEW_PRICE",
    "COL_ASKING_PRICE",
    "COL_AVAILABLE",
    "COL_IMAGES",
    "COL_NOTES",
    "COL_STATUS",
    "UNKNOWN_SENTINEL",
    "clean_price",
    "format_availability",
    "parse_images",
    "is_sold",
    "normalize_item",
]

COL_ITEM = "Item"
COL_NEW_PRICE = "New price"
COL_ASKING_PRICE = "Asking price"
COL_AVAILABLE = "Available"
COL_IMAGES = "Images"
COL_NOTES = "Notes"
COL_STATUS = "Status"

UNKNOWN_SENTINEL = "???"
SOLD_STATUS = "sold"


def _absent(value: str) -> bool:
    return value == "" or value == UNKNOWN_SENTINEL


def clean_price(value: str | None) -> str | None:
    """Return the trimmed price text, or None for blank / ``???``."""
    cleaned = (value or "").strip()
    if _absent(cleaned):
        return None
    return cleaned


def format_availability(value: str | None) -> str | None:
    """Map the Available column to its display phrase.

    >>> format_availability("NOW")
    'Available now'
    >>> format_availability("from 1 March")
    'Available from 1 March'
    >>> format_availability("???") is None
    True
    """
    cleaned = (value or "").strip()
    if _absent(cleaned):
        return None
    if cleaned.lower() == "now":
        return "Available now"
    return f"Available {cleaned}"


def parse_images(value: str | None, prefix: str = DEFAULT_IMAGE_PREFIX) -> tuple[str, ...]:
    """Split a comma-separated filename list into prefixed relative paths."""
    if not value or not value.strip():
        return ()
    names = (part.strip() for part in value.split(","))
    base = prefix.rstrip("/")
    return tuple(f"{base}/{name}" if base else name for name in names if name)


def is_sold(value: str | None) -> bool:
    return (value or "").strip().lower() == SOLD_STATUS


def normalize_item(row: Mapping[str, str], image_prefix: str = DEFAULT_IMAGE_PREFIX) -> CatalogItem:
    """Build a CatalogItem from one parsed CSV row."""
    name = (row.get(COL_ITEM) or "").strip()
    return CatalogItem(
        name=name or UNNAMED_ITEM,
        new_price=clean_price(row.get(COL_NEW_PRICE)),
        asking_price=clean_price(row.get(COL_ASKING_PRICE)),
        availability=format_availability(row.get(COL_AVAILABLE)),
        images=parse_images(row.get(COL_IMAGES), image_prefix),
        notes=(row.get(COL_NOTES) or "").strip(),
        sold=is_sold(row.get(COL_STATUS)),
    )
