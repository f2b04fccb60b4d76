from __future__ import annotations

from dataclasses import dataclass

"""CatalogItem model for the moving-sale catalog.

One CatalogItem is built per CSV data row by services.normalize and is never
mutated afterwards. Sentinel handling (``???`` / blank) has already been
applied: absent values are ``None``.
"""

__all__ = [
    "CatalogItem",
    "UNNAMED_ITEM",
]

UNNAMED_ITEM = "Unnamed Item"


@dataclass(frozen=True)
class CatalogItem:
    """Normalized representation of one item for sale.

    Attributes:
        name: Item name, ``UNNAMED_ITEM`` when the source field was blank
        new_price: Original retail price text, None when unknown
        asking_price: Sale price text, None when unknown
        availability: Display phrase ("Available now", "Available <when>") or None
        images: Relative image paths in display order (may be empty)
        notes: Free-text description, "" when absent
        sold: True when the Status column says "sold"
    """
    name: str
    new_price: str | None = None
    asking_price: str | None = None
    availability: str | None = None
    images: tuple[str, ...] = ()
    notes: str = ""
    sold: bool = False

    @property
    def has_gallery(self) -> bool:
        """True when the card gets prev/next navigation (more than one image)."""
        return len(self.images) > 1

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None
