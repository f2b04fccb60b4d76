from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

"""GalleryState model: navigation position within one image list.

Used per rendered card and once more for the shared lightbox modal, which
holds a transient copy of the card that opened it.
"""

__all__ = [
    "GalleryState",
    "sync_state",
]


@dataclass
class GalleryState:
    """Current image index of a card (or the modal).

    Invariant: for non-empty ``images`` the index stays in ``[0, len(images))``;
    moves wrap modulo the image count. Zero / one image lists never move.
    """
    images: tuple[str, ...] = ()
    current_index: int = 0

    @classmethod
    def from_images(cls, images: Sequence[str]) -> GalleryState:
        return cls(images=tuple(images), current_index=0)

    @property
    def total(self) -> int:
        return len(self.images)

    @property
    def has_navigation(self) -> bool:
        return self.total > 1

    @property
    def current_image(self) -> str | None:
        if not self.images:
            return None
        return self.images[self.current_index]

    @property
    def counter_text(self) -> str:
        """Visible "index / total" counter (1-based)."""
        if not self.images:
            return ""
        return f"{self.current_index + 1} / {self.total}"

    def move(self, delta: int) -> int:
        """Shift the index by ``delta`` with wrap-around; returns the new index."""
        if self.has_navigation:
            self.current_index = (self.current_index + delta) % self.total
        return self.current_index

    def next(self) -> int:
        return self.move(1)

    def prev(self) -> int:
        return self.move(-1)


def sync_state(source: GalleryState, target: GalleryState) -> GalleryState:
    """Copy image list and index from ``source`` into ``target``.

    No rendering surface is touched; callers re-render from ``target``.
    """
    target.images = tuple(source.images)
    target.current_index = source.current_index
    return target
