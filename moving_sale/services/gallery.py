"""Gallery / lightbox navigation controller.

A DOM-free model of the card galleries and the shared lightbox modal. Input
events carry the ``data-role`` of the node they hit (see templates) and are
routed through a dispatch table keyed by Role. State that a browser script
would keep in module globals (touch start, the card bound to the modal) lives
on the controller instance.

State transitions (per card, keyed by current_index):
    next / prev   : arrow click, swipe past threshold, arrow key (modal open)
    open_modal    : click on a card's main image
    close_modal   : close button, backdrop click, Escape
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..models.config_models import DEFAULT_SWIPE_THRESHOLD
from ..models.gallery_state import GalleryState, sync_state

logger = logging.getLogger(__name__)

__all__ = [
    "Role",
    "TouchPhase",
    "ClickEvent",
    "TouchEvent",
    "KeyEvent",
    "ModalState",
    "GalleryController",
    "swipe_direction",
]

NEXT = 1
PREV = -1


class Role(str, Enum):
    """Stable ``data-role`` values emitted by the card and modal templates."""
    NAV_PREV = "nav-prev"
    NAV_NEXT = "nav-next"
    MAIN_IMAGE = "main-image"
    GALLERY = "gallery"
    MODAL_PREV = "modal-prev"
    MODAL_NEXT = "modal-next"
    MODAL_CLOSE = "modal-close"
    MODAL_BACKDROP = "modal-backdrop"
    MODAL_IMAGE = "modal-image"


class TouchPhase(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class ClickEvent:
    role: Role
    card: int | None = None  # data-card of the enclosing card (card roles only)


@dataclass(frozen=True)
class TouchEvent:
    phase: TouchPhase
    x: float  # screen X of the changed touch
    role: Role
    card: int | None = None


@dataclass(frozen=True)
class KeyEvent:
    key: str  # KeyboardEvent.key: "Escape", "ArrowLeft", "ArrowRight", ...


def swipe_direction(start_x: float, end_x: float, threshold: float = DEFAULT_SWIPE_THRESHOLD) -> int:
    """Map a horizontal gesture to a navigation step.

    Returns NEXT (finger moved left), PREV (moved right) or 0 when the distance
    does not exceed ``threshold`` (a tap).
    """
    diff = start_x - end_x
    if abs(diff) <= threshold:
        return 0
    return NEXT if diff > 0 else PREV


@dataclass
class ModalState:
    """Shared lightbox state; ``card`` is None while closed."""
    gallery: GalleryState = field(default_factory=GalleryState)
    card: int | None = None
    nav_visible: bool = False

    @property
    def is_open(self) -> bool:
        return self.card is not None


class GalleryController:
    """Owns every card's GalleryState plus the modal.

    Args:
        galleries: image lists in card order (index == ``data-card``)
        swipe_threshold: minimum horizontal distance for a swipe
    """

    def __init__(self, galleries: Sequence[Sequence[str]], swipe_threshold: int = DEFAULT_SWIPE_THRESHOLD) -> None:
        self.cards: list[GalleryState] = [GalleryState.from_images(g) for g in galleries]
        self.modal = ModalState()
        self.swipe_threshold = swipe_threshold
        self.scroll_locked = False
        self._touch_start: tuple[Role, int | None, float] | None = None

        self._click_handlers: dict[Role, Callable[[ClickEvent], bool]] = {
            Role.NAV_PREV: lambda e: self._card_click(e, PREV),
            Role.NAV_NEXT: lambda e: self._card_click(e, NEXT),
            Role.MAIN_IMAGE: self._main_image_click,
            Role.MODAL_PREV: lambda e: self._modal_click(PREV),
            Role.MODAL_NEXT: lambda e: self._modal_click(NEXT),
            Role.MODAL_CLOSE: self._close_click,
            Role.MODAL_BACKDROP: self._close_click,
        }
        self._key_handlers: dict[str, Callable[[], None]] = {
            "Escape": self.close_modal,
            "ArrowLeft": lambda: self.navigate_modal(PREV),
            "ArrowRight": lambda: self.navigate_modal(NEXT),
        }

    # ----- queries -----

    def card_state(self, card: int) -> GalleryState:
        return self.cards[card]

    @property
    def modal_card(self) -> int | None:
        return self.modal.card

    # ----- transitions -----

    def navigate_card(self, card: int, direction: int) -> int:
        """Move one card's gallery; a modal mirroring this card follows."""
        state = self.cards[card]
        if not state.has_navigation:
            return state.current_index
        state.move(direction)
        if self.modal.card == card:
            sync_state(state, self.modal.gallery)
        logger.debug(f"card={card} index={state.current_index}")
        return state.current_index

    def navigate_modal(self, direction: int) -> int | None:
        """Move the modal gallery and write the result back to the originating card."""
        if not self.modal.is_open:
            return None
        gallery = self.modal.gallery
        if not gallery.has_navigation:
            return gallery.current_index
        gallery.move(direction)
        sync_state(gallery, self.cards[self.modal.card])  # type: ignore[index]
        logger.debug(f"modal card={self.modal.card} index={gallery.current_index}")
        return gallery.current_index

    def open_modal(self, card: int) -> ModalState:
        state = self.cards[card]
        if not state.images:
            # 画像なしカードは main-image を持たない
            return self.modal
        self.modal.card = card
        sync_state(state, self.modal.gallery)
        self.modal.nav_visible = state.has_navigation
        self.scroll_locked = True
        return self.modal

    def close_modal(self) -> None:
        # カード側の index はそのまま保持
        self.modal.card = None
        self.modal.gallery = GalleryState()
        self.modal.nav_visible = False
        self.scroll_locked = False

    # ----- event dispatch -----

    def dispatch(self, event: ClickEvent | TouchEvent | KeyEvent) -> bool:
        """Route an input event; True when it was consumed (propagation stopped)."""
        if isinstance(event, ClickEvent):
            handler = self._click_handlers.get(event.role)
            return handler(event) if handler is not None else False
        if isinstance(event, TouchEvent):
            return self._touch(event)
        if isinstance(event, KeyEvent):
            return self._key(event)
        raise TypeError(f"unsupported event: {event!r}")

    def _card_click(self, event: ClickEvent, direction: int) -> bool:
        if event.card is None:
            return False
        self.navigate_card(event.card, direction)
        # 矢印クリックでモーダルを開かない
        return True

    def _main_image_click(self, event: ClickEvent) -> bool:
        if event.card is None:
            return False
        self.open_modal(event.card)
        return True

    def _modal_click(self, direction: int) -> bool:
        if not self.modal.is_open or not self.modal.gallery.has_navigation:
            return False
        self.navigate_modal(direction)
        return True

    def _close_click(self, event: ClickEvent) -> bool:
        if not self.modal.is_open:
            return False
        self.close_modal()
        return True

    def _key(self, event: KeyEvent) -> bool:
        if not self.modal.is_open:
            return False
        handler = self._key_handlers.get(event.key)
        if handler is None:
            return False
        handler()
        return True

    def _is_card_surface(self, event: TouchEvent) -> bool:
        return event.card is not None and event.role in (Role.GALLERY, Role.MAIN_IMAGE, Role.NAV_PREV, Role.NAV_NEXT)

    def _touch(self, event: TouchEvent) -> bool:
        if self.modal.is_open:
            # モーダル表示中はモーダル画像上のスワイプのみ
            if event.role is not Role.MODAL_IMAGE:
                return False
        elif not self._is_card_surface(event):
            return False

        if event.phase is TouchPhase.START:
            self._touch_start = (event.role, event.card, event.x)
            return False

        start = self._touch_start
        self._touch_start = None
        if start is None:
            return False
        direction = swipe_direction(start[2], event.x, self.swipe_threshold)
        if direction == 0:
            return False
        if event.role is Role.MODAL_IMAGE:
            if start[0] is not Role.MODAL_IMAGE:
                return False
            if not self.modal.gallery.has_navigation:
                return False
            self.navigate_modal(direction)
            return True
        if start[0] is Role.MODAL_IMAGE or start[1] != event.card:
            return False
        # 単一画像カードは遷移なし = 未消費
        if not self.cards[event.card].has_navigation:  # type: ignore[index]
            return False
        self.navigate_card(event.card, direction)  # type: ignore[arg-type]
        return True
