from __future__ import annotations

import pytest

from moving_sale.services.gallery import (
    ClickEvent,
    GalleryController,
    KeyEvent,
    Role,
    TouchEvent,
    TouchPhase,
    swipe_direction,
)

CHAIR = ["images/chair1.jpg", "images/chair2.jpg", "images/chair3.jpg"]
LAMP = ["images/lamp.jpg"]


@pytest.fixture()
def controller() -> GalleryController:
    # card 0: three images, card 1: one image, card 2: none
    return GalleryController([CHAIR, LAMP, []])


def _swipe(ctrl: GalleryController, start: float, end: float, role: Role, card: int | None = None) -> bool:
    ctrl.dispatch(TouchEvent(TouchPhase.START, start, role, card))
    return ctrl.dispatch(TouchEvent(TouchPhase.END, end, role, card))


@pytest.mark.parametrize(
    "start,end,expected",
    [(200, 100, 1), (100, 200, -1), (100, 150, 0), (150, 100, 0), (100, 151, -1), (151, 100, 1)],
)
def test_swipe_direction(start, end, expected):
    assert swipe_direction(start, end, 50) == expected


def test_card_arrow_click_navigates_and_stops_propagation(controller):
    assert controller.dispatch(ClickEvent(Role.NAV_NEXT, 0)) is True
    assert controller.card_state(0).current_index == 1
    assert controller.modal.is_open is False
    controller.dispatch(ClickEvent(Role.NAV_PREV, 0))
    controller.dispatch(ClickEvent(Role.NAV_PREV, 0))
    assert controller.card_state(0).current_index == 2
    assert controller.card_state(0).counter_text == "3 / 3"


def test_single_image_card_has_no_transition(controller):
    controller.dispatch(ClickEvent(Role.NAV_NEXT, 1))
    assert controller.card_state(1).current_index == 0
    assert _swipe(controller, 300, 0, Role.GALLERY, 1) is False
    assert controller.card_state(1).current_index == 0


def test_main_image_click_opens_modal_with_card_state(controller):
    controller.dispatch(ClickEvent(Role.NAV_NEXT, 0))
    assert controller.dispatch(ClickEvent(Role.MAIN_IMAGE, 0)) is True
    assert controller.modal.is_open
    assert controller.modal_card == 0
    assert controller.modal.gallery.images == tuple(CHAIR)
    assert controller.modal.gallery.current_index == 1
    assert controller.modal.nav_visible is True
    assert controller.scroll_locked is True


def test_modal_for_single_image_hides_navigation(controller):
    controller.dispatch(ClickEvent(Role.MAIN_IMAGE, 1))
    assert controller.modal.is_open
    assert controller.modal.nav_visible is False
    controller.dispatch(KeyEvent("ArrowRight"))
    assert controller.modal.gallery.current_index == 0
    assert _swipe(controller, 300, 100, Role.MODAL_IMAGE) is False
    assert controller.dispatch(ClickEvent(Role.MODAL_NEXT)) is False


def test_zero_image_card_does_not_open_modal(controller):
    controller.open_modal(2)
    assert controller.modal.is_open is False
    assert controller.scroll_locked is False


def test_modal_navigation_updates_originating_card(controller):
    controller.dispatch(ClickEvent(Role.MAIN_IMAGE, 0))
    controller.dispatch(ClickEvent(Role.MODAL_NEXT, None))
    assert controller.modal.gallery.current_index == 1
    assert controller.card_state(0).current_index == 1
    controller.dispatch(KeyEvent("ArrowLeft"))
    controller.dispatch(KeyEvent("ArrowLeft"))
    assert controller.modal.gallery.current_index == 2
    assert controller.card_state(0).current_image == "images/chair3.jpg"


def test_card_navigation_while_mirrored_updates_modal(controller):
    controller.open_modal(0)
    controller.navigate_card(0, 1)
    assert controller.modal.gallery.current_index == 1
    assert controller.modal.gallery.counter_text == "2 / 3"


def test_close_modal_keeps_card_state(controller):
    controller.open_modal(0)
    controller.navigate_modal(1)
    controller.dispatch(KeyEvent("Escape"))
    assert controller.modal.is_open is False
    assert controller.modal_card is None
    assert controller.scroll_locked is False
    assert controller.card_state(0).current_index == 1
    # card navigation no longer reaches the modal
    controller.navigate_card(0, 1)
    assert controller.modal.gallery.images == ()


@pytest.mark.parametrize("role", [Role.MODAL_CLOSE, Role.MODAL_BACKDROP])
def test_close_by_click(controller, role):
    controller.open_modal(0)
    assert controller.dispatch(ClickEvent(role)) is True
    assert controller.modal.is_open is False


def test_keys_ignored_while_modal_closed(controller):
    assert controller.dispatch(KeyEvent("ArrowRight")) is False
    assert controller.card_state(0).current_index == 0
    assert controller.dispatch(KeyEvent("Escape")) is False


def test_unmapped_key_is_ignored(controller):
    controller.open_modal(0)
    assert controller.dispatch(KeyEvent("Enter")) is False
    assert controller.modal.is_open


def test_card_swipe_left_goes_next_right_goes_prev(controller):
    assert _swipe(controller, 300, 200, Role.MAIN_IMAGE, 0) is True
    assert controller.card_state(0).current_index == 1
    assert _swipe(controller, 100, 200, Role.GALLERY, 0) is True
    assert controller.card_state(0).current_index == 0


def test_short_swipe_is_a_tap(controller):
    assert _swipe(controller, 100, 140, Role.MAIN_IMAGE, 0) is False
    assert controller.card_state(0).current_index == 0


def test_card_swipe_ignored_while_modal_open(controller):
    controller.open_modal(1)
    assert _swipe(controller, 300, 100, Role.GALLERY, 0) is False
    assert controller.card_state(0).current_index == 0


def test_modal_swipe_navigates_and_syncs_card(controller):
    controller.open_modal(0)
    assert _swipe(controller, 300, 100, Role.MODAL_IMAGE) is True
    assert controller.modal.gallery.current_index == 1
    assert controller.card_state(0).current_index == 1
    _swipe(controller, 100, 300, Role.MODAL_IMAGE)
    assert controller.card_state(0).current_index == 0


def test_modal_swipe_outside_image_ignored(controller):
    controller.open_modal(0)
    assert _swipe(controller, 300, 100, Role.MODAL_BACKDROP) is False
    assert controller.modal.gallery.current_index == 0


def test_touch_end_without_start_is_ignored(controller):
    assert controller.dispatch(TouchEvent(TouchPhase.END, 0, Role.GALLERY, 0)) is False


def test_custom_swipe_threshold():
    ctrl = GalleryController([CHAIR], swipe_threshold=120)
    assert _swipe(ctrl, 200, 100, Role.GALLERY, 0) is False
    assert _swipe(ctrl, 300, 100, Role.GALLERY, 0) is True


def test_unknown_click_role_not_consumed(controller):
    assert controller.dispatch(ClickEvent(Role.GALLERY, 0)) is False


def test_unsupported_event_type(controller):
    with pytest.raises(TypeError):
        controller.dispatch("click")  # type: ignore[arg-type]


@pytest.mark.parametrize("role", [Role.MODAL_NEXT, Role.MODAL_PREV])
def test_modal_arrow_click_while_closed_not_consumed(controller, role):
    assert controller.dispatch(ClickEvent(role)) is False
    assert controller.card_state(0).current_index == 0
