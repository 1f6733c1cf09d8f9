from __future__ import annotations

from call_overlay.drag_tracker import DragTracker


def test_move_before_press_is_ignored():
    assert DragTracker().move((10.0, 10.0)) is None


def test_move_applies_pointer_delta_to_origin():
    tracker = DragTracker()
    tracker.press((100.0, 200.0), (0, 100))

    assert tracker.active
    assert tracker.move((130.7, 180.2)) == (30, 81)


def test_no_clamping_allows_offscreen_positions():
    tracker = DragTracker()
    tracker.press((50.0, 50.0), (0, 100))
    assert tracker.move((-500.0, -500.0)) == (-550, -450)


def test_release_ends_drag():
    tracker = DragTracker()
    tracker.press((0.0, 0.0), (0, 0))
    tracker.release()

    assert not tracker.active
    assert tracker.move((5.0, 5.0)) is None
