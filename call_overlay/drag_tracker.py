from __future__ import annotations

from typing import Optional, Tuple

Point = Tuple[float, float]


class DragTracker:
    """Tracks a pointer drag and reports where the window origin should move.

    Positions are not clamped to any screen, so the window may be dragged
    partly or wholly off-screen.
    """

    def __init__(self) -> None:
        self._initial_pointer: Optional[Point] = None
        self._initial_origin: Tuple[int, int] = (0, 0)

    @property
    def active(self) -> bool:
        return self._initial_pointer is not None

    def press(self, pointer: Point, window_origin: Tuple[int, int]) -> None:
        self._initial_pointer = (float(pointer[0]), float(pointer[1]))
        self._initial_origin = (int(window_origin[0]), int(window_origin[1]))

    def move(self, pointer: Point) -> Optional[Tuple[int, int]]:
        if self._initial_pointer is None:
            return None
        dx = int(pointer[0] - self._initial_pointer[0])
        dy = int(pointer[1] - self._initial_pointer[1])
        return (self._initial_origin[0] + dx, self._initial_origin[1] + dy)

    def release(self) -> None:
        self._initial_pointer = None
