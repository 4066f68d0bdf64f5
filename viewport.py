"""Camera state for the overlay: scrolling, zoom and the portal peek."""

import math
from typing import Tuple


class Viewport:
    """Tracks where the map is drawn relative to the window centre."""
    def __init__(self, room_area: int = 40, scale: int = 6, min_scale: int = 1, max_scale: int = 8,
                 easing: float = 0.1):
        self.room_area = room_area
        self.default_scale = scale
        self.scale = scale
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.easing = easing
        self.position = (0, 0)
        self.target = (0, 0)
        self.viewing_portal = False
        self.show_scale_meter = False
        self.show_help = False

    @property
    def effective_scale(self) -> int:
        # The portal peek always shows the map at its smallest zoom
        return 1 if self.viewing_portal else self.scale

    def follow(self, room: Tuple[int, int]):
        self.target = (-room[0] * self.room_area, -room[1] * self.room_area)

    def update(self) -> bool:
        """Ease the view one frame toward its target.

        Returns:
            True if the view moved and another frame is needed
        """
        if self.position == self.target:
            return False
        self.position = (self._ease(self.position[0], self.target[0]),
                         self._ease(self.position[1], self.target[1]))
        return True

    def _ease(self, current: int, target: int) -> int:
        value = current + (target - current) * self.easing
        # Round toward the target so the view always arrives
        return int(math.ceil(value)) if current < target else int(math.floor(value))

    def zoom_in(self) -> bool:
        if self.scale >= self.max_scale:
            return False
        self.scale += 1
        self.show_scale_meter = True
        return True

    def zoom_out(self) -> bool:
        if self.scale <= self.min_scale:
            return False
        self.scale -= 1
        self.show_scale_meter = True
        return True

    def peek_portal(self):
        self.viewing_portal = True
        self.target = (0, 0)

    def release_portal(self, room: Tuple[int, int]):
        self.viewing_portal = False
        self.follow(room)

    def toggle_help(self):
        self.show_help = not self.show_help

    def reset(self):
        self.position = (0, 0)
        self.target = (0, 0)
        self.viewing_portal = False
