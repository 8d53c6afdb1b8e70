from __future__ import annotations

from typing import Tuple

import config


Point = Tuple[float, float]


class Camera:
    """Pan offset and zoom; the world point at offset is drawn at the screen centre."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom = 1.0

    def resize(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = max(1, int(screen_width))
        self.screen_height = max(1, int(screen_height))

    def reset(self) -> None:
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom = 1.0

    def world_to_screen(self, wx: float, wy: float) -> Point:
        return (
            (wx - self.offset_x) * self.zoom + self.screen_width / 2.0,
            (wy - self.offset_y) * self.zoom + self.screen_height / 2.0,
        )

    def screen_to_world(self, sx: float, sy: float) -> Point:
        return (
            (sx - self.screen_width / 2.0) / self.zoom + self.offset_x,
            (sy - self.screen_height / 2.0) / self.zoom + self.offset_y,
        )

    def zoom_at(self, sx: float, sy: float, factor: float) -> bool:
        """Scale zoom by factor keeping the world point under (sx, sy) fixed.

        Returns False when the clamped zoom did not change.
        """
        old_zoom = self.zoom
        new_zoom = min(config.ZOOM_MAX, max(config.ZOOM_MIN, self.zoom * factor))
        if new_zoom == old_zoom:
            return False
        before = self.screen_to_world(sx, sy)
        self.zoom = new_zoom
        after = self.screen_to_world(sx, sy)
        self.offset_x += before[0] - after[0]
        self.offset_y += before[1] - after[1]
        return True

    def pan(self, dx: float, dy: float) -> None:
        # Constant on-screen speed at any zoom.
        speed = config.CAMERA_SCROLL_SPEED / self.zoom
        self.offset_x += dx * speed
        self.offset_y += dy * speed
