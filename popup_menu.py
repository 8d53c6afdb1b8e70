# Context menu layout for the selected element.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import config
from model import AnyElement, CircuitNode, Color, Orientation


@dataclass(frozen=True)
class Rect:
    x0: int
    y0: int
    x1: int
    y1: int

    def contains(self, x: float, y: float) -> bool:
        # Min edge inclusive, max edge exclusive.
        return self.x0 <= x < self.x1 and self.y0 <= y < self.y1

    def offset(self, dx: int, dy: int) -> "Rect":
        return Rect(self.x0 + dx, self.y0 + dy, self.x1 + dx, self.y1 + dy)


@dataclass(frozen=True)
class SetColor:
    element_id: int
    color: Color
    name: str = ""


@dataclass(frozen=True)
class ToggleOrientation:
    element_id: int


@dataclass(frozen=True)
class DeleteElement:
    element_id: int


PopupCommand = Union[SetColor, ToggleOrientation, DeleteElement]


@dataclass
class PopupOption:
    rect: Rect
    command: PopupCommand
    label: str = ""
    color: Optional[Color] = None


@dataclass
class Popup:
    """Menu anchored at the right-click point; option rects are relative to that anchor."""

    anchor: Tuple[int, int]
    options: List[PopupOption] = field(default_factory=list)

    @property
    def width(self) -> int:
        return config.POPUP_WIDTH

    @property
    def height(self) -> int:
        if not self.options:
            return config.POPUP_PADDING * 3 + config.POPUP_SWATCH_SIZE + config.POPUP_OPTION_HEIGHT
        bottom = max(option.rect.y1 for option in self.options)
        return bottom - self.anchor[1] + config.POPUP_PADDING

    def draw_origin(self, screen_width: int, screen_height: int) -> Tuple[int, int]:
        """Top-left corner that keeps the whole menu on screen."""
        x, y = self.anchor
        if x + self.width > screen_width:
            x = screen_width - self.width
        if y + self.height > screen_height:
            y = screen_height - self.height
        return max(0, x), max(0, y)

    def draw_offset(self, screen_width: int, screen_height: int) -> Tuple[int, int]:
        x, y = self.draw_origin(screen_width, screen_height)
        return x - self.anchor[0], y - self.anchor[1]

    def placed_options(self, screen_width: int, screen_height: int) -> List[Tuple[Rect, PopupOption]]:
        dx, dy = self.draw_offset(screen_width, screen_height)
        return [(option.rect.offset(dx, dy), option) for option in self.options]

    def option_at(self, x: float, y: float, screen_width: int, screen_height: int) -> Optional[PopupOption]:
        for rect, option in self.placed_options(screen_width, screen_height):
            if rect.contains(x, y):
                return option
        return None


def orientation_label(orientation: Orientation) -> str:
    if orientation is Orientation.INVERTED:
        return "Flip (Inverted ┤)"
    return "Flip (Normal ト)"


def build_popup(
    element: AnyElement,
    anchor: Tuple[int, int],
    palette: Sequence[Tuple[str, str, Color]],
) -> Popup:
    """Description: Build popup
    Inputs: element: AnyElement, anchor: Tuple[int, int], palette: Sequence[Tuple[str, str, Color]]
    """
    ax, ay = int(anchor[0]), int(anchor[1])
    pad = config.POPUP_PADDING
    popup = Popup(anchor=(ax, ay))

    row_y = ay + pad
    size = config.POPUP_SWATCH_SIZE
    step = size + config.POPUP_SWATCH_GAP
    for i, (_key, name, color) in enumerate(palette):
        left = ax + pad + i * step
        popup.options.append(
            PopupOption(
                rect=Rect(left, row_y, left + size, row_y + size),
                command=SetColor(element.id, color, name),
                color=color,
            )
        )
    row_y += size + pad

    full_left = ax + pad
    full_right = ax + config.POPUP_WIDTH - pad
    if isinstance(element, CircuitNode):
        popup.options.append(
            PopupOption(
                rect=Rect(full_left, row_y, full_right, row_y + config.POPUP_OPTION_HEIGHT),
                command=ToggleOrientation(element.id),
                label=orientation_label(element.orientation),
            )
        )
        row_y += config.POPUP_OPTION_HEIGHT + pad

    popup.options.append(
        PopupOption(
            rect=Rect(full_left, row_y, full_right, row_y + config.POPUP_OPTION_HEIGHT),
            command=DeleteElement(element.id),
            label="Delete",
        )
    )
    return popup
