# Editor state and the pointer/keyboard state machine driving it.

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple
import logging
import math

import config
from camera import Camera
from element_store import ElementStore
from hit_test import find_closest
from model import (
    CircuitNode,
    Color,
    ElementDecodeError,
    ElementKind,
    SimpleSwitch,
    StraightTrack,
    color_from_hex,
    palette_colors,
)
from popup_menu import DeleteElement, Popup, PopupCommand, SetColor, ToggleOrientation, build_popup
from storage import ensure_json_extension, load_elements, save_elements


logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class InteractionState(Enum):
    IDLE = "idle"
    DRAWING_ELEMENT = "drawing"
    MOVING_ELEMENT = "moving"
    POPUP_OPEN = "popup"


TOOL_KEYS = [
    ("t", ElementKind.STRAIGHT_TRACK),
    ("i", ElementKind.CIRCUIT_NODE),
    ("k", ElementKind.SIMPLE_SWITCH),
]

TOOL_NAMES = {
    ElementKind.STRAIGHT_TRACK: "Straight track [T]",
    ElementKind.CIRCUIT_NODE: "Track circuit [I]",
    ElementKind.SIMPLE_SWITCH: "Simple switch [K]",
}

GAUGE_UP_KEYS = ("plus", "equal", "KP_Add")
GAUGE_DOWN_KEYS = ("minus", "KP_Subtract")

PAN_KEYS = {
    "Left": (-1, 0),
    "Right": (1, 0),
    "Up": (0, -1),
    "Down": (0, 1),
}


class Editor:
    """Camera, element store and interaction state, owned together.

    ``dialogs`` supplies ``ask_save_path()``, ``ask_open_path()`` and
    ``show_error(title, message)``; without it save/load are unavailable.
    """

    def __init__(
        self,
        screen_width: int = config.DEFAULT_WINDOW_SIZE[0],
        screen_height: int = config.DEFAULT_WINDOW_SIZE[1],
        dialogs=None,
    ) -> None:
        self.camera = Camera(screen_width, screen_height)
        self.store = ElementStore()
        self.dialogs = dialogs

        self.palette = palette_colors()
        self.backgrounds = [(key, name, color_from_hex(value)) for key, name, value in config.BACKGROUND_PRESETS]

        self.tool = ElementKind.STRAIGHT_TRACK
        self.current_color: Color = self.palette[0][2]
        self.gauge = config.DEFAULT_GAUGE
        self.fill_default = False
        self.background: Color = color_from_hex(config.DEFAULT_BACKGROUND)
        self.show_help = False
        self.quit_requested = False
        self.cursor: Point = (0.0, 0.0)

        self._reset_interaction()

    def _reset_interaction(self) -> None:
        self.state = InteractionState.IDLE
        self.draw_start: Optional[Point] = None
        self.moving_index: Optional[int] = None
        self.grab_offset: Point = (0.0, 0.0)
        self.popup: Optional[Popup] = None
        self.selected_index: Optional[int] = None
        self.hovered_index: Optional[int] = None

    # Pointer input

    def left_press(self, sx: float, sy: float) -> None:
        self.cursor = (sx, sy)
        if self.show_help:
            return
        if self.state is InteractionState.POPUP_OPEN:
            option = self.popup.option_at(sx, sy, self.camera.screen_width, self.camera.screen_height)
            if option is not None:
                self.execute(option.command)
            self.close_popup()
            self._update_hover()
            return
        if self.state is not InteractionState.IDLE:
            return

        world = self.camera.screen_to_world(sx, sy)
        index = self.element_at(world)
        if index is not None:
            element = self.store[index]
            self.moving_index = index
            self.selected_index = index
            self.grab_offset = (world[0] - element.x, world[1] - element.y)
            self.hovered_index = None
            self.state = InteractionState.MOVING_ELEMENT
            logger.info("Moving element %d", element.id)
            return

        self.selected_index = None
        if self.tool is ElementKind.STRAIGHT_TRACK:
            self.draw_start = world
            self.hovered_index = None
            self.state = InteractionState.DRAWING_ELEMENT
            return
        self._place_point_element(world)
        self._update_hover()

    def pointer_move(self, sx: float, sy: float) -> None:
        self.cursor = (sx, sy)
        if self.state is InteractionState.MOVING_ELEMENT:
            world = self.camera.screen_to_world(sx, sy)
            element = self.store[self.moving_index]
            element.x = world[0] - self.grab_offset[0]
            element.y = world[1] - self.grab_offset[1]
        self._update_hover()

    def left_release(self, sx: float, sy: float) -> None:
        self.cursor = (sx, sy)
        if self.state is InteractionState.MOVING_ELEMENT:
            self.pointer_move(sx, sy)
            element = self.store[self.moving_index]
            logger.info("Element %d moved to (%.0f, %.0f)", element.id, element.x, element.y)
            self.selected_index = self.moving_index
            self.moving_index = None
            self.state = InteractionState.IDLE
        elif self.state is InteractionState.DRAWING_ELEMENT:
            end = self.camera.screen_to_world(sx, sy)
            self._commit_track(self.draw_start, end)
            self.draw_start = None
            self.selected_index = None
            self.state = InteractionState.IDLE
        self._update_hover()

    def right_press(self, sx: float, sy: float) -> None:
        self.cursor = (sx, sy)
        if self.show_help:
            return
        if self.state is InteractionState.POPUP_OPEN:
            self.close_popup()
        elif self.state is InteractionState.IDLE:
            index = self.element_at(self.camera.screen_to_world(sx, sy))
            if index is not None:
                self.open_popup(index, (int(sx), int(sy)))
                return
        self._update_hover()

    def wheel(self, sx: float, sy: float, delta: float) -> None:
        self.cursor = (sx, sy)
        if self.show_help or delta == 0:
            return
        factor = config.ZOOM_STEP if delta > 0 else 1 / config.ZOOM_STEP
        self.camera.zoom_at(sx, sy, factor)
        self._update_hover()

    def element_at(self, world: Point) -> Optional[int]:
        return find_closest(world, self.store.elements, self.camera.zoom)

    def _update_hover(self) -> None:
        if self.state is InteractionState.IDLE and not self.show_help:
            self.hovered_index = self.element_at(self.camera.screen_to_world(*self.cursor))
        else:
            self.hovered_index = None

    # Element creation

    def _place_point_element(self, world: Point) -> None:
        if self.tool is ElementKind.CIRCUIT_NODE:
            element = CircuitNode(
                id=0,
                x=world[0],
                y=world[1],
                color=self.current_color,
                gauge=config.CIRCUIT_STROKE_WIDTH,
                bar_length=config.CIRCUIT_BAR_LENGTH,
            )
        else:
            element = SimpleSwitch(
                id=0,
                x=world[0],
                y=world[1],
                color=self.current_color,
                gauge=config.SWITCH_RADIUS,
            )
        self.store.add(element)
        logger.info("Added %s %d at (%.0f, %.0f)", type(element).__name__, element.id, element.x, element.y)

    def _commit_track(self, start: Optional[Point], end: Point) -> Optional[StraightTrack]:
        if start is None:
            return None
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        distance = math.hypot(dx, dy)
        if not distance * self.camera.zoom > config.MIN_DRAG_PIXELS:
            logger.debug("Drag too short, no track created")
            return None
        if config.PIXELS_PER_METER > 0:
            length = distance / config.PIXELS_PER_METER
        else:
            length = distance
        if not math.isfinite(length):
            logger.debug("Non-finite track length, no track created")
            return None
        track = StraightTrack(
            id=0,
            x=start[0],
            y=start[1],
            color=self.current_color,
            gauge=self.gauge,
            length=length,
            rotation=math.degrees(math.atan2(dy, dx)),
            filled=self.fill_default,
        )
        self.store.add(track)
        logger.info("Added StraightTrack %d (%.2f m, gauge %.0f)", track.id, track.length, track.gauge)
        return track

    # Popup

    def open_popup(self, index: int, anchor: Tuple[int, int]) -> None:
        self.selected_index = index
        self.popup = build_popup(self.store[index], anchor, self.palette)
        self.hovered_index = None
        self.state = InteractionState.POPUP_OPEN

    def close_popup(self) -> None:
        self.popup = None
        if self.state is InteractionState.POPUP_OPEN:
            self.state = InteractionState.IDLE

    def execute(self, command: PopupCommand) -> None:
        index = self.store.index_of(command.element_id)
        if index is None:
            logger.warning("Element %d no longer exists, ignoring %s", command.element_id, type(command).__name__)
            return
        element = self.store[index]
        if isinstance(command, SetColor):
            element.color = command.color
            logger.info("Element %d color -> %s", element.id, command.name or str(command.color))
        elif isinstance(command, ToggleOrientation):
            if isinstance(element, CircuitNode):
                element.orientation = element.orientation.flipped()
                logger.info("Element %d orientation -> %s", element.id, element.orientation.value)
        elif isinstance(command, DeleteElement):
            self.store.remove(index)
            self.selected_index = None
            self.hovered_index = None
            self.moving_index = None
            logger.info("Deleted %s %d", type(element).__name__, element.id)

    # Keyboard

    def key(self, keysym: str) -> None:
        key = keysym.lower() if len(keysym) == 1 else keysym

        if key == "F1":
            self.show_help = not self.show_help
            self._update_hover()
            return
        if self.show_help:
            if key == "Escape":
                self.show_help = False
                self._update_hover()
            return
        if key == "Escape":
            if self.state is InteractionState.POPUP_OPEN:
                self.close_popup()
                self._update_hover()
            else:
                logger.info("Quitting")
                self.quit_requested = True
            return

        for tool_key, tool in TOOL_KEYS:
            if key == tool_key:
                self.tool = tool
                logger.info("Tool: %s", TOOL_NAMES[tool])
                return
        if key == "v":
            self.fill_default = not self.fill_default
            logger.info("Next track: %s", "filled" if self.fill_default else "outlined")
            return
        for palette_key, name, color in self.palette:
            if key == palette_key:
                if self.current_color != color:
                    self.current_color = color
                    logger.info("Default color: %s", name)
                return
        for bg_key, name, color in self.backgrounds:
            if key == bg_key:
                self.background = color
                logger.info("Background: %s", name)
                return
        if key in GAUGE_UP_KEYS:
            self.adjust_gauge(config.GAUGE_STEP)
        elif key in GAUGE_DOWN_KEYS:
            self.adjust_gauge(-config.GAUGE_STEP)
        elif key == "c":
            self.clear_all()
        elif key == "s":
            self.save()
        elif key == "l":
            self.load()
        elif key in PAN_KEYS:
            dx, dy = PAN_KEYS[key]
            self.camera.pan(dx, dy)
            self._update_hover()

    def adjust_gauge(self, delta: float) -> None:
        previous = self.gauge
        self.gauge = min(config.GAUGE_MAX, max(config.GAUGE_MIN, self.gauge + delta))
        if self.gauge != previous:
            logger.info("Default track gauge (world units): %.1f", self.gauge)

    def clear_all(self) -> None:
        self.store.clear()
        self.camera.reset()
        self._reset_interaction()
        logger.info("Diagram cleared")

    # Files

    def save(self) -> bool:
        if self.dialogs is None:
            logger.warning("No file dialog available, save skipped")
            return False
        path = self.dialogs.ask_save_path()
        if not path:
            logger.info("Save cancelled")
            return False
        return self.save_file(ensure_json_extension(path))

    def load(self) -> bool:
        if self.dialogs is None:
            logger.warning("No file dialog available, load skipped")
            return False
        path = self.dialogs.ask_open_path()
        if not path:
            logger.info("Load cancelled")
            return False
        return self.load_file(path)

    def save_file(self, path: str) -> bool:
        try:
            save_elements(self.store, path)
        except OSError as exc:
            logger.error("Could not write '%s': %s", path, exc)
            self._report_error("Save failed", f"Could not write '{path}':\n{exc}")
            return False
        logger.info("Saved '%s' (%d elements)", path, len(self.store))
        return True

    def load_file(self, path: str) -> bool:
        try:
            elements = load_elements(path)
        except OSError as exc:
            logger.error("Could not read '%s': %s", path, exc)
            self._report_error("Load failed", f"Could not read '{path}':\n{exc}")
            return False
        except ElementDecodeError as exc:
            logger.error("Could not decode '%s': %s", path, exc)
            self._report_error("Load failed", f"'{path}' is not a valid diagram:\n{exc}")
            return False
        self.store.replace_all(elements)
        self.camera.reset()
        self._reset_interaction()
        logger.info("Loaded '%s' (%d elements), next id %d, camera reset", path, len(self.store), self.store.next_id)
        return True

    def _report_error(self, title: str, message: str) -> None:
        if self.dialogs is not None:
            self.dialogs.show_error(title, message)

    # Queries for the renderer

    def highlight_for(self, index: int) -> Optional[str]:
        if self.state is InteractionState.MOVING_ELEMENT and index == self.moving_index:
            return "moving"
        if self.state is InteractionState.POPUP_OPEN and index == self.selected_index:
            return "selected"
        if self.state is InteractionState.IDLE and index == self.hovered_index:
            return "hovered"
        return None

    def drawing_preview(self) -> Optional[Tuple[Point, Point]]:
        if self.state is not InteractionState.DRAWING_ELEMENT or self.draw_start is None:
            return None
        return self.draw_start, self.camera.screen_to_world(*self.cursor)

    def status_lines(self) -> List[str]:
        meters_per_pixel = (1.0 / config.PIXELS_PER_METER) / self.camera.zoom
        track_mode = "Filled" if self.fill_default else "Outlined"
        return [
            f"Cam: {self.camera.offset_x:.0f},{self.camera.offset_y:.0f} (Z: {self.camera.zoom:.2f}x)"
            f" | Scale: 1px = {meters_per_pixel:.1f} m | Tool: {TOOL_NAMES[self.tool]} | Track [V]: {track_mode}",
            f"Background [F2-F4] | Pan [Arrows] | +/-: gauge ({self.gauge:.0f} WU)"
            " | S/L: file | C: clear | F1: help | ESC: quit",
        ]
