from __future__ import annotations

from typing import Optional, Tuple

import tkinter as tk

import config
from interaction import Editor
from model import AnyElement, CircuitNode, Color, SimpleSwitch, StraightTrack, color_to_hex, lighten


Point = Tuple[float, float]


class CanvasView:
    def __init__(self, master: tk.Widget, editor: Editor, on_changed=None) -> None:
        """Description: Init
        Inputs: master: tk.Widget, editor: Editor, on_changed
        """
        self.editor = editor
        self._on_changed = on_changed
        self.canvas = tk.Canvas(
            master,
            width=editor.camera.screen_width,
            height=editor.camera.screen_height,
            bg=color_to_hex(editor.background),
            highlightthickness=0,
        )

        self.canvas.bind("<Configure>", self._on_resize)
        self.canvas.bind("<ButtonPress-1>", self._on_left_press)
        self.canvas.bind("<B1-Motion>", self._on_motion)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<ButtonRelease-1>", self._on_left_release)
        self.canvas.bind("<ButtonPress-3>", self._on_right_press)
        self.canvas.bind("<MouseWheel>", self._on_mouse_wheel)
        # X11 reports the wheel as buttons 4 and 5.
        self.canvas.bind("<Button-4>", lambda event: self._on_wheel_step(event, 1))
        self.canvas.bind("<Button-5>", lambda event: self._on_wheel_step(event, -1))
        self.canvas.focus_set()

    def draw(self) -> None:
        """Description: Redraw everything from the editor state
        Inputs: None
        """
        editor = self.editor
        self.canvas.delete("all")
        self.canvas.configure(bg=color_to_hex(editor.background))

        for index, element in enumerate(editor.store):
            self._draw_element(index, element)

        preview = editor.drawing_preview()
        if preview is not None:
            start = editor.camera.world_to_screen(*preview[0])
            self._draw_track(start, editor.cursor, editor.gauge, editor.fill_default, color_to_hex(editor.current_color))

        if editor.popup is not None:
            self._draw_popup()

        self.canvas.create_text(
            6, 6,
            anchor="nw",
            text="\n".join(editor.status_lines()),
            fill=config.THEME["status_text"],
            font=config.STATUS_FONT,
            tags="status",
        )

        if editor.show_help:
            self._draw_help()

    def _display_color(self, element: AnyElement, highlight: Optional[str]) -> Color:
        """Description: Display color
        Inputs: element: AnyElement, highlight: Optional[str]
        """
        if highlight == "moving":
            return (255, 165, 0, 255)
        if highlight == "selected":
            return (255, 255, 255, 255)
        if highlight == "hovered":
            return lighten(element.color, config.HOVER_LIGHTEN)
        return element.color

    def _draw_element(self, index: int, element: AnyElement) -> None:
        """Description: Draw element
        Inputs: index: int, element: AnyElement
        """
        camera = self.editor.camera
        fill = color_to_hex(self._display_color(element, self.editor.highlight_for(index)))

        if isinstance(element, StraightTrack):
            start = camera.world_to_screen(element.x, element.y)
            end = camera.world_to_screen(*element.end_point())
            self._draw_track(start, end, element.gauge, element.filled, fill)
        elif isinstance(element, CircuitNode):
            width = max(0.5, element.gauge * camera.zoom)
            for a, b in (element.bar_segment(), element.stem_segment()):
                p1 = camera.world_to_screen(*a)
                p2 = camera.world_to_screen(*b)
                self.canvas.create_line(p1[0], p1[1], p2[0], p2[1], fill=fill, width=width, tags="element")
        elif isinstance(element, SimpleSwitch):
            sx, sy = camera.world_to_screen(element.x, element.y)
            radius = max(1.0, element.radius * camera.zoom)
            self.canvas.create_oval(sx - radius, sy - radius, sx + radius, sy + radius, fill=fill, outline="", tags="element")

    def _draw_track(self, start: Point, end: Point, gauge: float, filled: bool, fill: str) -> None:
        """Description: Draw a track as a solid quad or as two rails with end caps
        Inputs: start: Point, end: Point, gauge: float, filled: bool, fill: str
        """
        zoom = self.editor.camera.zoom
        half = max(0.5, max(1.0, gauge * zoom) / 2.0)
        x1, y1 = start
        x2, y2 = end
        if filled:
            self.canvas.create_polygon(
                x1, y1 - half, x1, y1 + half, x2, y2 + half, x2, y2 - half,
                fill=fill,
                outline="",
                tags="element",
            )
            return
        rail = max(0.5, config.RAIL_STROKE_WIDTH * zoom)
        for coords in (
            (x1, y1 - half, x2, y2 - half),
            (x1, y1 + half, x2, y2 + half),
            (x1, y1 - half, x1, y1 + half),
            (x2, y2 - half, x2, y2 + half),
        ):
            self.canvas.create_line(*coords, fill=fill, width=rail, tags="element")

    def _draw_popup(self) -> None:
        """Description: Draw popup
        Inputs: None
        """
        popup = self.editor.popup
        width = self.editor.camera.screen_width
        height = self.editor.camera.screen_height
        ox, oy = popup.draw_origin(width, height)
        self.canvas.create_rectangle(
            ox, oy, ox + popup.width, oy + popup.height,
            fill=config.THEME["popup_bg"],
            outline=config.THEME["popup_outline"],
            tags="popup",
        )
        for rect, option in popup.placed_options(width, height):
            if option.color is not None:
                self.canvas.create_rectangle(
                    rect.x0, rect.y0, rect.x1, rect.y1,
                    fill=color_to_hex(option.color),
                    outline=config.THEME["swatch_outline"],
                    tags="popup",
                )
            if option.label:
                self.canvas.create_text(
                    (rect.x0 + rect.x1) / 2, (rect.y0 + rect.y1) / 2,
                    text=option.label,
                    fill=config.THEME["popup_text"],
                    font=config.POPUP_FONT,
                    tags="popup",
                )

    def _draw_help(self) -> None:
        """Description: Draw help
        Inputs: None
        """
        camera = self.editor.camera
        self.canvas.create_rectangle(
            0, 0, camera.screen_width, camera.screen_height,
            fill=config.THEME["help_bg"],
            stipple="gray75",
            outline="",
            tags="help",
        )
        self.canvas.create_text(
            20, 20,
            anchor="nw",
            text=config.HELP_TEXT,
            fill=config.THEME["help_text"],
            font=config.HELP_FONT,
            tags="help",
        )

    def _changed(self) -> None:
        self.draw()
        if self._on_changed:
            self._on_changed()

    def _on_resize(self, event: tk.Event) -> None:
        """Description: On resize
        Inputs: event: tk.Event
        """
        self.editor.camera.resize(event.width, event.height)
        self.draw()

    def _on_left_press(self, event: tk.Event) -> None:
        """Description: On left press
        Inputs: event: tk.Event
        """
        self.canvas.focus_set()
        self.editor.left_press(event.x, event.y)
        self._changed()

    def _on_motion(self, event: tk.Event) -> None:
        self.editor.pointer_move(event.x, event.y)
        self._changed()

    def _on_left_release(self, event: tk.Event) -> None:
        self.editor.left_release(event.x, event.y)
        self._changed()

    def _on_right_press(self, event: tk.Event) -> None:
        self.editor.right_press(event.x, event.y)
        self._changed()

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        """Description: On mouse wheel
        Inputs: event: tk.Event
        """
        if event.delta == 0:
            return
        self._on_wheel_step(event, 1 if event.delta > 0 else -1)

    def _on_wheel_step(self, event: tk.Event, direction: int) -> None:
        self.editor.wheel(event.x, event.y, direction)
        self._changed()
