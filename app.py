from __future__ import annotations

import logging
import sys
import tkinter as tk
from tkinter import filedialog, messagebox

import config
from canvas_view import CanvasView
from interaction import Editor, TOOL_NAMES
from model import ElementKind


logger = logging.getLogger(__name__)


def configure_logging(path: str = config.LOG_FILE, level: int = logging.INFO) -> None:
    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        handlers.append(logging.FileHandler(path, mode="w", encoding="utf-8"))
    except OSError as exc:
        print(f"Could not open log file '{path}' ({exc}), logging to console only.", file=sys.stderr)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


class TkDialogs:
    def __init__(self, root: tk.Tk) -> None:
        self.root = root

    def ask_save_path(self) -> str:
        return filedialog.asksaveasfilename(
            parent=self.root,
            title="Save Diagram",
            defaultextension=config.PROJECT_EXTENSION,
            filetypes=[("JSON diagram", f"*{config.PROJECT_EXTENSION}")],
        )

    def ask_open_path(self) -> str:
        return filedialog.askopenfilename(
            parent=self.root,
            title="Load Diagram",
            filetypes=[("JSON diagram", f"*{config.PROJECT_EXTENSION}")],
        )

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self.root)


class EditorApp:
    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)

        width, height = self._initial_size()
        self.root.geometry(f"{width}x{height}")
        logger.info("Window %dx%d, 1 world unit = %.0f m at zoom 1.0", width, height, 1.0 / config.PIXELS_PER_METER)

        self.editor = Editor(width, height, dialogs=TkDialogs(self.root))

        self._build_menu()
        self.canvas_view = CanvasView(self.root, self.editor, on_changed=self._check_quit)
        self.canvas_view.canvas.pack(fill=tk.BOTH, expand=True)
        self.root.bind("<KeyPress>", self._on_key)
        self.root.protocol("WM_DELETE_WINDOW", self.quit)

        self.canvas_view.draw()

    def _initial_size(self) -> tuple[int, int]:
        screen_w = self.root.winfo_screenwidth()
        screen_h = self.root.winfo_screenheight()
        if screen_w <= 0 or screen_h <= 0:
            return config.DEFAULT_WINDOW_SIZE
        return int(screen_w * config.WINDOW_SCREEN_FRACTION), int(screen_h * config.WINDOW_SCREEN_FRACTION)

    def run(self) -> None:
        logger.info("Starting main loop")
        self.root.mainloop()
        logger.info("Main loop ended")

    def quit(self) -> None:
        self.root.quit()

    def _build_menu(self) -> None:
        menu = tk.Menu(self.root)
        self.root.config(menu=menu)

        file_menu = tk.Menu(menu, tearoff=0)
        file_menu.add_command(label="Save...", accelerator="S", command=lambda: self._run(self.editor.save))
        file_menu.add_command(label="Load...", accelerator="L", command=lambda: self._run(self.editor.load))
        file_menu.add_command(label="Clear All", accelerator="C", command=lambda: self._run(self.editor.clear_all))
        file_menu.add_separator()
        file_menu.add_command(label="Exit", accelerator="Esc", command=self.quit)
        menu.add_cascade(label="File", menu=file_menu)

        tool_menu = tk.Menu(menu, tearoff=0)
        for kind in ElementKind:
            tool_menu.add_command(label=TOOL_NAMES[kind], command=lambda kind=kind: self._set_tool(kind))
        tool_menu.add_separator()
        tool_menu.add_command(label="Toggle Track Fill", accelerator="V", command=lambda: self._send_key("v"))
        tool_menu.add_command(label="Increase Gauge", accelerator="+", command=lambda: self._send_key("plus"))
        tool_menu.add_command(label="Decrease Gauge", accelerator="-", command=lambda: self._send_key("minus"))
        menu.add_cascade(label="Tools", menu=tool_menu)

        color_menu = tk.Menu(menu, tearoff=0)
        for key, name, _value in config.PALETTE:
            color_menu.add_command(label=name, accelerator=key, command=lambda key=key: self._send_key(key))
        menu.add_cascade(label="Color", menu=color_menu)

        view_menu = tk.Menu(menu, tearoff=0)
        view_menu.add_command(label="Zoom In", command=lambda: self._zoom_at_center(1))
        view_menu.add_command(label="Zoom Out", command=lambda: self._zoom_at_center(-1))
        view_menu.add_separator()
        for key, name, _value in config.BACKGROUND_PRESETS:
            view_menu.add_command(label=f"Background: {name}", accelerator=key, command=lambda key=key: self._send_key(key))
        menu.add_cascade(label="View", menu=view_menu)

        help_menu = tk.Menu(menu, tearoff=0)
        help_menu.add_command(label="Keyboard Help", accelerator="F1", command=lambda: self._send_key("F1"))
        menu.add_cascade(label="Help", menu=help_menu)

    def _set_tool(self, kind: ElementKind) -> None:
        self.editor.tool = kind
        logger.info("Tool: %s", TOOL_NAMES[kind])
        self.canvas_view.draw()

    def _zoom_at_center(self, direction: int) -> None:
        camera = self.editor.camera
        self.editor.wheel(camera.screen_width / 2, camera.screen_height / 2, direction)
        self.canvas_view.draw()

    def _send_key(self, keysym: str) -> None:
        self.editor.key(keysym)
        self.canvas_view.draw()
        self._check_quit()

    def _run(self, action) -> None:
        action()
        self.canvas_view.draw()

    def _on_key(self, event: tk.Event) -> None:
        self._send_key(event.keysym)

    def _check_quit(self) -> None:
        if self.editor.quit_requested:
            self.quit()


def run_app() -> None:
    configure_logging()
    app = EditorApp()
    app.run()
