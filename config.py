# Configuration values for the track diagram editor.

WINDOW_TITLE = "Track Diagram Editor"

# Used when the screen size cannot be read.
DEFAULT_WINDOW_SIZE = (1024, 768)
WINDOW_SCREEN_FRACTION = 0.9

# 1 world unit = 1 / PIXELS_PER_METER meters at zoom 1.0
PIXELS_PER_METER = 0.01

CAMERA_SCROLL_SPEED = 5.0

ZOOM_MIN = 0.1
ZOOM_MAX = 10.0
ZOOM_STEP = 1.1

# Screen pixels
HIT_THRESHOLD = 8.0
MIN_DRAG_PIXELS = 1.0

RAIL_STROKE_WIDTH = 1.0

POPUP_WIDTH = 150
POPUP_OPTION_HEIGHT = 20
POPUP_PADDING = 5
POPUP_SWATCH_SIZE = 16
POPUP_SWATCH_GAP = 5

# Ordered (key, name, color). First match wins when keys overlap.
PALETTE = [
    ("1", "Red", "#FF0000"),
    ("2", "Blue", "#0000FF"),
    ("3", "Yellow", "#FFFF00"),
    ("4", "Green", "#00FF00"),
    ("5", "Turquoise", "#00CED1"),
]

BACKGROUND_PRESETS = [
    ("F2", "Dark gray", "#323232"),
    ("F3", "Bluish gray", "#646478"),
    ("F4", "Ice white", "#F0F0F0"),
]

DEFAULT_BACKGROUND = "#000000"

DEFAULT_GAUGE = 8.0
GAUGE_MIN = 1.0
GAUGE_MAX = 50.0
GAUGE_STEP = 1.0

CIRCUIT_BAR_LENGTH = 30.0
CIRCUIT_STROKE_WIDTH = 3.0
SWITCH_RADIUS = 10.0

HOVER_LIGHTEN = 60

PROJECT_EXTENSION = ".json"

LOG_FILE = "editor.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

THEME = {
    "moving": "#FFA500",
    "selected": "#FFFFFF",
    "popup_bg": "#323232",
    "popup_outline": "#5A5A5A",
    "popup_text": "#FFFFFF",
    "swatch_outline": "#FFFFFF",
    "status_text": "#B7BCC3",
    "help_bg": "#000000",
    "help_text": "#FFFFFF",
}

STATUS_FONT = ("Consolas", 9)
POPUP_FONT = ("Segoe UI", 9)
HELP_FONT = ("Consolas", 10)

HELP_TEXT = """=== HELP (press F1 or ESC to close) ===

ELEMENT TOOL (for adding):
 T: Straight track | I: Track circuit | K: Simple switch

ADD:
 - Straight track: left-click on empty space, drag and release.
                   Length in meters, gauge in world units.
 - Others: left-click on empty space to place.
   - Track circuit: a bar-and-stem symbol (stem right, or left if inverted).
                    Vertical bar 30 and stroke 3 world units by default.
                    Horizontal stem is half the vertical bar.
   - Simple switch: a circle, radius 10 world units by default.

MOVE:
 - Left-click on an element and drag.

EDIT / DELETE:
 - Right-click on an element to open its menu
   (change color, flip circuit orientation, delete).
 - Left-click on a menu option.

NAVIGATION:
 Arrow keys: pan camera
 Mouse wheel: zoom in/out around the cursor

NEXT ELEMENT:
 1-5: default color
 +, -: increase/decrease default track gauge (world units)
 V: toggle default track mode (filled / outlined)

BACKGROUND: F2 dark gray | F3 bluish gray | F4 ice white
FILE: S save | L load | C clear all
QUIT: ESC closes help / menu, otherwise quits
"""
