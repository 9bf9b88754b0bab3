"""
Route Replay - Configuration
All constants and settings for the route replayer.
"""

import os

# ==================== Screen Dimensions ====================
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 420
FPS = 60

# ==================== Playback Settings ====================
# Multipliers applied to wall-clock time when advancing through the route
SPEED_MULTIPLIERS = [0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 25.0, 50.0, 100.0]
DEFAULT_SPEED_INDEX = 2  # Start at 1.0x

# Headless driver
HEADLESS_FPS = 30  # Ticks per second when no display is used
HEADLESS_REPORT_INTERVAL = 1.0  # Seconds between telemetry lines

# ==================== Geodesy ====================
EARTH_RADIUS_M = 6371000  # Mean Earth radius used by haversine
MS_TO_KMH = 3.6  # meters per second to kilometers per hour
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# ==================== Route Source ====================
PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))
ROUTE_PATH = os.path.join(PROJECT_DIR, 'assets', 'routes', 'dummy-route.json')  # Bundled sample route
ROUTE_FETCH_TIMEOUT = 30  # seconds
MAX_FETCH_RETRY_ATTEMPTS = 3  # Retry failed downloads this many times
FETCH_RETRY_DELAY = 2.0  # Seconds between retries

# ==================== Colors (RGB tuples) ====================
COLOR_TEXT = (255, 255, 255)  # White
COLOR_LABEL = (180, 180, 180)  # Light gray
COLOR_BORDER = (200, 200, 200)  # Border gray
COLOR_PANEL_BG = (40, 40, 40)  # Dark gray background
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_GREEN = (0, 255, 0)
COLOR_RED = (255, 0, 0)
COLOR_VEHICLE = (255, 0, 0)  # Red

# ==================== UI Font Settings ====================
FONT_TITLE_SIZE = 16
FONT_LABEL_SIZE = 14
FONT_VALUE_SIZE = 18
FONT_SMALL_SIZE = 12
FONT_FAMILY = 'monospace'  # Use monospace for consistent alignment

# ==================== Instrument Panel Layout ====================
INSTRUMENT_PANEL_PADDING = 10  # Pixels between sections
INSTRUMENT_LINE_SPACING = 20  # Pixels between lines
INSTRUMENT_SECTION_SPACING = 30  # Pixels between sections
INSTRUMENT_VALUE_INDENT = 20  # Pixels to indent values
BUTTON_WIDTH = 110
BUTTON_HEIGHT = 30

# ==================== Debug Settings ====================
DEBUG_MODE = False  # Enable per-tick debug prints
SHOW_FPS = True  # Show FPS counter

# ==================== Coordinate System Notes ====================
# Latitude: -90 to +90 (positive = North)
# Longitude: -180 to +180 (positive = East)
# Positions are (lat, lng) tuples in degrees
# Interpolation is linear in degree space; distances are great-circle meters
