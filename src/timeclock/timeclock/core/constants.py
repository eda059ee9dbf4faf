"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PUNCH_RESET_DELAY_SECONDS = 4.0
DEFAULT_INACTIVITY_TIMEOUT_SECONDS = 15 * 60
DEFAULT_HISTORY_LIMIT = 50

DEFAULT_VACATION_BALANCE_DAYS = 22
BIOMETRIC_REGISTERED = "registada"

CAMERA_FACING_USER = "user"
DEFAULT_CAMERA_WIDTH = 1280
DEFAULT_CAMERA_HEIGHT = 720
CAPTURE_JPEG_QUALITY = 80
PREVIEW_JPEG_QUALITY = 85

# Media ready states (same scale as HTMLMediaElement.readyState)
HAVE_NOTHING = 0
HAVE_METADATA = 1
HAVE_CURRENT_DATA = 2

ACTIVITY_EVENTS = frozenset({"mousemove", "keydown", "click", "scroll"})
