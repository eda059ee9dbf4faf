import os

from config import _optional_float, _optional_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
PORT = int(os.getenv("PORT", "5000"))

# Webcam of the kiosk (OpenCV device index); "none" disables the camera
CAMERA_INDEX = _optional_int("CAMERA_INDEX", 0)
CAMERA_IDEAL_WIDTH = int(os.getenv("CAMERA_IDEAL_WIDTH", "1280"))
CAMERA_IDEAL_HEIGHT = int(os.getenv("CAMERA_IDEAL_HEIGHT", "720"))

# Fixed position of the kiosk; leave empty when unknown
KIOSK_LATITUDE = _optional_float("KIOSK_LATITUDE")
KIOSK_LONGITUDE = _optional_float("KIOSK_LONGITUDE")

PUNCH_RESET_DELAY_SECONDS = float(os.getenv("PUNCH_RESET_DELAY_SECONDS", "4"))
INACTIVITY_TIMEOUT_SECONDS = float(os.getenv("INACTIVITY_TIMEOUT_SECONDS", str(15 * 60)))

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))
DEFAULT_ROLE = os.getenv("DEFAULT_ROLE", "Administrador")
