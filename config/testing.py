SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
PORT = 5000

# No real devices under test; fakes are injected into create_app()
CAMERA_INDEX = None
CAMERA_IDEAL_WIDTH = 1280
CAMERA_IDEAL_HEIGHT = 720

KIOSK_LATITUDE = -8.8383
KIOSK_LONGITUDE = 13.2344

PUNCH_RESET_DELAY_SECONDS = 0.5
INACTIVITY_TIMEOUT_SECONDS = 60

SEED_DEMO_DATA = True
DEFAULT_ROLE = "Administrador"
