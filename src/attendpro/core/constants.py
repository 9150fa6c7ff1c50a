"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Role

DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 366
DEFAULT_LATE_GRACE_MINUTES = 0

DEFAULT_CLOCK_IN_TIME = "09:00"
DEFAULT_CLOCK_OUT_TIME = "18:00"
DEFAULT_COMPANY_NAME = "AttendPro Enterprise"
DEFAULT_TIMEZONE = "UTC"
SYSTEM_CONFIG_ID = "global"

# Face comparison acceptance: oracle must report a match with at least this confidence.
DEFAULT_MATCH_THRESHOLD = 85
DEFAULT_ORACLE_TIMEOUT_SECONDS = 10.0

# Stored in exports when a session was opened with the touch sensor.
FINGERPRINT_SENTINEL = "biometric_fingerprint_verified"

EARTH_RADIUS_METERS = 6371000.0

MAX_FACE_IMAGE_SIDE = 640
FACE_JPEG_QUALITY = 80

PRIVILEGED_ROLES = frozenset({Role.BOSS, Role.MANAGER})
