import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendpro"),
}

# All official-time comparisons happen in this zone, whatever the server clock says.
COMPANY_TIMEZONE = os.getenv("COMPANY_TIMEZONE", "UTC")

FACE_ORACLE_URL = os.getenv("FACE_ORACLE_URL", "http://localhost:8500")
FACE_ORACLE_API_KEY = os.getenv("FACE_ORACLE_API_KEY")
FACE_ORACLE_TIMEOUT_SECONDS = float(os.getenv("FACE_ORACLE_TIMEOUT_SECONDS", "10"))
FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "85"))

# "first" (configured order) or "nearest"
ZONE_SELECTION = os.getenv("ZONE_SELECTION", "first")

# Receives late alerts for users without a manager
DEFAULT_ADMIN_RECIPIENT_ID = int(os.getenv("DEFAULT_ADMIN_RECIPIENT_ID", "1")) or None

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
