import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "attendpro"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendpro"),
}

COMPANY_TIMEZONE = os.getenv("COMPANY_TIMEZONE", "UTC")

FACE_ORACLE_URL = os.getenv("FACE_ORACLE_URL", "http://face-oracle:8500")
FACE_ORACLE_API_KEY = os.getenv("FACE_ORACLE_API_KEY")
FACE_ORACLE_TIMEOUT_SECONDS = float(os.getenv("FACE_ORACLE_TIMEOUT_SECONDS", "8"))
FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "85"))

ZONE_SELECTION = os.getenv("ZONE_SELECTION", "first")

DEFAULT_ADMIN_RECIPIENT_ID = int(os.getenv("DEFAULT_ADMIN_RECIPIENT_ID", "0")) or None

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
