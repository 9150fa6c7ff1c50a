import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendpro_test"),
}

COMPANY_TIMEZONE = "UTC"

FACE_ORACLE_URL = "http://oracle.invalid"
FACE_ORACLE_API_KEY = None
FACE_ORACLE_TIMEOUT_SECONDS = 1.0
FACE_MATCH_THRESHOLD = 85

ZONE_SELECTION = "first"

DEFAULT_ADMIN_RECIPIENT_ID = 1

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
