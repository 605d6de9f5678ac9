import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

LATE_CUTOFF = os.getenv("LATE_CUTOFF", "08:15")
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Africa/Dakar")
CHECKOUT_MIN_GAP_SECONDS = int(os.getenv("CHECKOUT_MIN_GAP_SECONDS", "60"))
MAX_DOCUMENT_BYTES = int(os.getenv("MAX_DOCUMENT_BYTES", str(10 * 1024 * 1024)))
UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads/justifications")
