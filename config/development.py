import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_db"),
}

DEBUG = True

# Apply database/schema.sql at startup; every statement is CREATE ... IF NOT EXISTS
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "SD Negeri 5 Bilato")
SCHOOL_CITY = os.getenv("SCHOOL_CITY", "Bilato")

# Minimum seconds between change polls of the document store
SYNC_POLL_SECONDS = float(os.getenv("SYNC_POLL_SECONDS", "2"))
