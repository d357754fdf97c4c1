import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# An empty host or the ISI_DISINI placeholder keeps the app offline (nothing is persisted).
DB_CONFIG = {
    "host": os.getenv("DB_HOST", ""),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", ""),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absensi_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "SD Negeri 5 Bilato")
SCHOOL_CITY = os.getenv("SCHOOL_CITY", "Bilato")

SYNC_POLL_SECONDS = float(os.getenv("SYNC_POLL_SECONDS", "5"))
