import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fellowship_db"),
}

FRONTEND_URL = os.getenv("FRONTEND_URL", "https://fellowship.example.com")

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))
GEOFENCE_RADIUS_METERS = float(os.getenv("GEOFENCE_RADIUS_METERS", "100"))
ENFORCE_GEOFENCE = bool(int(os.getenv("ENFORCE_GEOFENCE", "0")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
