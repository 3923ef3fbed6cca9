import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fellowship_db"),
}

# Base URL of the front-end; QR codes deep-link to {FRONTEND_URL}/attendance/check-in/<session_id>
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))
GEOFENCE_RADIUS_METERS = float(os.getenv("GEOFENCE_RADIUS_METERS", "100"))
# Geofencing is advisory unless enabled.
ENFORCE_GEOFENCE = bool(int(os.getenv("ENFORCE_GEOFENCE", "0")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
