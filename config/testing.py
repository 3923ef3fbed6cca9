import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fellowship_test_db"),
}

FRONTEND_URL = "http://frontend.test"

LATE_GRACE_MINUTES = 0
GEOFENCE_RADIUS_METERS = 100.0
ENFORCE_GEOFENCE = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
