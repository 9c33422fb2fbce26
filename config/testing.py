import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "q361_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_DAYS = 1

NOTIFICATION_POLL_SECONDS = 300
NOTIFICATION_COUNT_URL = ""
NOTIFICATION_HTTP_TIMEOUT = 1.0
NOTIFICATION_HTTP_HEADERS = {}

AUTO_INIT_DB = False
AUTO_SEED_DB = False
