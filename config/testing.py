import os

SECRET_KEY = "test-secret"

API_TOKEN = "test-token"

HOST = "127.0.0.1"
PORT = 3000

MQTT_URL = ""
MQTT_SUB_TOPIC = "aiface/+/sub"
MQTT_CLIENT_ID = ""
MQTT_ENABLED = False

DB_ENGINE = "sqlite"
SQLITE_PATH = os.getenv("SQLITE_PATH", "data/test-attendance.sqlite")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
