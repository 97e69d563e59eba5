import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# No defaults: startup fails if these are missing
API_TOKEN = os.getenv("API_TOKEN", "")
MQTT_URL = os.getenv("MQTT_URL", "")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

MQTT_SUB_TOPIC = os.getenv("MQTT_SUB_TOPIC", "aiface/+/sub")
MQTT_CLIENT_ID = os.getenv("MQTT_CLIENT_ID", "")
MQTT_ENABLED = bool(int(os.getenv("MQTT_ENABLED", "1")))

DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
SQLITE_PATH = os.getenv("SQLITE_PATH", "/app/data/attendance.sqlite")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
