import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Bearer token required by the read API
API_TOKEN = os.getenv("API_TOKEN", "dev-token")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

MQTT_URL = os.getenv("MQTT_URL", "mqtt://localhost:1883")
MQTT_SUB_TOPIC = os.getenv("MQTT_SUB_TOPIC", "aiface/+/sub")
MQTT_CLIENT_ID = os.getenv("MQTT_CLIENT_ID", "")
MQTT_ENABLED = bool(int(os.getenv("MQTT_ENABLED", "1")))

# "sqlite" (default) or "mysql"
DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
SQLITE_PATH = os.getenv("SQLITE_PATH", "data/attendance.sqlite")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply the schema on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
