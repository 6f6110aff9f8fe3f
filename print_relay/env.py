import os
from dotenv import load_dotenv

load_dotenv()  # reads .env from the cwd

APP_NAME = "KAMAYAN POS Print Server"
APP_VERSION = "1.0.0"
APP_ENV = os.getenv("APP_ENV", "development")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

# "a.com,b.com" -> ["a.com", "b.com"]; unset means any origin
_origins = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in _origins.split(",") if o.strip()] or ["*"]

DEFAULT_PRINTER_PORT = int(os.getenv("DEFAULT_PRINTER_PORT", "9100"))
PRINT_TIMEOUT_SECONDS = float(os.getenv("PRINT_TIMEOUT_SECONDS", "10"))
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "./logs/audit.jsonl")
