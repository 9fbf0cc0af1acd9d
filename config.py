# config.py
import os
from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8081"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./crack_reports.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
# unset: callers wait on the pool without a deadline
DB_POOL_TIMEOUT = float(os.environ["DB_POOL_TIMEOUT"]) if os.getenv("DB_POOL_TIMEOUT") else None

JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))

BCRYPT_ROUNDS = 12

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "public/uploads")
UPLOAD_URL_PREFIX = os.getenv("UPLOAD_URL_PREFIX", "/uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))


def validate_runtime_config() -> None:
    if not JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set before the service starts.")
