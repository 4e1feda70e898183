import os
from pathlib import Path

from dotenv import load_dotenv

# Explicitly load .env from project root (parent of app/)
ROOT_DIR = Path(__file__).parent.parent
load_dotenv(ROOT_DIR / ".env")

ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Falls back to the request's own scheme://host when unset
PUBLIC_BASE_URL = (os.getenv("PUBLIC_BASE_URL") or "").rstrip("/") or None

DATABASE_URL = os.getenv("DATABASE_URL")
if ENVIRONMENT == "prod" and not DATABASE_URL:
    raise RuntimeError("DATABASE_URL must be set in production")
if not DATABASE_URL:
    # SQLite for local dev, stored next to the app folder
    DATABASE_URL = f"sqlite:///{ROOT_DIR / 'linkshort_dev.db'}"
