import os
from pathlib import Path

# Package directory
BASE_DIR = Path(__file__).resolve().parent

# Sessions
SESSION_COOKIE_NAME = "EXAUTH"
SESSION_KEY_LENGTH = 48

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Templates and bundled assets
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

# Static files are immutable for the life of a release (180 days)
STATIC_MAX_AGE = 180 * 24 * 60 * 60


def get_database_url() -> str:
    """Return the configured connection string, failing hard when absent."""
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL must be set")
    return url
