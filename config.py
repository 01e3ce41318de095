import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Reads POSTGRES_* and friends from .env if present
load_dotenv()

POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = int(os.getenv("POSTGRES_PORT", "5432"))
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "")
POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
POSTGRES_SSL = os.getenv("POSTGRES_SSL", "true").strip().lower() in ("1", "true", "yes", "on")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "80"))


def get_database_url() -> str:
    """
    DATABASE_URL wins when set (tests point it at SQLite),
    otherwise the URL is assembled from POSTGRES_* variables
    """
    url = (os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url

    url = (
        f"postgresql+psycopg2://{POSTGRES_USER}:{quote_plus(POSTGRES_PASSWORD)}"
        f"@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    )
    if POSTGRES_SSL:
        url += "?sslmode=require"
    return url
