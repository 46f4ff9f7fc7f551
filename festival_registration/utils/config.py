"""Environment-driven settings for the registration desk."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_DB_PATH = "data/participants.db"
DEFAULT_LOG_LEVEL = "INFO"

_ENV_LOADED = False


def load_env(env_path: str = ".env") -> None:
    """Load settings from .env file once; variables already set win."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    load_dotenv(env_path, override=False)
    _ENV_LOADED = True


def get_database_url() -> str:
    """
    Resolve the SQLAlchemy URL for the participant database.

    Returns:
        PARTICIPANTS_DATABASE_URL when set, otherwise a SQLite URL built from
        PARTICIPANTS_DB_PATH (default: data/participants.db)

    Behavior:
        - Creates the parent directory of the SQLite file if missing
    """
    load_env()

    url = os.getenv("PARTICIPANTS_DATABASE_URL")
    if url:
        return url

    db_path = Path(os.getenv("PARTICIPANTS_DB_PATH", DEFAULT_DB_PATH))
    if db_path.parent and not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)

    return f"sqlite:///{db_path}"


def get_log_level() -> str:
    """
    Log level name from LOG_LEVEL.

    Returns:
        A registered logging level name; INFO when unset or unknown
    """
    load_env()
    name = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name
