"""Runtime settings read from the environment."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from qotd.db import DEFAULT_DB_PATH

CONTENT_DIR = Path(__file__).parent / "content"
BUNDLED_QUESTIONS = CONTENT_DIR / "questions.csv"


@dataclass
class Settings:
    db_path: str = DEFAULT_DB_PATH
    questions_path: str = str(BUNDLED_QUESTIONS)
    log_level: str = "WARNING"
    nav_interval: float = 0.0


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _log_level_env(name: str, default: str) -> str:
    level = (os.environ.get(name) or default).upper()
    if not isinstance(logging.getLevelName(level), int):
        return default
    return level


def load_settings() -> Settings:
    """Build Settings from QOTD_* environment variables, falling back to defaults."""
    return Settings(
        db_path=os.environ.get("QOTD_DB_PATH") or DEFAULT_DB_PATH,
        questions_path=os.environ.get("QOTD_QUESTIONS_PATH") or str(BUNDLED_QUESTIONS),
        log_level=_log_level_env("QOTD_LOG_LEVEL", "WARNING"),
        nav_interval=_float_env("QOTD_NAV_INTERVAL", 0.0),
    )
