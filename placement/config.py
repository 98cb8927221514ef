import logging
import os


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


def _str_env(name: str, default: str) -> str:
    return str(os.getenv(name, default)).strip() or default


def _log_level_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, "")).strip().upper()
    level = logging.getLevelName(raw) if raw else default
    return level if isinstance(level, int) else default


DATABASE_URL = _str_env("PLACEMENT_DATABASE_URL", "sqlite:///./placement/data/placement.db")
API_PORT = _int_env("PLACEMENT_API_PORT", 8010)
BIND_HOST = _str_env("PLACEMENT_BIND_HOST", "0.0.0.0")
LOG_LEVEL = _log_level_env("PLACEMENT_LOG_LEVEL", logging.INFO)
LOG_FILE = os.getenv("PLACEMENT_LOG_FILE") or None
