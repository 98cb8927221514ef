from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from placement.config import DATABASE_URL
from placement.models import Base


def build_engine(url: str = DATABASE_URL, **kwargs):
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


def _ensure_sqlite_dir(url: str) -> None:
    prefix = "sqlite:///"
    if url.startswith(prefix) and ":memory:" not in url:
        Path(url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    if bind is None:
        _ensure_sqlite_dir(DATABASE_URL)
    Base.metadata.create_all(bind=bind if bind is not None else engine)
