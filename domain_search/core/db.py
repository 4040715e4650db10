from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings


def _connect_args(url: str) -> Dict[str, Any]:
    # FastAPI runs sync endpoints in a threadpool, sqlite pins connections to a thread
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db() -> Iterator[Session]:
    """Request-scoped session; the search pipeline never opens its own."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
