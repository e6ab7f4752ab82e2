from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from meeting_tracker.core.config import settings


def build_engine(url: str) -> Engine:
    """SQLite gets a single-file setup for local runs; Postgres gets a pool."""
    if url.startswith("sqlite"):
        return create_engine(url, future=True, connect_args={"check_same_thread": False})

    connect_args = {}
    if "supabase" in url.lower():
        connect_args["sslmode"] = "require"

    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
