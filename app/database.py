# app/database.py
"""
Database engine, session factory and table creation.
SQLAlchemy against PostgreSQL in production; SQLite URLs are accepted for
local runs and tests.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and (url.endswith(":memory:") or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"))


def make_engine(url: str):
    """Build an engine with pool settings suited to the backend."""
    if _is_memory_sqlite(url):
        # one shared connection so every session sees the same in-memory DB
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    if _is_sqlite(url):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all tables. Safe to call multiple times.
    Models are imported here so they are registered on Base.metadata.
    """
    from app.models.vehicle import Vehicle, MaintenanceRecord   # noqa
    from app.models.shipment import Shipment                     # noqa
    from app.models.telemetry import TelemetryRecord             # noqa

    Base.metadata.create_all(bind=bind or engine)
