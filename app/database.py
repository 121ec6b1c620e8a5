# app/database.py
"""
Local database engine, session management, and table creation.
Only used when DATA_BACKEND=sql; the remote backend never touches it.
All models are imported in create_tables() so one call creates every table.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool   # one shared in-memory DB
        return create_engine(database_url, **kwargs)
    return create_engine(
        database_url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine: Engine):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.profile import Profile                 # noqa
    from app.models.vehicle import Vehicle                 # noqa
    from app.models.driver import Driver                   # noqa
    from app.models.trip import Trip                       # noqa
    from app.models.maintenance_log import MaintenanceLog  # noqa
    from app.models.fuel_entry import FuelEntry            # noqa
    from app.models.expense import Expense                 # noqa

    Base.metadata.create_all(bind=engine)
