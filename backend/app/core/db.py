from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings


class Base(DeclarativeBase):
    pass


def get_engine(database_url: str = None) -> Engine:
    """
    Returns an engine for the record store.
    Falls back to the configured DATABASE_URL when no URL is given
    """
    url = database_url or settings.DATABASE_URL
    return create_engine(url, pool_pre_ping=True, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create the record tables if they do not exist yet."""
    # Registers the mapped tables on Base.metadata
    from app.models import records  # noqa: F401

    Base.metadata.create_all(engine)
