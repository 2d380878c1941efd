from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from docportal.core.config import settings

_engine = None


def create_db_engine(db_url: str):
    """
    Build an engine for the given URL.

    "sqlite://" is an in-memory database; StaticPool keeps the single connection
    alive so every session in the process sees the same state.
    """
    if db_url.startswith("sqlite"):
        # SQLite fix for multithreading
        connect_args = {"check_same_thread": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(db_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(db_url, connect_args=connect_args)
    return create_engine(db_url, pool_pre_ping=True)


def get_engine():
    global _engine

    if _engine is not None:
        return _engine

    # Fallback to an ephemeral in-memory database
    _engine = create_db_engine(settings.DATABASE_URL or "sqlite://")
    return _engine


engine = get_engine()


def init_db(bind=None) -> None:
    """Create all tables that don't exist yet."""
    # Import models so they register with SQLModel.metadata
    import docportal.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_db():
    with Session(engine) as session:
        yield session
