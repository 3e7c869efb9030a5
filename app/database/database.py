from sqlmodel import Session, SQLModel, create_engine

import app.models  # noqa: F401  (registers every table on SQLModel.metadata)
from app.core.config import get_settings

DATABASE_URL = get_settings().DATABASE_URL

# SQLite connections are shared with the anyio worker threads that commit
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)


def create_db_and_tables():
    """Create every table registered on `SQLModel.metadata` that does not exist yet."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency yielding one session per request.

    Services only flush; the router commits once the whole operation succeeded, and the
    session is closed when the request ends.
    """
    with Session(engine) as session:
        yield session
