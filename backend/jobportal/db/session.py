from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from jobportal.core.config import settings

DB_URL = settings.DATABASE_URL

# SQLite-friendly connect args
is_sqlite = DB_URL.startswith("sqlite")
connect_args = {"check_same_thread": False, "timeout": 30} if is_sqlite else {}

engine = create_engine(
    DB_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# SQLite leaves foreign keys off unless asked
if is_sqlite:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, connection_record):
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.close()

SessionLocal = sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a request-scoped Session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
